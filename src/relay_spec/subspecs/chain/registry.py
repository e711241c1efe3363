"""
Chain profile registry for the relay network families.

Every family shares one runtime shape. A family is therefore plain data: a
capability descriptor, economic constants and the names of its profiles.
Each family produces four chain specifications:

- staging: a live-type network bootstrapped from the fixed accounts in
  `res/bootstrap.yaml`, reporting to telemetry.
- development: a single "Alice" validator, for one-node development.
- local testnet: "Alice" and "Bob" validators, for multi-node testing.
- pre-baked: the embedded `res/<family>.json` document, loaded verbatim.

Generated profiles invoke the genesis assembler; the pre-baked profile skips
key derivation and assembly entirely.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import cache
from pathlib import Path

from typing_extensions import Final

from relay_spec import config
from relay_spec.types import InvalidAuthoritySet, MalformedChainSpecBytes, StrictBaseModel

from ..genesis import (
    STAGING_PRESET,
    TESTNET_PRESET,
    AuthorityKeySet,
    CapabilityDescriptor,
    EconomicConstants,
    GenesisState,
    StakingPreset,
    build_genesis,
)
from ..keys import AccountId, KeyScheme, canonical_roster, derive_account_id, derive_public
from ..keys.roster import STASH_SUFFIX
from .bootstrap import load_bootstrap
from .config import (
    DEFAULT_ECONOMICS,
    DEFAULT_PROTOCOL_ID,
    KUSAMA_STAGING_TELEMETRY_URL,
    POLKADOT_STAGING_TELEMETRY_URL,
    ROCOCO_STAGING_TELEMETRY_URL,
    STAGING_TELEMETRY_VERBOSITY,
    WESTEND_STAGING_TELEMETRY_URL,
)
from .runtime import load_runtime_code
from .spec import ChainProfile, ChainSpec, ChainType
from .telemetry import TelemetryEndpoints

logger = logging.getLogger(__name__)

DEV_AUTHORITIES: Final = ("Alice",)
"""Validator seeds of every development profile."""

LOCAL_AUTHORITIES: Final = ("Alice", "Bob")
"""Validator seeds of every local testnet profile."""


def authority_keys_from_seed(seed: str, capabilities: CapabilityDescriptor) -> AuthorityKeySet:
    """
    Derive the full key set of a development validator.

    The stash comes from `<seed>//stash`; the controller and every session
    key come from the seed itself. Accounts and session keys are sr25519,
    except the finality key, which is Ed25519. Finality and discovery keys
    are only derived when the network has those roles.

    Raises:
        KeyDerivationError: If the seed is malformed.
    """
    session_key = derive_public(seed, KeyScheme.SR25519)
    return AuthorityKeySet(
        stash=derive_account_id(f"{seed}{STASH_SUFFIX}"),
        controller=derive_account_id(seed),
        block_production=session_key,
        finality=derive_public(seed, KeyScheme.ED25519) if capabilities.finality else None,
        peer_online=session_key,
        validator=session_key,
        discovery=session_key if capabilities.discovery else None,
    )


def check_authorities(
    authorities: Sequence[AuthorityKeySet],
    capabilities: CapabilityDescriptor,
    preset: StakingPreset,
) -> None:
    """
    Reject authority lists that cannot bootstrap a network.

    Raises:
        InvalidAuthoritySet: If the list is empty while validators are
            required, repeats a stash account, or carries finality or
            discovery keys that do not match the network's roles.
    """
    if not authorities and preset.minimum_validator_count >= 1:
        raise InvalidAuthoritySet(
            f"at least {preset.minimum_validator_count} authority required, got none"
        )

    stashes = [authority.stash for authority in authorities]
    if len(set(stashes)) != len(stashes):
        raise InvalidAuthoritySet("authority list repeats a stash account")

    for authority in authorities:
        if (authority.finality is not None) != capabilities.finality:
            raise InvalidAuthoritySet(
                f"authority {authority.stash.to_hex()} finality key does not match "
                f"the network's finality role ({capabilities.finality})"
            )
        if (authority.discovery is not None) != capabilities.discovery:
            raise InvalidAuthoritySet(
                f"authority {authority.stash.to_hex()} discovery key does not match "
                f"the network's discovery role ({capabilities.discovery})"
            )


@cache
def _read_document(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


class ProfileNames(StrictBaseModel):
    """Human-readable name and machine identifier of one profile."""

    name: str
    chain_id: str


class NetworkFamily(StrictBaseModel):
    """
    One relay network and the profiles it produces.

    Everything that differs between networks is a field here. The factories
    are shared and never branch on the network's name.
    """

    name: str
    """Lowercase family name, e.g. "polkadot". Also the runtime and document stem."""

    display_name: str
    """Capitalized name used in messages, e.g. "Polkadot"."""

    capabilities: CapabilityDescriptor
    economics: EconomicConstants = DEFAULT_ECONOMICS

    staging: ProfileNames
    development: ProfileNames
    local: ProfileNames

    telemetry_url: str
    """Telemetry endpoint of the staging profile."""

    protocol_id: str = DEFAULT_PROTOCOL_ID

    def runtime_code(self) -> bytes:
        """
        Load the family's compiled runtime.

        Raises:
            MissingRuntimeCode: If the blob is not available.
        """
        return load_runtime_code(self.display_name, self.name)

    def _profile(
        self,
        names: ProfileNames,
        chain_type: ChainType,
        telemetry: TelemetryEndpoints | None = None,
    ) -> ChainProfile:
        return ChainProfile(
            name=names.name,
            chain_id=names.chain_id,
            chain_type=chain_type,
            boot_nodes=[],
            telemetry_endpoints=telemetry,
            protocol_id=self.protocol_id,
        )

    def staging_genesis(self) -> GenesisState:
        """
        Assemble the staging genesis from the bootstrap table.

        Raises:
            MissingRuntimeCode: If the runtime blob is not available.
            InvalidAuthoritySet: If the table has no usable authorities.
        """
        code = self.runtime_code()
        bootstrap = load_bootstrap(self.name)
        authorities = bootstrap.key_sets
        check_authorities(authorities, self.capabilities, STAGING_PRESET)
        return build_genesis(
            code,
            authorities,
            bootstrap.endowed_accounts,
            self.economics,
            self.capabilities,
            STAGING_PRESET,
            root_key=bootstrap.root_key,
            stashes=[authority.stash for authority in authorities],
        )

    def testnet_genesis(
        self,
        authorities: Sequence[AuthorityKeySet],
        root_key: AccountId | None = None,
        endowed: Sequence[AccountId] | None = None,
        code: bytes | None = None,
    ) -> GenesisState:
        """
        Assemble a test genesis from explicit parameters.

        Args:
            authorities: Bootstrap validators, in order.
            root_key: Administrative account. Defaults to the first endowed
                account on networks that have one; ignored on the others.
            endowed: Accounts credited the endowment. Defaults to the
                canonical development roster. Authority stashes missing from
                this list are credited the bonded amount; the roster already
                holds every development stash.
            code: Runtime blob. Defaults to the family's runtime.

        Raises:
            MissingRuntimeCode: If no code is given and the blob is absent.
            InvalidAuthoritySet: If the authority list is unusable, or the
                network needs a root account and none can be chosen.
        """
        code = self.runtime_code() if code is None else code
        check_authorities(authorities, self.capabilities, TESTNET_PRESET)
        endowed_accounts = canonical_roster() if endowed is None else list(endowed)

        if self.capabilities.root_key:
            if root_key is None:
                if not endowed_accounts:
                    raise InvalidAuthoritySet(
                        f"{self.display_name} needs a root account, but none was given "
                        "and no account is endowed"
                    )
                root_key = endowed_accounts[0]
        elif root_key is not None:
            logger.warning("%s has no root account; ignoring root key", self.display_name)
            root_key = None

        already_endowed = set(endowed_accounts)
        return build_genesis(
            code,
            authorities,
            endowed_accounts,
            self.economics,
            self.capabilities,
            TESTNET_PRESET,
            root_key=root_key,
            stashes=[a.stash for a in authorities if a.stash not in already_endowed],
        )

    def _seeded_genesis(self, seeds: Sequence[str]) -> GenesisState:
        authorities = [authority_keys_from_seed(seed, self.capabilities) for seed in seeds]
        return self.testnet_genesis(authorities)

    def staging_config(self) -> ChainSpec:
        """
        Staging profile: live-type, bootstrap accounts, telemetry enabled.

        Raises:
            MalformedTelemetryEndpoint: If the telemetry constant is invalid.
            MissingRuntimeCode: If the runtime blob is not available.
            InvalidAuthoritySet: If the family has no staging authorities.
        """
        telemetry = TelemetryEndpoints.new([(self.telemetry_url, STAGING_TELEMETRY_VERBOSITY)])
        profile = self._profile(self.staging, ChainType.LIVE, telemetry)
        logger.info("Building %s staging chain specification", self.display_name)
        return ChainSpec.from_genesis(profile, self.staging_genesis)

    def development_config(self) -> ChainSpec:
        """
        Development profile: a single "Alice" validator.

        Raises:
            MissingRuntimeCode: If the runtime blob is not available.
        """
        profile = self._profile(self.development, ChainType.DEVELOPMENT)
        logger.info("Building %s development chain specification", self.display_name)
        return ChainSpec.from_genesis(profile, lambda: self._seeded_genesis(DEV_AUTHORITIES))

    def local_testnet_config(self) -> ChainSpec:
        """
        Local testnet profile: "Alice" and "Bob" validators.

        Raises:
            MissingRuntimeCode: If the runtime blob is not available.
        """
        profile = self._profile(self.local, ChainType.LOCAL)
        logger.info("Building %s local testnet chain specification", self.display_name)
        return ChainSpec.from_genesis(profile, lambda: self._seeded_genesis(LOCAL_AUTHORITIES))

    def load_config(self, res_dir: Path | None = None) -> ChainSpec:
        """
        Load the family's pre-baked chain specification.

        Raises:
            MalformedChainSpecBytes: If the document is absent or malformed.
        """
        path = (res_dir or config.RES_DIR) / f"{self.name}.json"
        logger.info("Loading %s chain specification from %s", self.display_name, path)
        return ChainSpec.from_json_bytes(_read_document(path), source=str(path))


_FULL_RELAY = CapabilityDescriptor(
    finality=True,
    discovery=True,
    elected_council=True,
    technical_committee=True,
    democracy=True,
    membership=True,
    vesting=True,
    legacy_claims=True,
    root_key=False,
)
"""Governed relay networks: every subsystem except a root account."""

POLKADOT: Final = NetworkFamily(
    name="polkadot",
    display_name="Polkadot",
    capabilities=_FULL_RELAY,
    staging=ProfileNames(name="Polkadot Staging Testnet", chain_id="polkadot_staging_testnet"),
    development=ProfileNames(name="Development", chain_id="dev"),
    local=ProfileNames(name="Local Testnet", chain_id="local_testnet"),
    telemetry_url=POLKADOT_STAGING_TELEMETRY_URL,
)

KUSAMA: Final = NetworkFamily(
    name="kusama",
    display_name="Kusama",
    capabilities=_FULL_RELAY,
    staging=ProfileNames(name="Kusama Staging Testnet", chain_id="kusama_staging_testnet"),
    development=ProfileNames(name="Development", chain_id="kusama_dev"),
    local=ProfileNames(name="Kusama Local Testnet", chain_id="kusama_local_testnet"),
    telemetry_url=KUSAMA_STAGING_TELEMETRY_URL,
)

WESTEND: Final = NetworkFamily(
    name="westend",
    display_name="Westend",
    capabilities=CapabilityDescriptor(
        finality=True,
        discovery=True,
        elected_council=False,
        technical_committee=False,
        democracy=False,
        membership=False,
        vesting=True,
        legacy_claims=False,
        root_key=True,
    ),
    staging=ProfileNames(name="Westend Staging Testnet", chain_id="westend_staging_testnet"),
    development=ProfileNames(name="Development", chain_id="westend_dev"),
    local=ProfileNames(name="Westend Local Testnet", chain_id="westend_local_testnet"),
    telemetry_url=WESTEND_STAGING_TELEMETRY_URL,
)

ROCOCO: Final = NetworkFamily(
    name="rococo",
    display_name="Rococo",
    capabilities=CapabilityDescriptor(
        finality=False,
        discovery=False,
        elected_council=False,
        technical_committee=False,
        democracy=False,
        membership=False,
        vesting=False,
        legacy_claims=False,
        root_key=False,
    ),
    staging=ProfileNames(name="Rococo Staging Testnet", chain_id="rococo_staging_testnet"),
    development=ProfileNames(name="Development", chain_id="rococo_dev"),
    local=ProfileNames(name="Rococo Local Testnet", chain_id="rococo_local_testnet"),
    telemetry_url=ROCOCO_STAGING_TELEMETRY_URL,
)

FAMILIES: Final = {family.name: family for family in (POLKADOT, KUSAMA, WESTEND, ROCOCO)}
"""Every network family, keyed by name."""

PROFILE_SUFFIXES: Final = ("", "-dev", "-local", "-staging")
"""Chain name suffixes selecting a family's profile. No suffix is the pre-baked document."""


def available_chains() -> list[str]:
    """Every chain name `resolve_chain_spec` accepts, apart from file paths."""
    return ["dev"] + [f"{name}{suffix}" for name in FAMILIES for suffix in PROFILE_SUFFIXES]


def resolve_chain_spec(name: str) -> ChainSpec:
    """
    Turn a chain name into a chain specification.

    Accepts "dev" (the Polkadot development profile), "<family>" (the
    pre-baked document), "<family>-dev", "<family>-local",
    "<family>-staging", or a path to a chain specification JSON file.

    Raises:
        ChainSpecError: Any failure of the selected factory, or
            `MalformedChainSpecBytes` when the name is neither a known chain
            nor a readable file.
    """
    if name == "dev":
        return POLKADOT.development_config()

    family_name, _, kind = name.partition("-")
    family = FAMILIES.get(family_name)
    if family is not None:
        match kind:
            case "":
                return family.load_config()
            case "dev":
                return family.development_config()
            case "local":
                return family.local_testnet_config()
            case "staging":
                return family.staging_config()

    path = Path(name).expanduser()
    try:
        data = path.read_bytes()
    except OSError as e:
        raise MalformedChainSpecBytes(
            name, f"not a known chain name or a readable file ({e.strerror})"
        ) from e
    return ChainSpec.from_json_bytes(data, source=str(path))
