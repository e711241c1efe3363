"""Tests for the chain profile registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from relay_spec.subspecs.chain import (
    FAMILIES,
    KUSAMA,
    POLKADOT,
    ROCOCO,
    WESTEND,
    ChainType,
    NetworkFamily,
    RawGenesis,
    authority_keys_from_seed,
    available_chains,
    resolve_chain_spec,
)
from relay_spec.subspecs.chain.config import ENDOWMENT, STASH, UNITS
from relay_spec.subspecs.genesis import Forcing, GenesisState, StakerStatus
from relay_spec.subspecs.keys import KeyScheme, canonical_roster, derive_account_id, derive_public
from relay_spec.types import (
    Bytes32,
    InvalidAuthoritySet,
    MalformedChainSpecBytes,
    MissingRuntimeCode,
)

WESTEND_SUDO = Bytes32("0x6648d7f3382690650c681aba1b993cd11e54deb4df21a3a18c3e2177de9f7342")


def generated(genesis: GenesisState | RawGenesis) -> GenesisState:
    assert isinstance(genesis, GenesisState)
    return genesis


class TestFamilies:
    """Static family data."""

    def test_four_families(self) -> None:
        assert list(FAMILIES) == ["polkadot", "kusama", "westend", "rococo"]

    def test_economics(self) -> None:
        assert UNITS == 10**12
        for family in FAMILIES.values():
            assert family.economics.endowment == ENDOWMENT == 1_000_000 * UNITS
            assert family.economics.stash == STASH == 100 * UNITS

    def test_capabilities(self) -> None:
        assert POLKADOT.capabilities == KUSAMA.capabilities
        assert not POLKADOT.capabilities.root_key
        assert POLKADOT.capabilities.legacy_claims

        westend = WESTEND.capabilities
        assert westend.finality and westend.discovery and westend.vesting and westend.root_key
        assert not (westend.elected_council or westend.democracy or westend.legacy_claims)

        assert not any(ROCOCO.capabilities.model_dump().values())


class TestDevelopmentProfiles:
    """Single-validator development profiles."""

    def test_polkadot_dev_profile(self) -> None:
        spec = POLKADOT.development_config()
        assert spec.name == "Development"
        assert spec.chain_id == "dev"
        assert spec.chain_type is ChainType.DEVELOPMENT
        assert spec.profile.boot_nodes == []
        assert spec.profile.telemetry_endpoints is None
        assert spec.profile.protocol_id == "dot"

    def test_single_alice_authority(self) -> None:
        genesis = generated(POLKADOT.development_config().genesis)
        alice_stash = derive_account_id("Alice//stash")
        assert genesis.staking.stakers == [
            (alice_stash, derive_account_id("Alice"), STASH, StakerStatus.VALIDATOR)
        ]
        assert genesis.staking.invulnerables == [alice_stash]
        assert genesis.staking.force_era is Forcing.NOT_FORCING
        assert genesis.staking.validator_count == 2

    def test_roster_endowed_and_stash_not_double_credited(self) -> None:
        genesis = generated(KUSAMA.development_config().genesis)
        assert genesis.balances.balances == [(account, ENDOWMENT) for account in canonical_roster()]

    @pytest.mark.parametrize(
        "family,chain_id",
        [(KUSAMA, "kusama_dev"), (WESTEND, "westend_dev"), (ROCOCO, "rococo_dev")],
    )
    def test_dev_ids(self, family: NetworkFamily, chain_id: str) -> None:
        spec = family.development_config()
        assert spec.name == "Development"
        assert spec.chain_id == chain_id

    def test_rococo_has_no_finality(self) -> None:
        genesis = generated(ROCOCO.development_config().genesis)
        assert genesis.finality is None
        assert genesis.authority_discovery is None
        ((_, _, keys),) = genesis.session.keys
        assert keys.finality is None and keys.discovery is None


class TestLocalTestnetProfiles:
    """Two-validator local profiles."""

    @pytest.mark.parametrize(
        "family,name,chain_id",
        [
            (POLKADOT, "Local Testnet", "local_testnet"),
            (KUSAMA, "Kusama Local Testnet", "kusama_local_testnet"),
            (WESTEND, "Westend Local Testnet", "westend_local_testnet"),
            (ROCOCO, "Rococo Local Testnet", "rococo_local_testnet"),
        ],
    )
    def test_names(self, family: NetworkFamily, name: str, chain_id: str) -> None:
        spec = family.local_testnet_config()
        assert (spec.name, spec.chain_id, spec.chain_type) == (name, chain_id, ChainType.LOCAL)

    def test_alice_and_bob(self) -> None:
        genesis = generated(WESTEND.local_testnet_config().genesis)
        assert genesis.staking.invulnerables == [
            derive_account_id("Alice//stash"),
            derive_account_id("Bob//stash"),
        ]

    def test_westend_root_is_alice(self) -> None:
        genesis = generated(WESTEND.local_testnet_config().genesis)
        assert genesis.root is not None
        assert genesis.root.key == derive_account_id("Alice")
        assert genesis.vesting is not None
        assert genesis.council is None

    def test_polkadot_has_governance_and_no_root(self) -> None:
        genesis = generated(POLKADOT.local_testnet_config().genesis)
        assert genesis.root is None
        assert genesis.council is not None
        assert genesis.democracy is not None
        assert genesis.claims is not None


class TestStagingProfiles:
    """Live-type profiles built from the bootstrap table."""

    def test_polkadot_staging_has_no_authorities(self) -> None:
        with pytest.raises(InvalidAuthoritySet):
            POLKADOT.staging_config()

    @pytest.mark.parametrize(
        "family,name,chain_id",
        [
            (KUSAMA, "Kusama Staging Testnet", "kusama_staging_testnet"),
            (WESTEND, "Westend Staging Testnet", "westend_staging_testnet"),
            (ROCOCO, "Rococo Staging Testnet", "rococo_staging_testnet"),
        ],
    )
    def test_staging_profile(self, family: NetworkFamily, name: str, chain_id: str) -> None:
        spec = family.staging_config()
        assert (spec.name, spec.chain_id, spec.chain_type) == (name, chain_id, ChainType.LIVE)
        assert spec.profile.telemetry_endpoints is not None
        assert spec.profile.telemetry_endpoints.endpoints == [
            ("wss://telemetry.polkadot.io/submit/", 0)
        ]

        genesis = generated(spec.genesis)
        assert len(genesis.staking.stakers) == 4
        assert genesis.staking.validator_count == 50
        assert genesis.staking.minimum_validator_count == 4
        assert genesis.staking.force_era is Forcing.FORCE_NONE
        # One endowed account plus four stashes at the bonded amount.
        amounts = [amount for _, amount in genesis.balances.balances]
        assert amounts == [ENDOWMENT] + [STASH] * 4

    def test_westend_staging_root(self) -> None:
        genesis = generated(WESTEND.staging_config().genesis)
        assert genesis.root is not None
        assert genesis.root.key == WESTEND_SUDO


class TestTestnetGenesis:
    """The explicit-parameter builder used by test harnesses."""

    def test_custom_endowed_and_code(self) -> None:
        authorities = [authority_keys_from_seed("Charlie", POLKADOT.capabilities)]
        endowed = [derive_account_id("Charlie//stash")]
        genesis = POLKADOT.testnet_genesis(authorities, endowed=endowed, code=b"\x00asm")
        assert genesis.system.code == b"\x00asm"
        assert genesis.balances.balances == [(endowed[0], ENDOWMENT)]

    def test_explicit_root(self) -> None:
        authorities = [authority_keys_from_seed("Alice", WESTEND.capabilities)]
        root = derive_account_id("Ferdie")
        genesis = WESTEND.testnet_genesis(authorities, root_key=root)
        assert genesis.root is not None and genesis.root.key == root

    def test_root_ignored_without_capability(self, caplog: pytest.LogCaptureFixture) -> None:
        authorities = [authority_keys_from_seed("Alice", KUSAMA.capabilities)]
        genesis = KUSAMA.testnet_genesis(authorities, root_key=derive_account_id("Alice"))
        assert genesis.root is None
        assert "ignoring root key" in caplog.text

    def test_empty_authorities(self) -> None:
        with pytest.raises(InvalidAuthoritySet, match="at least"):
            WESTEND.testnet_genesis([])

    def test_duplicate_stash(self) -> None:
        alice = authority_keys_from_seed("Alice", WESTEND.capabilities)
        with pytest.raises(InvalidAuthoritySet, match="stash"):
            WESTEND.testnet_genesis([alice, alice])

    def test_root_family_needs_a_root(self) -> None:
        authorities = [authority_keys_from_seed("Alice", WESTEND.capabilities)]
        with pytest.raises(InvalidAuthoritySet, match="root account"):
            WESTEND.testnet_genesis(authorities, endowed=[])

    def test_explicit_root_without_endowed(self) -> None:
        authorities = [authority_keys_from_seed("Alice", WESTEND.capabilities)]
        root = derive_account_id("Eve")
        genesis = WESTEND.testnet_genesis(authorities, root_key=root, endowed=[])
        assert genesis.root is not None and genesis.root.key == root
        assert genesis.balances.balances == [(derive_account_id("Alice//stash"), STASH)]

    def test_stash_outside_endowed_is_funded(self) -> None:
        authorities = [authority_keys_from_seed("Dave", KUSAMA.capabilities)]
        endowed = [derive_account_id("Eve")]
        genesis = KUSAMA.testnet_genesis(authorities, endowed=endowed)
        assert genesis.balances.balances == [
            (endowed[0], ENDOWMENT),
            (derive_account_id("Dave//stash"), STASH),
        ]

    def test_role_mismatch(self) -> None:
        with_finality = authority_keys_from_seed("Alice", WESTEND.capabilities)
        with pytest.raises(InvalidAuthoritySet, match="finality"):
            ROCOCO.testnet_genesis([with_finality])


class TestAuthorityKeys:
    """Key sets derived from development seeds."""

    def test_stash_and_controller(self) -> None:
        keys = authority_keys_from_seed("Bob", WESTEND.capabilities)
        assert keys.stash == derive_account_id("Bob//stash")
        assert keys.controller == derive_account_id("Bob")

    def test_session_key_schemes(self) -> None:
        """Finality is Ed25519; every other session role shares the sr25519 account key."""
        keys = authority_keys_from_seed("Bob", WESTEND.capabilities)
        sr25519_key = derive_public("Bob", KeyScheme.SR25519)
        assert keys.block_production == keys.peer_online == keys.validator == sr25519_key
        assert keys.discovery == sr25519_key == keys.controller
        assert keys.finality == derive_public("Bob", KeyScheme.ED25519)
        assert keys.finality != keys.block_production

    def test_absent_roles(self) -> None:
        keys = authority_keys_from_seed("Bob", ROCOCO.capabilities)
        assert keys.finality is None
        assert keys.discovery is None


class TestMissingRuntime:
    """Generated profiles need the runtime blob."""

    def test_missing_runtime(self, missing_runtime_dir: Path) -> None:
        with pytest.raises(MissingRuntimeCode, match="Westend development wasm not available"):
            WESTEND.development_config()

    def test_explicit_code_skips_runtime(self, missing_runtime_dir: Path) -> None:
        authorities = [authority_keys_from_seed("Alice", ROCOCO.capabilities)]
        assert ROCOCO.testnet_genesis(authorities, code=b"\x00asm").system.code == b"\x00asm"


class TestLoadConfig:
    """Pre-baked documents."""

    @pytest.mark.parametrize("family", list(FAMILIES.values()))
    def test_loads_embedded_document(self, family: NetworkFamily) -> None:
        spec = family.load_config()
        assert spec.chain_id == family.name
        assert isinstance(spec.genesis, RawGenesis)

    def test_absent_document(self, tmp_path: Path) -> None:
        with pytest.raises(MalformedChainSpecBytes, match="absent"):
            POLKADOT.load_config(res_dir=tmp_path)


class TestResolveChainSpec:
    """Chain name resolution used by the CLI."""

    def test_dev_alias(self) -> None:
        assert resolve_chain_spec("dev").chain_id == "dev"

    @pytest.mark.parametrize(
        "name,chain_id",
        [
            ("polkadot", "polkadot"),
            ("kusama-dev", "kusama_dev"),
            ("westend-local", "westend_local_testnet"),
            ("rococo-staging", "rococo_staging_testnet"),
        ],
    )
    def test_family_names(self, name: str, chain_id: str) -> None:
        assert resolve_chain_spec(name).chain_id == chain_id

    def test_file_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.json"
        path.write_bytes(WESTEND.local_testnet_config().to_json_bytes())
        assert resolve_chain_spec(str(path)).chain_id == "westend_local_testnet"

    def test_unknown_name(self) -> None:
        with pytest.raises(MalformedChainSpecBytes, match="not a known chain name"):
            resolve_chain_spec("polkadot-mainnet")

    def test_available_chains(self) -> None:
        chains = available_chains()
        assert chains[0] == "dev"
        assert "kusama-staging" in chains
        assert len(chains) == 1 + 4 * 4
