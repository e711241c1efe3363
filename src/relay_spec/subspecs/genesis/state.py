"""
Genesis state containers.

A genesis state is an aggregate of independent subsystem configurations.
Each subsystem is a small immutable model; optional subsystems are `None`
when a network does not have them and are left out of the serialized form
entirely.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field, field_serializer, model_validator

from relay_spec.types import Balance, Bytes20, Bytes32, Perbill, StrictBaseModel, Uint32

from ..keys import AccountId
from .capabilities import Forcing


class StakerStatus(Enum):
    """Role of a staker at genesis."""

    IDLE = "Idle"
    """Bonded but neither validating nor nominating."""

    VALIDATOR = "Validator"
    """Declared as a validator candidate."""


class AuthorityKeySet(StrictBaseModel):
    """
    Every identity one network participant uses across consensus roles.

    `stash` and `controller` are account identifiers. The remaining fields are
    session keys. `finality` and `discovery` are only set for networks whose
    capability descriptor includes those roles.
    """

    stash: AccountId
    """Account holding the bonded funds."""

    controller: AccountId
    """Account issuing staking operations on behalf of the stash."""

    block_production: Bytes32
    """Block production (slot authorship) key."""

    finality: Bytes32 | None = None
    """Finality voting key."""

    peer_online: Bytes32
    """Heartbeat key proving the validator is online."""

    validator: Bytes32
    """Parachain validation key."""

    discovery: Bytes32 | None = None
    """Authority discovery key."""


class SessionKeys(StrictBaseModel):
    """Session keys registered for one validator. Absent roles are omitted."""

    block_production: Bytes32
    finality: Bytes32 | None = None
    peer_online: Bytes32
    validator: Bytes32
    discovery: Bytes32 | None = None


class SystemConfig(StrictBaseModel):
    """Runtime code the network starts with."""

    code: bytes = Field(repr=False)
    """Compiled runtime blob."""

    @field_serializer("code")
    def serialize_code(self, code: bytes) -> str:
        """Runtime code travels as `0x` hex."""
        return "0x" + code.hex()


class BalancesConfig(StrictBaseModel):
    """Free balances credited at genesis."""

    balances: list[tuple[AccountId, Balance]]


class IndicesConfig(StrictBaseModel):
    """Pre-assigned account indices."""

    indices: list[tuple[Uint32, AccountId]] = []


class SessionConfig(StrictBaseModel):
    """Initial session keys as `(account, validator id, keys)` tuples."""

    keys: list[tuple[AccountId, AccountId, SessionKeys]]


class StakingConfig(StrictBaseModel):
    """Initial staking configuration."""

    validator_count: Uint32
    minimum_validator_count: Uint32
    stakers: list[tuple[AccountId, AccountId, Balance, StakerStatus]]
    """`(stash, controller, bonded amount, status)` per bootstrap staker."""

    invulnerables: list[AccountId]
    """Validators that slashing cannot remove."""

    force_era: Forcing
    slash_reward_fraction: Perbill

    @model_validator(mode="after")
    def check_validator_counts(self) -> StakingConfig:
        """The ideal validator count can never be below the minimum."""
        if self.validator_count < self.minimum_validator_count:
            raise ValueError(
                f"validator_count ({self.validator_count}) is below "
                f"minimum_validator_count ({self.minimum_validator_count})"
            )
        return self


class AuthorityListConfig(StrictBaseModel):
    """Weighted authority list. Populated later from session keys, so empty at genesis."""

    authorities: list[tuple[Bytes32, int]] = []


class KeyListConfig(StrictBaseModel):
    """Plain key list. Populated later from session keys, so empty at genesis."""

    keys: list[Bytes32] = []


class ElectionsConfig(StrictBaseModel):
    """Council election candidates and their stakes."""

    members: list[tuple[AccountId, Balance]] = []


class CollectiveConfig(StrictBaseModel):
    """Members of a collective body (council or technical committee)."""

    members: list[AccountId] = []


class MembershipConfig(StrictBaseModel):
    """Membership set feeding a collective."""

    members: list[AccountId] = []


class DemocracyConfig(StrictBaseModel):
    """Referendum governance. Carries no genesis data."""


class VestingConfig(StrictBaseModel):
    """`(account, begin, length, liquid)` vesting schedules."""

    vesting: list[tuple[AccountId, Uint32, Uint32, Balance]] = []


class ClaimsConfig(StrictBaseModel):
    """Balances claimable by legacy-chain addresses, with optional vesting."""

    claims: list[tuple[Bytes20, Balance]] = []
    vesting: list[tuple[Bytes20, tuple[Balance, Balance, Uint32]]] = []


class RootConfig(StrictBaseModel):
    """The administrative account."""

    key: AccountId


class GenesisState(StrictBaseModel):
    """
    The initial snapshot of every subsystem's configuration.

    Invariants checked on construction:

    - Every staker's stash appears exactly once as the first element of a
      session-key tuple.
    - `invulnerables` has no duplicates and equals the set of staker stashes.
    - `validator_count >= minimum_validator_count`.
    """

    system: SystemConfig
    balances: BalancesConfig
    indices: IndicesConfig
    session: SessionConfig
    staking: StakingConfig
    block_production: AuthorityListConfig
    finality: AuthorityListConfig | None = None
    peer_online: KeyListConfig
    authority_discovery: KeyListConfig | None = None
    elections: ElectionsConfig | None = None
    council: CollectiveConfig | None = None
    technical_committee: CollectiveConfig | None = None
    technical_membership: MembershipConfig | None = None
    democracy: DemocracyConfig | None = None
    vesting: VestingConfig | None = None
    claims: ClaimsConfig | None = None
    root: RootConfig | None = None

    @model_validator(mode="after")
    def check_staking_matches_session(self) -> GenesisState:
        """Stakers, session keys and invulnerables must describe the same validators."""
        session_accounts = [account for account, _, _ in self.session.keys]
        staker_stashes = [stash for stash, _, _, _ in self.staking.stakers]

        for stash in staker_stashes:
            count = session_accounts.count(stash)
            if count != 1:
                raise ValueError(
                    f"staker {stash.to_hex()} has {count} session-key entries, expected 1"
                )

        invulnerables = self.staking.invulnerables
        if len(set(invulnerables)) != len(invulnerables):
            raise ValueError("invulnerables contain duplicate accounts")
        if set(invulnerables) != set(staker_stashes):
            raise ValueError("invulnerables must equal the set of staker stashes")
        return self

    def to_json(self) -> dict[str, Any]:
        """Serialize to the camelCase document form, dropping absent sections and key slots."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
