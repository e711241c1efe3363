"""
Genesis state assembly.

One parameterized builder serves every network. The differences between
networks arrive as data (a `CapabilityDescriptor`, `EconomicConstants` and a
`StakingPreset`) rather than as per-network copies of this function.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from relay_spec.types import perbill_from_percent

from ..keys import AccountId
from .capabilities import CapabilityDescriptor, EconomicConstants, StakingPreset
from .state import (
    AuthorityKeySet,
    AuthorityListConfig,
    BalancesConfig,
    ClaimsConfig,
    CollectiveConfig,
    DemocracyConfig,
    ElectionsConfig,
    GenesisState,
    IndicesConfig,
    KeyListConfig,
    MembershipConfig,
    RootConfig,
    SessionConfig,
    SessionKeys,
    StakerStatus,
    StakingConfig,
    SystemConfig,
    VestingConfig,
)

logger = logging.getLogger(__name__)

SLASH_REWARD_PERCENT = 10
"""Share of a slashed amount paid to reporters, on every network."""


def _balances(
    endowed: Sequence[AccountId],
    stashes: Sequence[AccountId],
    economics: EconomicConstants,
) -> BalancesConfig:
    """
    Credit endowed accounts, then stashes, in caller order.

    Nothing is de-duplicated: an account in both lists is credited twice.
    """
    balances = [(account, economics.endowment) for account in endowed]
    balances.extend((stash, economics.stash) for stash in stashes)
    return BalancesConfig(balances=balances)


def _session_keys(
    authority: AuthorityKeySet,
    capabilities: CapabilityDescriptor,
) -> SessionKeys:
    """Select the session keys a network registers, dropping absent roles."""
    return SessionKeys(
        block_production=authority.block_production,
        finality=authority.finality if capabilities.finality else None,
        peer_online=authority.peer_online,
        validator=authority.validator,
        discovery=authority.discovery if capabilities.discovery else None,
    )


def _staking(
    authorities: Sequence[AuthorityKeySet],
    economics: EconomicConstants,
    preset: StakingPreset,
) -> StakingConfig:
    """Bond every authority as a validator and protect it from slashing."""
    stakers = [
        (authority.stash, authority.controller, economics.stash, StakerStatus.VALIDATOR)
        for authority in authorities
    ]

    # Order-preserving de-duplication.
    invulnerables = list(dict.fromkeys(authority.stash for authority in authorities))

    return StakingConfig(
        validator_count=preset.validator_count,
        minimum_validator_count=preset.minimum_validator_count,
        stakers=stakers,
        invulnerables=invulnerables,
        force_era=preset.force_era,
        slash_reward_fraction=perbill_from_percent(SLASH_REWARD_PERCENT),
    )


def build_genesis(
    code: bytes,
    authorities: Sequence[AuthorityKeySet],
    endowed: Sequence[AccountId],
    economics: EconomicConstants,
    capabilities: CapabilityDescriptor,
    preset: StakingPreset,
    root_key: AccountId | None = None,
    stashes: Sequence[AccountId] | None = None,
) -> GenesisState:
    """
    Assemble a complete genesis state.

    The authority list is used as given. Rejecting unusable lists (empty,
    duplicated stashes) is the caller's job, before assembly.

    Args:
        code: Compiled runtime blob.
        authorities: Bootstrap validators, in order.
        endowed: Accounts credited the full endowment.
        economics: Endowment and stash amounts.
        capabilities: Which optional subsystems and key roles exist.
        preset: Validator counts and era rotation mode.
        root_key: Administrative account, used only when the network has one.
        stashes: Accounts credited the bonded amount after the endowed ones.
            Defaults to the stash of every authority.

    Returns:
        The genesis state. Optional subsystems the network lacks are `None`.
    """
    logger.debug(
        "Assembling genesis with %d authorities and %d endowed accounts",
        len(authorities),
        len(endowed),
    )

    session = SessionConfig(
        keys=[
            (authority.stash, authority.stash, _session_keys(authority, capabilities))
            for authority in authorities
        ]
    )

    if stashes is None:
        stashes = [authority.stash for authority in authorities]

    root = None
    if capabilities.root_key and root_key is not None:
        root = RootConfig(key=root_key)

    return GenesisState(
        system=SystemConfig(code=code),
        balances=_balances(endowed, stashes, economics),
        indices=IndicesConfig(),
        session=session,
        staking=_staking(authorities, economics, preset),
        block_production=AuthorityListConfig(),
        finality=AuthorityListConfig() if capabilities.finality else None,
        peer_online=KeyListConfig(),
        authority_discovery=KeyListConfig() if capabilities.discovery else None,
        elections=ElectionsConfig() if capabilities.elected_council else None,
        council=CollectiveConfig() if capabilities.elected_council else None,
        technical_committee=CollectiveConfig() if capabilities.technical_committee else None,
        technical_membership=MembershipConfig() if capabilities.membership else None,
        democracy=DemocracyConfig() if capabilities.democracy else None,
        vesting=VestingConfig() if capabilities.vesting else None,
        claims=ClaimsConfig() if capabilities.legacy_claims else None,
        root=root,
    )
