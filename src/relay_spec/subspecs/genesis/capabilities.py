"""
Per-network configuration data that drives genesis assembly.

Networks in the family share one runtime shape. What differs between them
is captured here as plain values: which optional subsystems and key roles
exist, how much is endowed, and how staking starts out.
"""

from __future__ import annotations

from enum import Enum

from pydantic import model_validator
from typing_extensions import Final

from relay_spec.types import Balance, StrictBaseModel, Uint32


class Forcing(Enum):
    """Era rotation mode at genesis."""

    NOT_FORCING = "NotForcing"
    """Rotate eras on the normal schedule."""

    FORCE_NEW = "ForceNew"
    """Force a new era at the next opportunity, then return to normal."""

    FORCE_NONE = "ForceNone"
    """Never rotate eras. Used while operators are not yet ready to take over."""

    FORCE_ALWAYS = "ForceAlways"
    """Rotate at every session."""


class CapabilityDescriptor(StrictBaseModel):
    """
    Flags stating which optional subsystems and key roles a network has.

    This is configuration data, not control flow: the genesis assembler reads
    the flags and omits every absent subsystem from the genesis state.
    """

    finality: bool
    """Finality gadget: a finality key in every session tuple and its genesis section."""

    discovery: bool
    """Authority discovery: a discovery key in every session tuple and its genesis section."""

    elected_council: bool
    """Council elections and the council collective."""

    technical_committee: bool
    """The technical committee collective."""

    democracy: bool
    """Referendum-based governance."""

    membership: bool
    """Membership set backing the technical committee."""

    vesting: bool
    """Vesting schedules for locked balances."""

    legacy_claims: bool
    """Claims of balances allocated on a legacy chain."""

    root_key: bool
    """A single administrative (root) account."""


class EconomicConstants(StrictBaseModel):
    """Balances credited at genesis, in the network's base unit."""

    endowment: Balance
    """Amount credited to every endowed account."""

    stash: Balance
    """Amount bonded by every bootstrap validator's stash."""

    @model_validator(mode="after")
    def check_stash_below_endowment(self) -> EconomicConstants:
        """An endowed stash must be able to cover its own bond."""
        if self.stash >= self.endowment:
            raise ValueError(
                f"stash ({self.stash}) must be lower than endowment ({self.endowment})"
            )
        return self


class StakingPreset(StrictBaseModel):
    """Validator-set sizing and era rotation for one kind of profile."""

    validator_count: Uint32
    """Ideal number of validators."""

    minimum_validator_count: Uint32
    """Minimum number of validators the network accepts."""

    force_era: Forcing
    """Era rotation mode at genesis."""

    @model_validator(mode="after")
    def check_counts(self) -> StakingPreset:
        """The ideal validator count can never be below the minimum."""
        if self.validator_count < self.minimum_validator_count:
            raise ValueError(
                f"validator_count ({self.validator_count}) is below "
                f"minimum_validator_count ({self.minimum_validator_count})"
            )
        return self


STAGING_PRESET: Final = StakingPreset(
    validator_count=50,
    minimum_validator_count=4,
    force_era=Forcing.FORCE_NONE,
)
"""Staging and live networks: no era rotation until operators take over."""

TESTNET_PRESET: Final = StakingPreset(
    validator_count=2,
    minimum_validator_count=1,
    force_era=Forcing.NOT_FORCING,
)
"""Development, local and test-harness networks."""
