"""Genesis state model and its assembler."""

from .assembler import SLASH_REWARD_PERCENT, build_genesis
from .capabilities import (
    STAGING_PRESET,
    TESTNET_PRESET,
    CapabilityDescriptor,
    EconomicConstants,
    Forcing,
    StakingPreset,
)
from .state import AuthorityKeySet, GenesisState, SessionKeys, StakerStatus

__all__ = [
    "SLASH_REWARD_PERCENT",
    "STAGING_PRESET",
    "TESTNET_PRESET",
    "AuthorityKeySet",
    "CapabilityDescriptor",
    "EconomicConstants",
    "Forcing",
    "GenesisState",
    "SessionKeys",
    "StakerStatus",
    "StakingPreset",
    "build_genesis",
]
