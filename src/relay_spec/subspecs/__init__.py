"""Subspecifications for relay chain genesis and profile generation."""

from .chain import FAMILIES, ChainSpec, resolve_chain_spec
from .genesis import GenesisState, build_genesis
from .keys import canonical_roster, derive_account_id

__all__ = [
    "FAMILIES",
    "ChainSpec",
    "GenesisState",
    "build_genesis",
    "canonical_roster",
    "derive_account_id",
    "resolve_chain_spec",
]
