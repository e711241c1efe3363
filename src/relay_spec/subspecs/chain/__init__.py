"""Chain profiles, their registry and the chain specification document."""

from .extensions import ChainSpecExtensions
from .registry import (
    FAMILIES,
    KUSAMA,
    POLKADOT,
    ROCOCO,
    WESTEND,
    NetworkFamily,
    authority_keys_from_seed,
    available_chains,
    resolve_chain_spec,
)
from .spec import ChainProfile, ChainSpec, ChainType, RawGenesis
from .telemetry import TelemetryEndpoints

__all__ = [
    "FAMILIES",
    "KUSAMA",
    "POLKADOT",
    "ROCOCO",
    "WESTEND",
    "ChainProfile",
    "ChainSpec",
    "ChainSpecExtensions",
    "ChainType",
    "NetworkFamily",
    "RawGenesis",
    "TelemetryEndpoints",
    "authority_keys_from_seed",
    "available_chains",
    "resolve_chain_spec",
]
