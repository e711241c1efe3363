"""Reusable type definitions for relay chain specifications."""

from .base import CamelModel, StrictBaseModel
from .byte_arrays import ZERO_HASH, BaseBytes, Bytes20, Bytes32, Bytes33
from .exceptions import (
    ChainSpecError,
    InvalidAuthoritySet,
    KeyDerivationError,
    MalformedChainSpecBytes,
    MalformedTelemetryEndpoint,
    MissingRuntimeCode,
)
from .uint import Balance, Perbill, Uint32, perbill_from_percent

__all__ = [
    # Core types
    "Balance",
    "BaseBytes",
    "Bytes20",
    "Bytes32",
    "Bytes33",
    "CamelModel",
    "Perbill",
    "StrictBaseModel",
    "Uint32",
    "ZERO_HASH",
    "perbill_from_percent",
    # Exceptions
    "ChainSpecError",
    "InvalidAuthoritySet",
    "KeyDerivationError",
    "MalformedChainSpecBytes",
    "MalformedTelemetryEndpoint",
    "MissingRuntimeCode",
]
