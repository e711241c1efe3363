"""Unsigned integer and fraction type aliases."""

from pydantic import Field
from typing_extensions import Annotated

UINT32_MAX = 2**32
"""The exclusive upper bound of an unsigned 32-bit integer."""

UINT128_MAX = 2**128
"""The exclusive upper bound of an unsigned 128-bit integer."""

BILLION = 1_000_000_000
"""Parts in a whole for `Perbill`."""

Uint32 = Annotated[int, Field(ge=0, lt=UINT32_MAX)]
"""A type alias to represent a uint32 (counts, block numbers)."""

Balance = Annotated[int, Field(ge=0, lt=UINT128_MAX)]
"""An amount in the network's base unit, stored as a uint128."""

Perbill = Annotated[
    int,
    Field(ge=0, le=BILLION, description="A fraction in parts per billion."),
]
"""
A type alias for fractions in parts per billion.

100% = 1,000,000,000 parts.
"""


def perbill_from_percent(percent: int) -> int:
    """Convert a whole percentage into parts per billion."""
    if not 0 <= percent <= 100:
        raise ValueError(f"percentage must be within [0, 100], got {percent}")
    return percent * (BILLION // 100)
