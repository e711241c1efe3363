"""
Minimal SCALE encoding helpers used by hierarchical key derivation.

Only the shapes that feed derivation hashes are needed here: compact
lengths, length-prefixed strings and fixed-width little-endian integers.
"""

from __future__ import annotations

_SINGLE_BYTE_LIMIT = 1 << 6
_TWO_BYTE_LIMIT = 1 << 14
_FOUR_BYTE_LIMIT = 1 << 30


def encode_compact(value: int) -> bytes:
    """
    Encode a non-negative integer in SCALE compact form.

    The two low bits of the first byte select the mode:

    - 0b00: single byte, values below 2**6
    - 0b01: two bytes, values below 2**14
    - 0b10: four bytes, values below 2**30
    - 0b11: big-integer mode, upper six bits hold (byte length - 4)
    """
    if value < 0:
        raise ValueError(f"compact encoding requires a non-negative integer, got {value}")
    if value < _SINGLE_BYTE_LIMIT:
        return bytes([value << 2])
    if value < _TWO_BYTE_LIMIT:
        return ((value << 2) | 0b01).to_bytes(2, "little")
    if value < _FOUR_BYTE_LIMIT:
        return ((value << 2) | 0b10).to_bytes(4, "little")

    length = (value.bit_length() + 7) // 8
    if length > 67:
        raise ValueError(f"{value} is too large for compact encoding")
    return bytes([((length - 4) << 2) | 0b11]) + value.to_bytes(length, "little")


def encode_str(value: str) -> bytes:
    """Encode a string as its compact byte length followed by UTF-8 bytes."""
    data = value.encode("utf-8")
    return encode_compact(len(data)) + data


def encode_u64(value: int) -> bytes:
    """Encode an unsigned 64-bit integer as 8 little-endian bytes."""
    return value.to_bytes(8, "little")
