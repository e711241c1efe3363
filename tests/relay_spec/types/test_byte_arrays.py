from typing import Any

import pytest
from pydantic import BaseModel, ValidationError

from relay_spec.types import ZERO_HASH, BaseBytes, Bytes20, Bytes32, Bytes33


def test_bytes_inheritance_ok() -> None:
    # Concrete types inherit from BaseBytes and are plain bytes underneath
    assert issubclass(Bytes32, BaseBytes)
    assert Bytes32.LENGTH == 32
    v = Bytes32(b"\x00" * 32)
    assert isinstance(v, Bytes32)
    assert isinstance(v, bytes)
    assert len(v) == 32


@pytest.mark.parametrize(
    "value,expected",
    [
        (b"\x11" * 20, b"\x11" * 20),
        (bytearray(b"\x11" * 20), b"\x11" * 20),
        ([0x11] * 20, b"\x11" * 20),
        ("11" * 20, b"\x11" * 20),
        ("0x" + "11" * 20, b"\x11" * 20),
    ],
)
def test_coercion(value: Any, expected: bytes) -> None:
    assert bytes(Bytes20(value)) == expected


def test_wrong_length_raises() -> None:
    with pytest.raises(ValueError):
        Bytes32(b"\x00" * 31)
    with pytest.raises(ValueError):
        Bytes33("0x" + "00" * 32)


def test_zero_and_hex() -> None:
    assert ZERO_HASH == Bytes32.zero()
    assert ZERO_HASH.to_hex() == "0x" + "00" * 32
    assert Bytes32(b"\xab" * 32).hex() == "ab" * 32


def test_repr_shows_type_and_hex() -> None:
    assert repr(Bytes20(b"\x01" * 20)) == f"Bytes20({'01' * 20})"


def test_equal_bytes_of_different_types_hash_differently() -> None:
    # Hashing includes the type, so a 32-byte key is never confused with a 33-byte one
    assert hash(Bytes32(b"\x01" * 32)) != hash(b"\x01" * 32)
    assert hash(Bytes32(b"\x01" * 32)) == hash(Bytes32(b"\x01" * 32))


class _Holder(BaseModel):
    key: Bytes32


def test_pydantic_accepts_hex_and_serializes_hex() -> None:
    holder = _Holder(key="0x" + "02" * 32)
    assert isinstance(holder.key, Bytes32)
    assert holder.model_dump(mode="json") == {"key": "0x" + "02" * 32}


def test_pydantic_rejects_wrong_length() -> None:
    with pytest.raises(ValidationError):
        _Holder(key="0x0102")
