"""
Deterministic key derivation from seeds and secret URIs.

Test identities such as "Alice" or "Bob//stash" are never stored as secrets.
They are regenerated on demand from a well-known development phrase and a
path of hard derivation junctions.

Derivation follows the scheme used by Substrate-based nodes, so a seed
resolves to the same public key here as it does in node tooling:

1. The phrase is decoded into BIP-39 entropy.
2. PBKDF2-HMAC-SHA512 stretches the entropy into a 32-byte secret seed.
3. For Ed25519 and secp256k1, each hard junction folds a chain code into the
   seed with BLAKE2b-256 and the final seed becomes the private key.
4. For sr25519, the seed is expanded into a keypair and every junction, hard
   or soft, is applied to the keypair by the schnorrkel derivation rules.
"""

from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import cache

import sr25519
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from mnemonic import Mnemonic

from relay_spec.types import Bytes32, Bytes33, KeyDerivationError

from .scale import encode_str, encode_u64

__all__ = [
    "DEV_PHRASE",
    "AccountId",
    "DeriveJunction",
    "KeyScheme",
    "SecretUri",
    "derive_account_id",
    "derive_public",
    "derive_public_from_uri",
]

logger = logging.getLogger(__name__)

DEV_PHRASE = "bottom drive obey lake curtain smoke basket hold race lonely fit walk"
"""The publicly known development phrase behind every test identity."""

PBKDF2_ROUNDS = 2048
"""PBKDF2 iteration count mandated by BIP-39."""

CHAIN_CODE_LENGTH = 32
"""Length of a junction chain code in bytes."""

SEED_LENGTH = 32
"""Length of a secret seed in bytes."""

AccountId = Bytes32
"""
An account identifier.

Accounts are identified by the raw bytes of their sr25519 public key.
"""

_SECRET_URI_RE = re.compile(
    r"^(?P<phrase>[\w ]+)?(?P<path>(//?[^/]+)*)(///(?P<password>.*))?$",
)
_JUNCTION_RE = re.compile(r"/(/?[^/]+)")

_U64_LIMIT = 2**64


class KeyScheme(Enum):
    """
    Enumerates the supported signature schemes.

    Attributes:
        value (str): Short scheme name (e.g., "ed25519").
        hdkd_tag (str | None): Domain tag mixed into every hard derivation
            step. sr25519 derives on keypairs and has no tag.
        key_length (int): Length of the encoded public key in bytes.
    """

    def __init__(self, value: str, hdkd_tag: str | None, key_length: int):
        self._value_ = value
        self.hdkd_tag = hdkd_tag
        self.key_length = key_length

    SR25519 = ("sr25519", None, 32)
    """Schnorr keys on Ristretto25519. Used for accounts and most session roles."""

    ED25519 = ("ed25519", "Ed25519HDKD", 32)
    """Ed25519 keys. Used for the finality role."""

    ECDSA = ("ecdsa", "Secp256k1HDKD", 33)
    """secp256k1 keys, encoded as 33-byte compressed points."""


@dataclass(frozen=True, slots=True)
class DeriveJunction:
    """
    One step of a derivation path.

    Attributes:
        chain_code: 32 bytes folded into the parent seed.
        hard: Whether the step is a hard (`//`) junction.
    """

    chain_code: bytes
    hard: bool

    @classmethod
    def parse(cls, junction: str) -> DeriveJunction:
        """
        Build a junction from its path text, without the leading `/`.

        A second leading `/` marks a hard junction. Text that parses as an
        unsigned 64-bit integer is encoded as a number, anything else as a
        string. Encodings longer than 32 bytes are hashed.
        """
        hard = junction.startswith("/")
        code = junction[1:] if hard else junction

        if code.isascii() and code.isdigit() and int(code) < _U64_LIMIT:
            encoded = encode_u64(int(code))
        else:
            encoded = encode_str(code)

        if len(encoded) > CHAIN_CODE_LENGTH:
            chain_code = hashlib.blake2b(encoded, digest_size=CHAIN_CODE_LENGTH).digest()
        else:
            chain_code = encoded.ljust(CHAIN_CODE_LENGTH, b"\x00")
        return cls(chain_code=chain_code, hard=hard)


@dataclass(frozen=True, slots=True)
class SecretUri:
    """
    A parsed secret URI: `[phrase | 0x seed](//hard | /soft)*[///password]`.

    Attributes:
        phrase: Mnemonic phrase or `0x`-prefixed hex seed. Empty means the
            development phrase.
        junctions: Derivation steps in application order.
        password: Optional BIP-39 password.
    """

    phrase: str
    junctions: tuple[DeriveJunction, ...]
    password: str

    @classmethod
    def parse(cls, uri: str) -> SecretUri:
        """
        Split a secret URI into its phrase, path and password.

        Raises:
            KeyDerivationError: If the URI does not match the grammar.
        """
        match = _SECRET_URI_RE.match(uri)
        if match is None:
            raise KeyDerivationError(uri, "not a valid secret URI")

        phrase = (match.group("phrase") or "").strip()
        junctions = tuple(
            DeriveJunction.parse(j) for j in _JUNCTION_RE.findall(match.group("path") or "")
        )
        return cls(phrase=phrase, junctions=junctions, password=match.group("password") or "")


@cache
def _mnemonic() -> Mnemonic:
    """English BIP-39 wordlist, loaded once per process."""
    return Mnemonic("english")


@cache
def _seed_from_phrase(phrase: str, password: str) -> bytes:
    """
    Turn a mnemonic phrase or hex seed into a 32-byte secret seed.

    The PBKDF2 input is the phrase's entropy, not the phrase text itself.
    """
    if phrase.startswith("0x"):
        try:
            seed = bytes.fromhex(phrase[2:])
        except ValueError as e:
            raise KeyDerivationError(phrase, "invalid hex seed") from e
        if len(seed) != SEED_LENGTH:
            raise KeyDerivationError(phrase, f"hex seed must be {SEED_LENGTH} bytes")
        return seed

    words = " ".join(phrase.split())
    if not _mnemonic().check(words):
        raise KeyDerivationError(phrase, "not a valid BIP-39 phrase")

    entropy = bytes(_mnemonic().to_entropy(words))
    salt = b"mnemonic" + password.encode("utf-8")
    return hashlib.pbkdf2_hmac("sha512", entropy, salt, PBKDF2_ROUNDS)[:SEED_LENGTH]


def _derive_hard(hdkd_tag: str, seed: bytes, chain_code: bytes) -> bytes:
    """Fold one hard junction into a secret seed."""
    preimage = encode_str(hdkd_tag) + seed + chain_code
    return hashlib.blake2b(preimage, digest_size=SEED_LENGTH).digest()


def _sr25519_public(seed: bytes, junctions: tuple[DeriveJunction, ...]) -> Bytes32:
    """Expand a seed into an sr25519 keypair, walk the path and return its public key."""
    try:
        keypair = sr25519.pair_from_seed(seed)
        for junction in junctions:
            derive = sr25519.hard_derive_keypair if junction.hard else sr25519.derive_keypair
            keypair = derive(keypair, junction.chain_code)
    except ValueError as e:
        raise KeyDerivationError(seed.hex(), f"sr25519 derivation failed: {e}") from e
    public_key, _ = keypair
    return Bytes32(public_key)


def _public_from_seed(scheme: KeyScheme, seed: bytes) -> Bytes32 | Bytes33:
    """Compute the encoded public key of a secret seed."""
    match scheme:
        case KeyScheme.ED25519:
            private_key = ed25519.Ed25519PrivateKey.from_private_bytes(seed)
            return Bytes32(
                private_key.public_key().public_bytes(
                    encoding=serialization.Encoding.Raw,
                    format=serialization.PublicFormat.Raw,
                )
            )
        case KeyScheme.ECDSA:
            secret = int.from_bytes(seed, "big")
            try:
                ecdsa_key = ec.derive_private_key(secret, ec.SECP256K1())
            except ValueError as e:
                raise KeyDerivationError(seed.hex(), "seed is not a valid secp256k1 scalar") from e
            return Bytes33(
                ecdsa_key.public_key().public_bytes(
                    encoding=serialization.Encoding.X962,
                    format=serialization.PublicFormat.CompressedPoint,
                )
            )


def derive_public_from_uri(uri: str, scheme: KeyScheme) -> Bytes32 | Bytes33:
    """
    Derive the public key behind a full secret URI.

    Args:
        uri: Secret URI, e.g. "//Alice", "//Alice//stash" or
            "<phrase>//hard///password".
        scheme: Signature scheme of the resulting key.

    Returns:
        The encoded public key (32 bytes for sr25519 and Ed25519, 33 for
        secp256k1).

    Raises:
        KeyDerivationError: On a malformed URI, an invalid phrase or a soft
            junction under Ed25519 or secp256k1, which only derive hard.
    """
    secret_uri = SecretUri.parse(uri)
    seed = _seed_from_phrase(secret_uri.phrase or DEV_PHRASE, secret_uri.password)

    if scheme.hdkd_tag is None:
        return _sr25519_public(seed, secret_uri.junctions)

    for junction in secret_uri.junctions:
        if not junction.hard:
            raise KeyDerivationError(uri, f"soft derivation is not supported by {scheme.value}")
        seed = _derive_hard(scheme.hdkd_tag, seed, junction.chain_code)

    return _public_from_seed(scheme, seed)


@cache
def derive_public(seed: str, scheme: KeyScheme) -> Bytes32 | Bytes33:
    """
    Derive a public key from a short seed name.

    The seed is a path below the development phrase: "Alice" stands for
    "//Alice" and "Alice//stash" for "//Alice//stash".

    Results are cached; the derivation is pure, so every call with the same
    arguments returns the same key.
    """
    if not seed:
        raise KeyDerivationError(seed, "seed must not be empty")
    logger.debug("Deriving %s key for seed %s", scheme.value, seed)
    return derive_public_from_uri(f"//{seed}", scheme)


def derive_account_id(seed: str) -> AccountId:
    """
    Derive the account identifier of a seed.

    Accounts use sr25519 keys and the identifier is the public key itself.
    """
    return AccountId(derive_public(seed, KeyScheme.SR25519))
