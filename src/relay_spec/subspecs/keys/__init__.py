"""Deterministic key material and account identifiers for test identities."""

from .derivation import (
    DEV_PHRASE,
    AccountId,
    KeyScheme,
    SecretUri,
    derive_account_id,
    derive_public,
    derive_public_from_uri,
)
from .roster import ROSTER_NAMES, canonical_roster

__all__ = [
    "DEV_PHRASE",
    "ROSTER_NAMES",
    "AccountId",
    "KeyScheme",
    "SecretUri",
    "canonical_roster",
    "derive_account_id",
    "derive_public",
    "derive_public_from_uri",
]
