"""The canonical roster of development accounts."""

from __future__ import annotations

from functools import cache

from .derivation import AccountId, derive_account_id

ROSTER_NAMES: tuple[str, ...] = ("Alice", "Bob", "Charlie", "Dave", "Eve", "Ferdie")
"""Seed names of the well-known development identities, in roster order."""

STASH_SUFFIX = "//stash"
"""Derivation suffix of an identity's stash account."""


@cache
def _roster() -> tuple[AccountId, ...]:
    bare = [derive_account_id(name) for name in ROSTER_NAMES]
    stashes = [derive_account_id(f"{name}{STASH_SUFFIX}") for name in ROSTER_NAMES]
    return tuple(bare + stashes)


def canonical_roster() -> list[AccountId]:
    """
    Return the 12 development accounts in their fixed order.

    The six bare identities come first, followed by their stash accounts.
    This is the default endowed-account list of every generated test profile.
    A new list is returned on each call, so callers may extend it freely.
    """
    return list(_roster())
