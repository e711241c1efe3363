"""
Network-wide constants for chain profiles.

These values are process-wide and immutable. They are compiled into every
profile and are never recomputed per call.
"""

from typing_extensions import Final

from ..genesis import EconomicConstants

# --- Profile Metadata ---

DEFAULT_PROTOCOL_ID: Final = "dot"
"""Network protocol identifier shared by every profile."""

POLKADOT_STAGING_TELEMETRY_URL: Final = "wss://telemetry.polkadot.io/submit/"
KUSAMA_STAGING_TELEMETRY_URL: Final = "wss://telemetry.polkadot.io/submit/"
WESTEND_STAGING_TELEMETRY_URL: Final = "wss://telemetry.polkadot.io/submit/"
ROCOCO_STAGING_TELEMETRY_URL: Final = "wss://telemetry.polkadot.io/submit/"

STAGING_TELEMETRY_VERBOSITY: Final = 0
"""Verbosity tier requested from staging telemetry endpoints."""

# --- Currency ---

UNITS: Final = 10**12
"""Base units per whole token. Identical for DOT, KSM and WND."""

ENDOWMENT: Final = 1_000_000 * UNITS
"""Balance of every endowed account."""

STASH: Final = 100 * UNITS
"""Bond of every bootstrap validator."""

DEFAULT_ECONOMICS: Final = EconomicConstants(endowment=ENDOWMENT, stash=STASH)
"""Economic constants shared by every network family."""
