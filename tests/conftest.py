"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path

from hypothesis import settings

# Stand-in runtime blobs, so generated profiles build without a runtime checkout.
# Must be set before `relay_spec.config` is imported.
if "RELAY_RUNTIME_DIR" not in os.environ:
    os.environ["RELAY_RUNTIME_DIR"] = str(Path(__file__).parent / "fixtures" / "runtime")

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")
