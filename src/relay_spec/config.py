"""
Global configuration for relay chain specifications.

This module contains environment-specific settings that apply across all subspecs.
"""

import os
from pathlib import Path

RES_DIR: Path = Path(__file__).parent / "res"
"""Directory holding the package's embedded resources."""

RUNTIME_DIR: Path = Path(os.environ.get("RELAY_RUNTIME_DIR", RES_DIR)).expanduser()
"""
Directory holding compiled runtime blobs (`<network>_runtime.compact.wasm`).

Set `RELAY_RUNTIME_DIR` to the runtime build output. Defaults to the package
resource directory.
"""

if RUNTIME_DIR.exists() and not RUNTIME_DIR.is_dir():
    raise ValueError(
        f"Invalid RELAY_RUNTIME_DIR environment variable: '{RUNTIME_DIR}' is not a directory"
    )
