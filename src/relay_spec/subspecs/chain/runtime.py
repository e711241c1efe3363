"""Compiled runtime blobs consumed by generated profiles."""

from __future__ import annotations

import logging
from functools import cache
from pathlib import Path

from relay_spec import config
from relay_spec.types import MissingRuntimeCode

logger = logging.getLogger(__name__)

RUNTIME_FILE_SUFFIX = "_runtime.compact.wasm"
"""Every runtime blob is named `<runtime>_runtime.compact.wasm`."""

WASM_MAGIC = b"\x00asm"
"""Leading bytes of every WebAssembly module."""


def runtime_path(runtime: str, runtime_dir: Path | None = None) -> Path:
    """Location of a runtime blob."""
    return (runtime_dir or config.RUNTIME_DIR) / f"{runtime}{RUNTIME_FILE_SUFFIX}"


@cache
def _read_runtime(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


def load_runtime_code(network: str, runtime: str, runtime_dir: Path | None = None) -> bytes:
    """
    Load the compiled runtime of a network.

    Blobs are read once per path and cached for the process lifetime.

    Args:
        network: Display name of the network, used in error messages.
        runtime: Runtime file stem, e.g. "polkadot".
        runtime_dir: Directory to look in. Defaults to `config.RUNTIME_DIR`.

    Raises:
        MissingRuntimeCode: If the blob is absent or empty.
    """
    path = runtime_path(runtime, runtime_dir)
    code = _read_runtime(path)
    if not code:
        raise MissingRuntimeCode(network, str(path))

    if not code.startswith(WASM_MAGIC):
        logger.warning("%s runtime at %s does not look like a wasm module", network, path)
    return code
