"""
Shared pytest fixtures for all relay_spec tests.

Import these fixtures automatically via pytest discovery.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from relay_spec import config


@pytest.fixture
def missing_runtime_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the runtime directory at an empty directory for one test."""
    runtime_dir = tmp_path / "runtime"
    runtime_dir.mkdir()
    monkeypatch.setattr(config, "RUNTIME_DIR", runtime_dir)
    return runtime_dir
