"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _clear_architest_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset architest env vars so a developer's shell config cannot leak into tests."""
    monkeypatch.delenv("ARCHITEST_ALLOWED_ROOTS", raising=False)
    monkeypatch.delenv("ARCHITEST_LOG_LEVEL", raising=False)


@pytest.fixture
def write_file(tmp_path: Path):
    """Write ``text`` to ``tmp_path / relpath`` (creating parents) and return the path."""

    def _write(relpath: str, text: str) -> Path:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
