"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from dirsweep.models.candidate import Candidate, Classification
from dirsweep.utils.formatting import console, err_console

MB = 1024 * 1024


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and state directories at a temporary location."""
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(xdg / "state"))
    return xdg


@pytest.fixture
def make_dir() -> Callable[..., Path]:
    """Create a directory holding a single file of the given size."""

    def _make(parent: Path, name: str, size: int = 0, filename: str = "data.bin") -> Path:
        directory = parent / name
        directory.mkdir(parents=True, exist_ok=True)
        (directory / filename).write_bytes(b"\0" * size)
        return directory

    return _make


@pytest.fixture
def make_orphan() -> Callable[..., Candidate]:
    """Create an ORPHAN candidate for a path."""

    def _make(path: str, size: int = 50 * MB, selected: bool = False) -> Candidate:
        return Candidate(
            path=path,
            name=Path(path).name,
            size_bytes=size,
            location_tag="~/.config",
            classification=Classification.orphan(),
            selected=selected,
        )

    return _make


@pytest.fixture
def make_candidate() -> Callable[..., Candidate]:
    """Create a candidate with any classification under /data."""

    def _make(
        name: str,
        classification: Classification,
        size: int | None = 10 * MB,
    ) -> Candidate:
        return Candidate(
            path=f"/data/{name}",
            name=name,
            size_bytes=size,
            location_tag="/data",
            classification=classification,
        )

    return _make


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Render CLI output wide enough that table cells are not wrapped."""
    monkeypatch.setattr(console, "width", 200)
    monkeypatch.setattr(err_console, "width", 200)
