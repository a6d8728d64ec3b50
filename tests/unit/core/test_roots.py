"""Unit tests for scan root resolution."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from dirsweep.core.config import ConfigurationError
from dirsweep.core.roots import default_roots, format_location, resolve_roots


class TestDefaultRoots:
    """Tests for default_roots."""

    def test_linux_defaults(self, tmp_path: Path) -> None:
        """Linux uses the XDG config, data and cache directories under home."""
        with (
            patch("dirsweep.core.roots.sys.platform", "linux"),
            patch("dirsweep.core.roots.Path.home", return_value=tmp_path),
        ):
            roots = default_roots()

        assert roots == (
            tmp_path / ".config",
            tmp_path / ".local/share",
            tmp_path / ".cache",
        )

    def test_macos_defaults(self, tmp_path: Path) -> None:
        """macOS uses Application Support and Caches."""
        with (
            patch("dirsweep.core.roots.sys.platform", "darwin"),
            patch("dirsweep.core.roots.Path.home", return_value=tmp_path),
        ):
            roots = default_roots()

        assert tmp_path / "Library/Application Support" in roots

    def test_windows_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Windows uses the application-data environment variables that are set."""
        monkeypatch.setenv("APPDATA", "/win/Roaming")
        monkeypatch.setenv("LOCALAPPDATA", "/win/Local")
        monkeypatch.delenv("PROGRAMDATA", raising=False)

        with patch("dirsweep.core.roots.sys.platform", "win32"):
            roots = default_roots()

        assert roots == (Path("/win/Roaming"), Path("/win/Local"))


class TestResolveRoots:
    """Tests for resolve_roots."""

    def test_explicit_roots(self, tmp_path: Path) -> None:
        """Existing explicit roots are resolved and returned in order."""
        a = tmp_path / "a"
        b = tmp_path / "b"
        a.mkdir()
        b.mkdir()

        assert resolve_roots([b, a]) == (b.resolve(), a.resolve())

    def test_duplicates_removed(self, tmp_path: Path) -> None:
        """The same root given twice is scanned once."""
        assert resolve_roots([tmp_path, str(tmp_path)]) == (tmp_path.resolve(),)

    def test_nested_root_dropped(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """A root inside another root is dropped, whichever order they come in."""
        caplog.set_level(logging.WARNING)
        inner = tmp_path / "cache"
        inner.mkdir()

        assert resolve_roots([inner, tmp_path]) == (tmp_path.resolve(),)
        assert "inside another root" in caplog.text

    def test_sibling_prefix_kept(self, tmp_path: Path) -> None:
        """A sibling sharing a name prefix is not nested."""
        a = tmp_path / "data"
        b = tmp_path / "data-old"
        a.mkdir()
        b.mkdir()

        assert resolve_roots([a, b]) == (a.resolve(), b.resolve())

    def test_missing_roots_skipped(self, tmp_path: Path) -> None:
        """Missing roots are skipped when at least one is valid."""
        assert resolve_roots([tmp_path / "missing", tmp_path]) == (tmp_path.resolve(),)

    def test_no_valid_root_raises(self, tmp_path: Path) -> None:
        """With no valid root the run cannot start."""
        with pytest.raises(ConfigurationError, match="No valid scan roots"):
            resolve_roots([tmp_path / "missing"])

    def test_file_is_not_a_root(self, tmp_path: Path) -> None:
        """A regular file is not a valid root."""
        target = tmp_path / "file.txt"
        target.write_text("x")

        with pytest.raises(ConfigurationError):
            resolve_roots([target])

    def test_defaults_used_when_empty(self, tmp_path: Path) -> None:
        """Without explicit roots the platform defaults are used."""
        (tmp_path / ".cache").mkdir()

        with patch("dirsweep.core.roots.default_roots", return_value=(tmp_path / ".cache",)):
            assert resolve_roots([]) == ((tmp_path / ".cache").resolve(),)


class TestFormatLocation:
    """Tests for format_location."""

    def test_under_home(self, tmp_path: Path) -> None:
        """Paths under home are shown with ~."""
        with patch("dirsweep.core.roots.Path.home", return_value=tmp_path):
            assert format_location(tmp_path / ".config") == "~/.config"

    def test_outside_home(self, tmp_path: Path) -> None:
        """Other paths are shown as they are."""
        with patch("dirsweep.core.roots.Path.home", return_value=tmp_path / "home"):
            assert format_location(tmp_path / "data") == str(tmp_path / "data")
