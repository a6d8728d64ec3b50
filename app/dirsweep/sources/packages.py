"""Package manager name sources (dpkg, Flatpak, Snap)."""

import logging
from collections.abc import Iterator

from dirsweep.sources.base import NameSource
from dirsweep.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# Snaps that are runtime infrastructure rather than applications
_SNAP_RUNTIME_NAMES: frozenset[str] = frozenset({"snapd", "bare"})
_SNAP_RUNTIME_PREFIXES: tuple[str, ...] = ("core", "gnome-", "gtk-common-themes", "kde-frameworks")


class DpkgSource(NameSource):
    """Installed Debian package names via ``dpkg-query``."""

    @property
    def key(self) -> str:
        return "dpkg"

    def is_available(self) -> bool:
        return command_exists("dpkg-query")

    def names(self) -> Iterator[str]:
        result = run_command(["dpkg-query", "-W", "-f", "${Package}\n"], timeout=30.0)
        if not result.success:
            msg = f"dpkg-query failed: {result.stderr.strip()}"
            raise RuntimeError(msg)
        yield from result.lines


class FlatpakSource(NameSource):
    """Installed Flatpak applications.

    Yields both the application ID (``org.mozilla.firefox``) and the
    display name (``Firefox``) so either form can match a directory.
    """

    @property
    def key(self) -> str:
        return "flatpak"

    def is_available(self) -> bool:
        return command_exists("flatpak")

    def names(self) -> Iterator[str]:
        result = run_command(
            ["flatpak", "list", "--app", "--columns=application,name"],
            timeout=15.0,
        )
        if not result.success:
            msg = f"flatpak list failed: {result.stderr.strip()}"
            raise RuntimeError(msg)

        for line in result.lines:
            for field in line.split("\t"):
                if field.strip():
                    yield field.strip()


class SnapSource(NameSource):
    """Installed Snap applications (runtime snaps excluded)."""

    @property
    def key(self) -> str:
        return "snap"

    def is_available(self) -> bool:
        return command_exists("snap")

    def names(self) -> Iterator[str]:
        result = run_command(["snap", "list"], timeout=15.0)
        if not result.success:
            msg = f"snap list failed: {result.stderr.strip()}"
            raise RuntimeError(msg)

        # Skip header line ("Name  Version  Rev  Tracking  Publisher  Notes")
        for line in result.lines[1:]:
            name = line.split()[0]
            if name in _SNAP_RUNTIME_NAMES or name.startswith(_SNAP_RUNTIME_PREFIXES):
                continue
            yield name
