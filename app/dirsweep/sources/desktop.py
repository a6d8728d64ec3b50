"""Desktop entry name source.

Reads ``Name=`` from ``.desktop`` files in the XDG application
directories. This catches applications installed outside a package
manager (AppImages, tarballs, vendor installers).
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from dirsweep.sources.base import NameSource

logger = logging.getLogger(__name__)


def _application_dirs() -> list[Path]:
    data_home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    data_dirs = os.environ.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"
    bases = [data_home, *data_dirs.split(":")]
    return [Path(b) / "applications" for b in bases if b]


def parse_desktop_name(text: str) -> str | None:
    """Extract the untranslated ``Name=`` of the ``[Desktop Entry]`` group.

    Args:
        text: Contents of a .desktop file.

    Returns:
        The application name, or None if absent.
    """
    in_entry = False
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("["):
            in_entry = line == "[Desktop Entry]"
            continue
        if in_entry and line.startswith("Name="):
            return line[len("Name=") :].strip() or None
    return None


class DesktopEntrySource(NameSource):
    """Application names from XDG ``.desktop`` files.

    Args:
        directories: Directories to read; defaults to the XDG application dirs.
    """

    def __init__(self, directories: list[Path] | None = None) -> None:
        self._directories = directories

    @property
    def key(self) -> str:
        return "desktop"

    def _dirs(self) -> list[Path]:
        return self._directories if self._directories is not None else _application_dirs()

    def is_available(self) -> bool:
        return any(d.is_dir() for d in self._dirs())

    def names(self) -> Iterator[str]:
        for directory in self._dirs():
            if not directory.is_dir():
                continue
            for desktop_file in sorted(directory.glob("*.desktop")):
                try:
                    text = desktop_file.read_text(encoding="utf-8", errors="replace")
                except OSError as e:
                    logger.debug("Cannot read %s: %s", desktop_file, e)
                    continue
                name = parse_desktop_name(text)
                if name:
                    yield name
                # The file stem is usually the application ID
                yield desktop_file.stem
