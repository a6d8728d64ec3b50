"""Installed application name sources.

Collects the names of installed applications from every available
source into one deduplicated, ordered list for ownership matching.
"""

import logging
import subprocess
from collections.abc import Iterable, Sequence

from dirsweep.sources.base import NameSource
from dirsweep.sources.desktop import DesktopEntrySource
from dirsweep.sources.packages import DpkgSource, FlatpakSource, SnapSource

logger = logging.getLogger(__name__)

__all__ = [
    "DesktopEntrySource",
    "DpkgSource",
    "FlatpakSource",
    "NameSource",
    "SnapSource",
    "collect_installed_names",
    "get_sources",
]


def get_sources(keys: Iterable[str] | None = None) -> list[NameSource]:
    """Get source instances for the given configuration keys.

    Args:
        keys: Source keys ("dpkg", "flatpak", "snap", "desktop"); None = all.

    Returns:
        Source instances in canonical order.
    """
    all_sources: list[NameSource] = [
        DpkgSource(),
        FlatpakSource(),
        SnapSource(),
        DesktopEntrySource(),
    ]
    if keys is None:
        return all_sources
    wanted = set(keys)
    return [s for s in all_sources if s.key in wanted]


def collect_installed_names(
    sources: Sequence[NameSource],
    extra: Iterable[str] = (),
) -> list[str]:
    """Collect installed application names from sources.

    Unavailable or failing sources contribute nothing. Names are
    deduplicated case-insensitively, keeping the first spelling seen;
    ``extra`` names come first.

    Args:
        sources: Sources to query, in priority order.
        extra: Names always treated as installed.

    Returns:
        Ordered, deduplicated list of names.
    """
    seen: set[str] = set()
    names: list[str] = []

    def _add(name: str) -> None:
        key = name.strip().casefold()
        if key and key not in seen:
            seen.add(key)
            names.append(name.strip())

    for name in extra:
        _add(name)

    for source in sources:
        if not source.is_available():
            logger.debug("Installed-name source %s is not available", source.key)
            continue
        before = len(names)
        try:
            for name in source.names():
                _add(name)
        except (RuntimeError, OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Cannot query %s for installed names: %s", source.key, e)
            continue
        logger.debug("%s contributed %d name(s)", source.key, len(names) - before)

    return names
