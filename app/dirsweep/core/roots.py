"""Scan root resolution.

Roots are the application-data directories whose immediate children are
classified. Callers may pass explicit roots; otherwise the platform's
usual per-user locations are used.
"""

import logging
import os
import sys
from collections.abc import Iterable
from pathlib import Path

from dirsweep.core.config import ConfigurationError
from dirsweep.core.dedup import collapse_nested

logger = logging.getLogger(__name__)

_LINUX_HOME_TARGETS: tuple[str, ...] = (
    ".config",
    ".local/share",
    ".cache",
)

_MACOS_HOME_TARGETS: tuple[str, ...] = (
    "Library/Application Support",
    "Library/Caches",
)

_WINDOWS_ENV_TARGETS: tuple[str, ...] = (
    "APPDATA",
    "LOCALAPPDATA",
    "PROGRAMDATA",
)


def default_roots() -> tuple[Path, ...]:
    """Return the platform's default scan roots (existing or not)."""
    if sys.platform == "win32":
        return tuple(Path(os.environ[var]) for var in _WINDOWS_ENV_TARGETS if os.environ.get(var))

    home = Path.home()
    targets = _MACOS_HOME_TARGETS if sys.platform == "darwin" else _LINUX_HOME_TARGETS
    return tuple(home / t for t in targets)


def resolve_roots(roots: Iterable[str | Path] | None = None) -> tuple[Path, ...]:
    """Expand, validate and deduplicate scan roots.

    Args:
        roots: Explicit roots; None or empty uses :func:`default_roots`.

    Returns:
        Existing root directories, in input order, without duplicates and
        without roots nested inside another root.

    Raises:
        ConfigurationError: If no valid root remains.
    """
    requested = [Path(r).expanduser() for r in roots or ()] or list(default_roots())

    resolved: list[Path] = []
    for root in requested:
        if not root.is_dir():
            logger.warning("Skipping scan root (not a directory): %s", root)
            continue
        absolute = root.resolve()
        if absolute not in resolved:
            resolved.append(absolute)

    if not resolved:
        shown = ", ".join(str(r) for r in requested) or "(none)"
        msg = f"No valid scan roots: {shown}"
        raise ConfigurationError(msg)

    outermost = collapse_nested(resolved, path_of=str)
    for root in resolved:
        if root not in outermost:
            logger.warning("Skipping scan root inside another root: %s", root)

    return tuple(r for r in resolved if r in outermost)


def format_location(root: Path) -> str:
    """Format a root with ``~`` for paths under the home directory.

    Args:
        root: Scan root.

    Returns:
        Tilde-prefixed path string for home dirs, absolute path otherwise.
    """
    try:
        relative = root.relative_to(Path.home())
    except ValueError:
        return str(root)
    return f"~/{relative.as_posix()}"
