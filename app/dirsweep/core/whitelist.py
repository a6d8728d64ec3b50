"""Protected directory names that must never be classified as orphans.

This module defines the baseline list of vendor and system directory
names found under application-data roots, and the Whitelist type that
merges the baseline with user-supplied additions.
"""

from collections.abc import Iterable, Iterator

# Directory names that belong to the OS, a desktop environment, a
# hardware vendor, or a package manager. Compared case-insensitively
# against directory basenames.
BASELINE_WHITELIST: tuple[str, ...] = (
    # Operating system vendors
    "Microsoft",
    "Windows",
    "Packages",
    "Apple",
    "com.apple",
    "Temp",
    "Programs",
    "ProgramData",
    "Comms",
    "ConnectedDevicesPlatform",
    "CrashDumps",
    "D3DSCache",
    "PlaceholderTileLogoFolder",
    "Publishers",
    # Hardware vendors and drivers
    "Intel",
    "NVIDIA",
    "NVIDIA Corporation",
    "AMD",
    "Realtek",
    # Desktop environments and XDG data
    "applications",
    "icons",
    "fonts",
    "fontconfig",
    "mime",
    "Trash",
    "keyrings",
    "recently-used.xbel",
    "dconf",
    "systemd",
    "gtk-3.0",
    "gtk-4.0",
    "pulse",
    "gvfs-metadata",
    "mesa_shader_cache",
    "thumbnails",
    # Package managers and runtimes
    "flatpak",
    "snap",
    "pip",
    "containers",
    "docker",
    # Security
    "gnupg",
    "ssh",
    # dirsweep itself
    "dirsweep",
)


class Whitelist:
    """Immutable case-insensitive set of protected directory names.

    Example:
        >>> wl = Whitelist(extra=["MyTools"])
        >>> "microsoft" in wl
        True
        >>> "mytools" in wl
        True
    """

    __slots__ = ("_names",)

    def __init__(self, extra: Iterable[str] = (), *, include_baseline: bool = True) -> None:
        """Build the whitelist.

        Args:
            extra: Additional names supplied by the caller.
            include_baseline: If False, only ``extra`` names are protected.
        """
        names = list(BASELINE_WHITELIST) if include_baseline else []
        names.extend(extra)
        self._names: frozenset[str] = frozenset(n.strip().casefold() for n in names if n.strip())

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return name.strip().casefold() in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))

    def __repr__(self) -> str:
        return f"Whitelist({len(self._names)} names)"

