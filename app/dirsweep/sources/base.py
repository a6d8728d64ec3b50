"""Abstract base class for installed-name sources.

A source enumerates the names of installed applications from one
package manager or registry. The names are matched against directory
names to decide ownership.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator


class NameSource(ABC):
    """Abstract base class for all installed-name sources.

    Example:
        >>> source = FlatpakSource()
        >>> if source.is_available():
        ...     for name in source.names():
        ...         print(name)
    """

    @property
    @abstractmethod
    def key(self) -> str:
        """Short identifier used in configuration (e.g., "flatpak")."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this source can be queried on the current system."""

    @abstractmethod
    def names(self) -> Iterator[str]:
        """Yield installed application names.

        Raises:
            RuntimeError: If the underlying tool fails.
        """
