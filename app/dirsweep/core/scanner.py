"""Directory scanner for orphaned application data.

Lists the immediate child directories of each scan root and runs them
through the classifier. Scanning is single-threaded and depth-first, so
the same tree always produces the same candidates in the same order.
"""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from dirsweep.core.classifier import Classifier
from dirsweep.core.roots import format_location
from dirsweep.models.candidate import Candidate, DirectoryEntry

logger = logging.getLogger(__name__)


def list_directories(roots: Iterable[Path]) -> Iterator[DirectoryEntry]:
    """Yield the immediate child directories of each root.

    Symbolic links are skipped so that a link into another tree is never
    offered for deletion. Entries are sorted by name within each root.
    Unreadable roots are logged and skipped.

    Args:
        roots: Directories to list.

    Yields:
        DirectoryEntry for each child directory.
    """
    for root in roots:
        location = format_location(root)
        try:
            entries = sorted(root.iterdir(), key=lambda p: p.name.casefold())
        except PermissionError:
            logger.warning("Permission denied scanning directory: %s", root)
            continue
        except OSError as e:
            logger.warning("Cannot scan directory %s: %s", root, e)
            continue

        for entry in entries:
            try:
                if entry.is_symlink() or not entry.is_dir():
                    continue
            except OSError:
                logger.warning("Cannot determine type of: %s", entry)
                continue

            yield DirectoryEntry(path=str(entry), name=entry.name, location_tag=location)


class DirectoryScanner:
    """Classifies every top-level directory under a set of roots.

    Args:
        roots: Validated scan roots (see :func:`dirsweep.core.roots.resolve_roots`).
        classifier: Classifier configured with whitelist, threshold and
            installed names.
    """

    def __init__(self, roots: Iterable[Path], classifier: Classifier) -> None:
        self._roots = tuple(roots)
        self._classifier = classifier

    @property
    def roots(self) -> tuple[Path, ...]:
        return self._roots

    def scan(self) -> Iterator[Candidate]:
        """Classify each listed directory.

        Yields:
            One Candidate per child directory, in listing order.
        """
        for entry in list_directories(self._roots):
            yield self._classifier.classify(entry)
