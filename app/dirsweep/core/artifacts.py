"""Development artifact scanning.

Finds regenerable build and dependency directories (``node_modules``,
``__pycache__``, virtual environments, ...) anywhere below a root.
Such directories nest, so the results are collapsed per kind to their
topmost ancestors before being measured and classified.
"""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from dirsweep.core.classifier import Classifier
from dirsweep.core.dedup import collapse_nested_by_kind
from dirsweep.core.roots import format_location
from dirsweep.models.candidate import Candidate, DirectoryEntry

logger = logging.getLogger(__name__)

DEFAULT_ARTIFACT_KINDS: tuple[str, ...] = (
    "node_modules",
    "bower_components",
    "__pycache__",
    ".venv",
    "venv",
    ".tox",
    ".pytest_cache",
    ".mypy_cache",
    "target",
)


def find_artifacts(
    root: Path, kinds: Iterable[str] = DEFAULT_ARTIFACT_KINDS
) -> Iterator[DirectoryEntry]:
    """Walk a tree depth-first and yield every artifact directory.

    Nested artifacts are reported too (the walk descends into matches).
    Symbolic links are never followed and unreadable directories are
    logged and skipped.

    Args:
        root: Directory to walk.
        kinds: Artifact directory names (exact match).

    Yields:
        DirectoryEntry for each matching directory, in walk order.
    """
    wanted = frozenset(kinds)
    location = format_location(root)

    def _on_error(error: OSError) -> None:
        logger.warning("Cannot read directory %s: %s", error.filename, error.strerror)

    for dirpath, dirnames, _filenames in os.walk(root, onerror=_on_error, followlinks=False):
        dirnames.sort()
        for name in dirnames:
            if name in wanted:
                path = os.path.join(dirpath, name)
                if os.path.islink(path):
                    continue
                yield DirectoryEntry(path=path, name=name, location_tag=location)


def scan_artifacts(
    roots: Iterable[Path],
    classifier: Classifier,
    kinds: Iterable[str] = DEFAULT_ARTIFACT_KINDS,
) -> list[Candidate]:
    """Find, collapse and classify artifact directories under roots.

    Args:
        roots: Directories to walk.
        classifier: Classifier to apply to surviving directories.
        kinds: Artifact directory names.

    Returns:
        Classified candidates; no two of the same kind are nested.
    """
    kinds = tuple(kinds)
    found: list[DirectoryEntry] = []
    for root in roots:
        found.extend(find_artifacts(root, kinds))

    survivors = collapse_nested_by_kind(
        found,
        kind_of=lambda e: e.name,
        path_of=lambda e: e.path,
    )
    logger.debug("%d artifact directories, %d after collapsing nested", len(found), len(survivors))
    return classifier.classify_all(survivors)
