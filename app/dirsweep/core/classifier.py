"""Candidate classification.

Decides, for each listed directory, whether it is protected, could not
be measured, is too small to matter, belongs to an installed
application, or is an orphan. The checks run in a fixed order and the
first one that applies decides the result:

1. Whitelisted name -> PROTECTED (the directory is never measured).
2. Size measurement fails -> SCAN_ERROR.
3. Size below the threshold -> TOO_SMALL.
4. Name matches an installed application -> MATCHED(owner).
5. Otherwise -> ORPHAN.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from dirsweep.core.matcher import find_owner
from dirsweep.core.sizes import measure_size
from dirsweep.core.whitelist import Whitelist
from dirsweep.models.candidate import Candidate, Classification, DirectoryEntry

logger = logging.getLogger(__name__)

SizeProbe = Callable[[str | Path], int]


class Classifier:
    """Classifies listed directories into candidates.

    A Classifier holds no state that changes between calls, so
    classifying the same entry twice yields equal candidates as long as
    the directory on disk is unchanged.

    Attributes:
        whitelist: Protected directory names.
        min_size_bytes: Directories smaller than this are TOO_SMALL.
        installed_names: Known application names, in priority order.
    """

    def __init__(
        self,
        whitelist: Whitelist,
        min_size_bytes: int,
        installed_names: Sequence[str] = (),
        *,
        measure: SizeProbe = measure_size,
    ) -> None:
        """Initialize the Classifier.

        Args:
            whitelist: Protected directory names.
            min_size_bytes: Minimum size for a directory to be an orphan.
            installed_names: Known application names, in priority order.
            measure: Size probe; must raise OSError when measurement fails.

        Raises:
            ValueError: If min_size_bytes is negative.
        """
        if min_size_bytes < 0:
            msg = f"Minimum size cannot be negative, got {min_size_bytes}"
            raise ValueError(msg)
        self.whitelist = whitelist
        self.min_size_bytes = min_size_bytes
        self.installed_names = tuple(installed_names)
        self._measure = measure

    def classify(self, entry: DirectoryEntry) -> Candidate:
        """Classify a single listed directory.

        Args:
            entry: Directory reported by a lister.

        Returns:
            Candidate carrying the classification and the measured size
            (None when the directory was protected or unmeasurable).
        """
        size: int | None = None

        if entry.name in self.whitelist:
            classification = Classification.protected()
        else:
            try:
                size = self._measure(entry.path)
            except OSError as e:
                logger.warning("Cannot measure %s: %s", entry.path, e)
                classification = Classification.scan_error(str(e))
            else:
                classification = self._classify_measured(entry.name, size)

        logger.debug("%s -> %s", entry.path, classification.label)
        return Candidate(
            path=entry.path,
            name=entry.name,
            size_bytes=size,
            location_tag=entry.location_tag,
            classification=classification,
        )

    def classify_all(self, entries: Iterable[DirectoryEntry]) -> list[Candidate]:
        """Classify entries in order."""
        return [self.classify(entry) for entry in entries]

    def _classify_measured(self, name: str, size: int) -> Classification:
        if size < self.min_size_bytes:
            return Classification.too_small()

        owner = find_owner(name, self.installed_names)
        if owner is not None:
            return Classification.matched(owner)

        return Classification.orphan()
