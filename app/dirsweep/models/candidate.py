"""Candidate directory models for orphan classification.

This module defines the data structures describing a directory
discovered during scanning and the closed set of classifications
the classifier can assign to it.
"""

from dataclasses import dataclass, replace
from enum import Enum


class ClassificationKind(str, Enum):
    """Kind of classification assigned to a candidate directory.

    Attributes:
        PROTECTED: Name is on the whitelist and must never be deleted.
        SCAN_ERROR: Size measurement failed (e.g., permission denied).
        TOO_SMALL: Measured size is below the minimum threshold.
        MATCHED: Name is attributed to an installed application.
        ORPHAN: Not whitelisted, measurable, large enough, and unowned.
    """

    PROTECTED = "protected"
    SCAN_ERROR = "scan_error"
    TOO_SMALL = "too_small"
    MATCHED = "matched"
    ORPHAN = "orphan"


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of classifying a candidate directory.

    Only MATCHED carries an owner name; constructing any other kind
    with an owner (or MATCHED without one) is rejected.

    Attributes:
        kind: Classification kind.
        owner: Installed application name for MATCHED, None otherwise.
        detail: Optional human-readable detail (e.g., scan error message).
    """

    kind: ClassificationKind
    owner: str | None = None
    detail: str | None = None

    def __post_init__(self) -> None:
        """Validate the owner field against the kind."""
        if self.kind == ClassificationKind.MATCHED and not self.owner:
            msg = "MATCHED classification requires an owner name"
            raise ValueError(msg)
        if self.kind != ClassificationKind.MATCHED and self.owner is not None:
            msg = f"{self.kind.value} classification cannot carry an owner"
            raise ValueError(msg)

    @classmethod
    def protected(cls) -> "Classification":
        return cls(ClassificationKind.PROTECTED)

    @classmethod
    def scan_error(cls, detail: str | None = None) -> "Classification":
        return cls(ClassificationKind.SCAN_ERROR, detail=detail)

    @classmethod
    def too_small(cls) -> "Classification":
        return cls(ClassificationKind.TOO_SMALL)

    @classmethod
    def matched(cls, owner: str) -> "Classification":
        return cls(ClassificationKind.MATCHED, owner=owner)

    @classmethod
    def orphan(cls) -> "Classification":
        return cls(ClassificationKind.ORPHAN)

    @property
    def is_orphan(self) -> bool:
        """Check if this classification makes the candidate deletable."""
        return self.kind == ClassificationKind.ORPHAN

    @property
    def label(self) -> str:
        """Short label for display, including the owner for matches."""
        if self.kind == ClassificationKind.MATCHED:
            return f"matched ({self.owner})"
        return self.kind.value


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """A directory reported by a lister, before classification.

    Attributes:
        path: Absolute directory path.
        name: Directory basename.
        location_tag: Scan root the entry was found under (e.g., "~/.cache").
    """

    path: str
    name: str
    location_tag: str

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Candidate:
    """A classified directory that may be offered for deletion.

    Candidates are immutable. The selection session produces updated
    copies through :meth:`with_selected`; the classification is fixed
    when the candidate is created by the classifier.

    Attributes:
        path: Absolute directory path.
        name: Directory basename.
        size_bytes: Measured recursive size, None if never measured or failed.
        location_tag: Scan root the directory was found under.
        classification: Classifier decision for this directory.
        selected: Whether the directory is selected for deletion.
    """

    path: str
    name: str
    size_bytes: int | None
    location_tag: str
    classification: Classification
    selected: bool = False

    def __post_init__(self) -> None:
        """Validate candidate data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes is not None and self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)
        if self.selected and not self.classification.is_orphan:
            msg = f"Only orphans can be selected: {self.path}"
            raise ValueError(msg)

    @property
    def is_orphan(self) -> bool:
        """Check if the candidate is classified as an orphan."""
        return self.classification.is_orphan

    def with_selected(self, selected: bool) -> "Candidate":
        """Return a copy of this candidate with a new selection flag."""
        if selected == self.selected:
            return self
        return replace(self, selected=selected)
