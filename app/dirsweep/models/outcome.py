"""Deletion outcome models.

This module defines the per-candidate result of a removal attempt and
the aggregate report produced once a deletion batch has finished.
"""

from dataclasses import dataclass
from enum import Enum

from dirsweep.models.candidate import Candidate


class FailureKind(str, Enum):
    """Category of a failed removal.

    Attributes:
        LOCKED: Directory is in use, locked, or access was denied.
        OTHER: Any other failure (missing path, I/O error, refused candidate).
    """

    LOCKED = "locked"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """Result of a single removal attempt.

    Attributes:
        candidate: The candidate that was operated on.
        succeeded: Whether the directory was removed.
        failure_reason: Error message if the removal failed, None otherwise.
        failure_kind: Failure category if the removal failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    candidate: Candidate
    succeeded: bool
    failure_reason: str | None = None
    failure_kind: FailureKind | None = None
    dry_run: bool = False

    def __post_init__(self) -> None:
        """Validate that failures carry a category."""
        if not self.succeeded and self.failure_kind is None:
            msg = "Failed outcome requires a failure kind"
            raise ValueError(msg)

    @property
    def failed(self) -> bool:
        """Check if the removal failed."""
        return not self.succeeded


@dataclass(frozen=True, slots=True)
class DeletionReport:
    """Aggregate of a deletion batch.

    The calculated and observed freed-space figures are reported side by
    side. They are expected to differ when other processes write to the
    same volume while the batch runs.

    Attributes:
        outcomes: Per-candidate outcomes, in input order.
        observed_freed_bytes: Free-space delta on the reference volume,
            None if it could not be sampled.
        reference_path: Path whose volume was sampled for free space.
    """

    outcomes: tuple[DeletionOutcome, ...]
    observed_freed_bytes: int | None = None
    reference_path: str | None = None

    @property
    def succeeded(self) -> list[DeletionOutcome]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def failed(self) -> list[DeletionOutcome]:
        return [o for o in self.outcomes if o.failed]

    @property
    def deleted_count(self) -> int:
        return len(self.succeeded)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def deleted_size(self) -> int:
        """Calculated freed bytes: pre-measured sizes of removed candidates."""
        return sum(o.candidate.size_bytes or 0 for o in self.succeeded)

    @property
    def failed_names(self) -> list[str]:
        return [o.candidate.name for o in self.failed]

    @property
    def locked_count(self) -> int:
        return sum(1 for o in self.failed if o.failure_kind == FailureKind.LOCKED)

    @property
    def dry_run(self) -> bool:
        return bool(self.outcomes) and all(o.dry_run for o in self.outcomes)
