"""History entry model for deletion runs.

This module defines the record written to the history file after every
deletion batch, providing an audit trail of what was removed and how
much space was reclaimed.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from dirsweep.models.outcome import DeletionReport


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Record of a single deletion run.

    Attributes:
        id: Unique identifier (12-character hex string from UUID).
        timestamp: When the run finished (ISO 8601 format with timezone).
        command: Command that triggered the run (e.g., "dirsweep clean").
        deleted: Paths that were removed.
        failed: Paths whose removal failed.
        calculated_freed_bytes: Sum of pre-measured sizes of removed paths.
        observed_freed_bytes: Free-space delta on the reference volume.
        metadata: Additional context (mode, workers, etc.).
    """

    id: str
    timestamp: str
    command: str
    deleted: tuple[str, ...]
    failed: tuple[str, ...]
    calculated_freed_bytes: int
    observed_freed_bytes: int | None
    metadata: dict[str, Any] = field(default_factory=lambda: {})

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.id:
            msg = "History entry ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        if not self.deleted and not self.failed:
            msg = "History entry must reference at least one path"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "command": self.command,
            "deleted": list(self.deleted),
            "failed": list(self.failed),
            "calculated_freed_bytes": self.calculated_freed_bytes,
            "observed_freed_bytes": self.observed_freed_bytes,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            command=data.get("command", ""),
            deleted=tuple(data.get("deleted", [])),
            failed=tuple(data.get("failed", [])),
            calculated_freed_bytes=int(data.get("calculated_freed_bytes", 0)),
            observed_freed_bytes=data.get("observed_freed_bytes"),
            metadata=data.get("metadata", {}),
        )

    def to_json_line(self) -> str:
        """Serialize to JSON line for JSONL storage (no trailing newline)."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> HistoryEntry:
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        return cls.from_dict(json.loads(line.strip()))


def create_history_entry(
    report: DeletionReport,
    command: str,
    metadata: dict[str, Any] | None = None,
) -> HistoryEntry:
    """Build a HistoryEntry from a finished deletion report.

    Automatically generates a unique ID and current timestamp.

    Args:
        report: Aggregate of the deletion batch.
        command: Command string stored with the entry.
        metadata: Optional additional context.

    Returns:
        New HistoryEntry with auto-generated ID and timestamp.

    Raises:
        ValueError: If the report contains no outcomes.
    """
    if not report.outcomes:
        msg = "Cannot create history entry for an empty deletion report"
        raise ValueError(msg)

    return HistoryEntry(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        command=command,
        deleted=tuple(o.candidate.path for o in report.succeeded),
        failed=tuple(o.candidate.path for o in report.failed),
        calculated_freed_bytes=report.deleted_size,
        observed_freed_bytes=report.observed_freed_bytes,
        metadata=metadata or {},
    )
