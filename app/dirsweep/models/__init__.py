"""Data models for dirsweep.

This module exports the core data structures used throughout the application.
"""

from dirsweep.models.candidate import (
    Candidate,
    Classification,
    ClassificationKind,
    DirectoryEntry,
)
from dirsweep.models.history import HistoryEntry, create_history_entry
from dirsweep.models.outcome import DeletionOutcome, DeletionReport, FailureKind

__all__ = [
    "Candidate",
    "Classification",
    "ClassificationKind",
    "DeletionOutcome",
    "DeletionReport",
    "DirectoryEntry",
    "FailureKind",
    "HistoryEntry",
    "create_history_entry",
]
