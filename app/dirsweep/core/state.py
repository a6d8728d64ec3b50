"""Deletion history persistence.

This module provides the HistoryStore class for appending and reading
deletion run records in a JSONL file.
"""

import json
import logging
from pathlib import Path

from dirsweep.core.paths import ensure_dir, get_state_dir
from dirsweep.models.history import HistoryEntry

logger = logging.getLogger(__name__)


class HistoryStore:
    """Manages deletion history in a JSONL file.

    Storage location: ~/.local/state/dirsweep/history.jsonl

    Each line is a complete JSON object representing a HistoryEntry,
    which keeps writes append-only.
    """

    HISTORY_FILENAME = "history.jsonl"

    def __init__(self, state_dir: Path | None = None) -> None:
        """Initialize HistoryStore.

        Args:
            state_dir: Optional override for state directory.
                      Default: ~/.local/state/dirsweep
        """
        self._state_dir = state_dir if state_dir is not None else get_state_dir()

    @property
    def history_path(self) -> Path:
        return self._state_dir / self.HISTORY_FILENAME

    def record(self, entry: HistoryEntry) -> None:
        """Append a run record to the history file.

        Raises:
            RuntimeError: If the state directory cannot be created.
            OSError: If the file cannot be written.
        """
        ensure_dir(self._state_dir, "state")

        with self.history_path.open(mode="a", encoding="utf-8") as f:
            f.write(entry.to_json_line() + "\n")
            f.flush()

    def get_history(self, limit: int | None = None) -> list[HistoryEntry]:
        """Read history entries, newest first.

        Corrupt lines are logged and skipped.

        Args:
            limit: Maximum number of entries to return; None returns all.

        Returns:
            List of HistoryEntry, newest first (empty if no file exists).
        """
        if not self.history_path.exists():
            return []

        entries: list[HistoryEntry] = []

        with self.history_path.open(encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    entries.append(HistoryEntry.from_json_line(line))
                except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
                    logger.warning("Skipping corrupt history line %d: %s", line_num, e)

        entries.reverse()

        if limit is not None:
            return entries[:limit]
        return entries
