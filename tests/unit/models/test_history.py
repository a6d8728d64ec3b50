"""Unit tests for history entry models."""

import json

import pytest
from dirsweep.models.candidate import Candidate, Classification
from dirsweep.models.history import HistoryEntry, create_history_entry
from dirsweep.models.outcome import DeletionOutcome, DeletionReport, FailureKind


def _orphan(name: str, size: int) -> Candidate:
    return Candidate(f"/data/{name}", name, size, "/data", Classification.orphan(), True)


@pytest.fixture
def report() -> DeletionReport:
    return DeletionReport(
        outcomes=(
            DeletionOutcome(_orphan("A", 1000), succeeded=True),
            DeletionOutcome(
                _orphan("B", 500),
                succeeded=False,
                failure_reason="denied",
                failure_kind=FailureKind.LOCKED,
            ),
        ),
        observed_freed_bytes=900,
        reference_path="/data",
    )


class TestHistoryEntry:
    """Tests for HistoryEntry."""

    def test_requires_id(self) -> None:
        """Empty IDs are rejected."""
        with pytest.raises(ValueError, match="ID cannot be empty"):
            HistoryEntry("", "2026-01-01T00:00:00+00:00", "c", ("/a",), (), 0, None)

    def test_requires_paths(self) -> None:
        """An entry must reference at least one path."""
        with pytest.raises(ValueError, match="at least one path"):
            HistoryEntry("abc", "2026-01-01T00:00:00+00:00", "c", (), (), 0, None)

    def test_json_line_round_trip(self) -> None:
        """A JSON line restores the same entry."""
        entry = HistoryEntry(
            id="abc123456789",
            timestamp="2026-01-26T14:30:00+00:00",
            command="dirsweep clean",
            deleted=("/data/A",),
            failed=("/data/B",),
            calculated_freed_bytes=1000,
            observed_freed_bytes=None,
            metadata={"mode": "auto"},
        )

        line = entry.to_json_line()

        assert "\n" not in line
        assert HistoryEntry.from_json_line(line) == entry

    def test_from_dict_missing_field(self) -> None:
        """A record without a timestamp cannot be loaded."""
        with pytest.raises(KeyError):
            HistoryEntry.from_dict({"id": "abc"})


class TestCreateHistoryEntry:
    """Tests for create_history_entry."""

    def test_from_report(self, report: DeletionReport) -> None:
        """Paths and both freed-space figures are taken from the report."""
        entry = create_history_entry(report, "dirsweep clean", {"workers": 2})

        assert len(entry.id) == 12
        assert entry.command == "dirsweep clean"
        assert entry.deleted == ("/data/A",)
        assert entry.failed == ("/data/B",)
        assert entry.calculated_freed_bytes == 1000
        assert entry.observed_freed_bytes == 900
        assert entry.metadata == {"workers": 2}
        assert json.loads(entry.to_json_line())["observed_freed_bytes"] == 900

    def test_unique_ids(self, report: DeletionReport) -> None:
        """Each entry gets its own ID."""
        assert create_history_entry(report, "c").id != create_history_entry(report, "c").id

    def test_empty_report_rejected(self) -> None:
        """There is nothing to record for an empty batch."""
        with pytest.raises(ValueError, match="empty deletion report"):
            create_history_entry(DeletionReport(outcomes=()), "c")
