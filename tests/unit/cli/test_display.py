"""Unit tests for shared display functions."""

from collections.abc import Callable
from io import StringIO

import pytest
from dirsweep.cli import display
from dirsweep.models.candidate import Candidate, Classification
from dirsweep.models.outcome import DeletionOutcome, DeletionReport, FailureKind
from dirsweep.utils.formatting import THEME
from rich.console import Console


@pytest.fixture
def output(monkeypatch: pytest.MonkeyPatch) -> StringIO:
    """Capture everything the display module prints."""
    buffer = StringIO()
    capture = Console(file=buffer, theme=THEME, width=200, color_system=None)
    monkeypatch.setattr(display, "console", capture)
    monkeypatch.setattr("dirsweep.utils.formatting.console", capture)
    monkeypatch.setattr("dirsweep.utils.formatting.err_console", capture)
    return buffer


def _render(table) -> str:
    buffer = StringIO()
    Console(file=buffer, theme=THEME, width=200, color_system=None).print(table)
    return buffer.getvalue()


class TestTables:
    """Tests for table builders."""

    def test_candidates_table(self, make_candidate: Callable[..., Candidate]) -> None:
        """Classification labels include the owner for matches."""
        table = display.create_candidates_table(
            [make_candidate("Steam", Classification.matched("Steam Client"))]
        )

        text = _render(table)
        assert "Steam" in text
        assert "matched (Steam Client)" in text

    def test_selection_marks(self, make_orphan: Callable[..., Candidate]) -> None:
        """Selected rows show [x], unselected rows show [ ]."""
        table = display.create_selection_table(
            [make_orphan("/data/A", selected=True), make_orphan("/data/B")]
        )

        text = _render(table)
        assert "[x]" in text
        assert "[ ]" in text

    def test_markup_in_names_is_escaped(self, make_orphan: Callable[..., Candidate]) -> None:
        """Directory names containing brackets are shown literally."""
        table = display.create_selection_table([make_orphan("/data/[bold]odd")])

        assert "[bold]odd" in _render(table)


class TestDeletionSummary:
    """Tests for print_deletion_summary."""

    @staticmethod
    def _orphan(name: str, size: int) -> Candidate:
        return Candidate(f"/d/{name}", name, size, "/d", Classification.orphan(), True)

    def test_all_deleted(self, output: StringIO) -> None:
        """Both freed figures are printed as measured."""
        report = DeletionReport(
            outcomes=(DeletionOutcome(self._orphan("A", 2048), succeeded=True),),
            observed_freed_bytes=4096,
            reference_path="/d",
        )

        display.print_deletion_summary(report)

        text = output.getvalue()
        assert "All 1 directory(ies) deleted." in text
        assert "Freed (calculated): 2.0 KB" in text
        assert "Freed (observed on /d): 4.0 KB" in text

    def test_failures_listed(self, output: StringIO) -> None:
        """Failures are counted, named, and locked ones get a hint."""
        report = DeletionReport(
            outcomes=(
                DeletionOutcome(self._orphan("A", 10), succeeded=True),
                DeletionOutcome(
                    self._orphan("B", 10),
                    succeeded=False,
                    failure_reason="in use",
                    failure_kind=FailureKind.LOCKED,
                ),
            ),
        )

        display.print_deletion_summary(report)

        text = output.getvalue()
        assert "1 deleted, 1 failed" in text
        assert "Failed: B" in text
        assert "locked or in use" in text
        assert "unavailable" in text

    def test_dry_run(self, output: StringIO) -> None:
        """Dry-run only reports what would be deleted."""
        report = DeletionReport(
            outcomes=(DeletionOutcome(self._orphan("A", 1024), succeeded=True, dry_run=True),),
            observed_freed_bytes=0,
        )

        display.print_deletion_summary(report)

        text = output.getvalue()
        assert "Dry-run: 1 directory(ies) would be deleted (1.0 KB calculated)." in text
        assert "Freed" not in text
