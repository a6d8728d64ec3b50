"""Shared Rich display functions for candidates and deletion results.

Provides reusable table builders and summary printers used by the scan,
clean and artifacts commands and by the interactive session.
"""

from collections.abc import Sequence

from rich.markup import escape
from rich.table import Table

from dirsweep.core.session import SessionPhase, SessionState
from dirsweep.models.candidate import Candidate
from dirsweep.models.outcome import DeletionReport, FailureKind
from dirsweep.utils.formatting import (
    console,
    format_size,
    print_info,
    print_success,
    print_warning,
)


def _kind_markup(candidate: Candidate) -> str:
    kind = candidate.classification.kind.value
    return f"[kind.{kind}]{escape(candidate.classification.label)}[/]"


def create_candidates_table(
    candidates: Sequence[Candidate],
    title: str = "Scanned Directories",
) -> Table:
    """Create a Rich table listing classified candidates.

    Args:
        candidates: Candidates to display.
        title: Table title.

    Returns:
        Rich Table with Name, Size, Location and Classification columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Name", no_wrap=True)
    table.add_column("Size", justify="right", style="info")
    table.add_column("Location", style="muted")
    table.add_column("Classification")

    for c in candidates:
        table.add_row(
            escape(c.name),
            format_size(c.size_bytes),
            escape(c.location_tag),
            _kind_markup(c),
        )

    return table


def create_selection_table(
    candidates: Sequence[Candidate],
    title: str = "Orphaned Directories",
) -> Table:
    """Create a numbered table of orphans with their selection marks.

    Numbers are 1-based and match the indices accepted by the session.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", justify="right", width=4)
    table.add_column("", width=3, justify="center")
    table.add_column("Name", no_wrap=True)
    table.add_column("Size", justify="right", style="info")
    table.add_column("Path", style="muted", overflow="fold")

    for index, c in enumerate(candidates, start=1):
        style = "selected" if c.selected else "unselected"
        mark = "\\[x]" if c.selected else "\\[ ]"
        table.add_row(
            str(index),
            f"[{style}]{mark}[/]",
            f"[{style}]{escape(c.name)}[/]",
            format_size(c.size_bytes),
            escape(c.path),
        )

    return table


def render_session(state: SessionState) -> None:
    """Print the last command feedback and, while reviewing, the list."""
    if state.message:
        style = "error" if state.is_error else "info"
        console.print(f"[{style}]{escape(state.message)}[/]")

    if state.phase != SessionPhase.REVIEWING:
        return

    console.print(create_selection_table(state.candidates))
    console.print(
        f"[muted]{state.selected_count} of {len(state.candidates)} selected, "
        f"{format_size(state.selected_size)}[/]"
    )


def print_scan_summary(candidates: Sequence[Candidate]) -> None:
    """Print counts per classification kind and the orphan total."""
    counts: dict[str, int] = {}
    for c in candidates:
        kind = c.classification.kind.value
        counts[kind] = counts.get(kind, 0) + 1

    orphans = [c for c in candidates if c.is_orphan]
    orphan_size = sum(c.size_bytes or 0 for c in orphans)
    parts = ", ".join(f"{count} {kind}" for kind, count in sorted(counts.items())) or "none"

    console.print(f"\n[dim]Scanned {len(candidates)} directories: {parts}[/dim]")
    console.print(
        f"[dim]Found {len(orphans)} orphaned directories ({format_size(orphan_size)} total)[/dim]"
    )


def create_results_table(report: DeletionReport) -> Table:
    """Create a Rich table of deletion outcomes."""
    table = Table(
        title="Deletion Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=10, justify="center")
    table.add_column("Path", no_wrap=True)
    table.add_column("Size", justify="right", style="info")
    table.add_column("Details", style="muted")

    for outcome in report.outcomes:
        if outcome.dry_run:
            status = "[info]dry-run[/]"
            detail = "Would delete"
        elif outcome.succeeded:
            status = "[success]deleted[/]"
            detail = ""
        elif outcome.failure_kind == FailureKind.LOCKED:
            status = "[warning]locked[/]"
            detail = outcome.failure_reason or "In use or access denied"
        else:
            status = "[error]failed[/]"
            detail = outcome.failure_reason or "Unknown error"
        table.add_row(
            status,
            escape(outcome.candidate.path),
            format_size(outcome.candidate.size_bytes),
            escape(detail),
        )

    return table


def print_deletion_summary(report: DeletionReport) -> None:
    """Print counts and both freed-space figures.

    The calculated and observed figures are printed as measured, side by
    side; other processes writing to the disk make them differ.
    """
    if report.dry_run:
        print_info(
            f"Dry-run: {report.deleted_count} directory(ies) would be deleted "
            f"({format_size(report.deleted_size)} calculated)."
        )
        return

    if report.failed_count == 0:
        print_success(f"All {report.deleted_count} directory(ies) deleted.")
    else:
        print_warning(f"{report.deleted_count} deleted, {report.failed_count} failed")
        if report.locked_count:
            print_info(
                f"{report.locked_count} failure(s) were locked or in use; "
                "close the owning application and run again."
            )
        console.print(f"[muted]Failed: {escape(', '.join(report.failed_names))}[/]")

    if report.observed_freed_bytes is None:
        observed = "unavailable"
    else:
        observed = format_size(report.observed_freed_bytes)
    reference = escape(report.reference_path or "-")

    console.print(f"Freed (calculated): [info]{format_size(report.deleted_size)}[/]")
    console.print(f"Freed (observed on {reference}): [info]{observed}[/]")
