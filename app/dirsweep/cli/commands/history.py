"""History command for viewing past deletion runs."""

import json
from datetime import datetime
from typing import Annotated

import typer
from rich.table import Table

from dirsweep.core.state import HistoryStore
from dirsweep.models.history import HistoryEntry
from dirsweep.utils.formatting import console, format_size, print_info

app = typer.Typer(
    name="history",
    help="View history of deletion runs.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum number of entries to show."),
    ] = 20,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Show past deletion runs, newest first.

    Examples:
        dirsweep history            # Show last 20 runs
        dirsweep history --json     # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    entries = HistoryStore().get_history(limit=limit)

    if not entries:
        print_info("No history entries found.")
        return

    if json_output:
        console.print_json(json.dumps([e.to_dict() for e in entries]))
    else:
        _print_table(entries)


def _print_table(entries: list[HistoryEntry]) -> None:
    table = Table(title="Deletion History", header_style="bold_header", border_style="border")
    table.add_column("ID", style="dim")
    table.add_column("Timestamp")
    table.add_column("Command")
    table.add_column("Deleted", justify="right")
    table.add_column("Failed", justify="right")
    table.add_column("Calculated", justify="right", style="info")
    table.add_column("Observed", justify="right", style="info")

    for entry in entries:
        table.add_row(
            entry.id[:8],
            _format_timestamp(entry.timestamp),
            entry.command,
            str(len(entry.deleted)),
            str(len(entry.failed)),
            format_size(entry.calculated_freed_bytes),
            format_size(entry.observed_freed_bytes),
        )

    console.print(table)


def _format_timestamp(iso_timestamp: str) -> str:
    """Format an ISO 8601 timestamp as YYYY-MM-DD HH:MM."""
    dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    return dt.strftime("%Y-%m-%d %H:%M")
