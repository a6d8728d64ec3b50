"""Scan command implementation.

Classifies application-data directories and reports orphans without
deleting anything.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer

from dirsweep.cli.display import create_candidates_table, print_scan_summary
from dirsweep.cli.types import (
    ConfigOption,
    MinSizeOption,
    RootOption,
    WhitelistOption,
    build_classifier,
    load_settings,
)
from dirsweep.core.config import ConfigurationError
from dirsweep.core.roots import resolve_roots
from dirsweep.core.scanner import DirectoryScanner
from dirsweep.models.candidate import Candidate
from dirsweep.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Scan for orphaned application directories.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


@app.callback(invoke_without_command=True)
def scan(
    ctx: typer.Context,
    root: RootOption = None,
    min_size: MinSizeOption = None,
    whitelist: WhitelistOption = None,
    config: ConfigOption = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="List every directory, not only orphans."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
    ] = OutputFormat.TABLE,
    export_path: Annotated[
        Path | None,
        typer.Option("--export", "-e", help="Export all results to a JSON file."),
    ] = None,
) -> None:
    """Scan for orphaned application directories.

    Examples:
        dirsweep scan                     # Orphans under the default roots
        dirsweep scan --all               # Every directory with its classification
        dirsweep scan -r ~/data -m 50     # Custom root, 50 MiB threshold
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = load_settings(
        config_path=config,
        roots=root,
        min_size_mb=min_size,
        whitelist=whitelist,
    )
    try:
        roots = resolve_roots(settings.roots)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    scanner = DirectoryScanner(roots, build_classifier(settings))
    candidates = list(scanner.scan())

    if export_path is not None:
        _export_results(candidates, export_path)

    shown = candidates if show_all else [c for c in candidates if c.is_orphan]

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([candidate_to_dict(c) for c in shown]))
        return

    if not shown:
        print_scan_summary(candidates)
        print_success("No orphaned directories found.")
        return

    title = "Scanned Directories" if show_all else "Orphaned Directories"
    console.print(create_candidates_table(shown, title=title))
    print_scan_summary(candidates)


def candidate_to_dict(candidate: Candidate) -> dict[str, Any]:
    """Serialize a candidate for JSON output."""
    return {
        "path": candidate.path,
        "name": candidate.name,
        "size_bytes": candidate.size_bytes,
        "location": candidate.location_tag,
        "classification": candidate.classification.kind.value,
        "owner": candidate.classification.owner,
        "detail": candidate.classification.detail,
    }


def _export_results(candidates: list[Candidate], export_path: Path) -> None:
    """Export every classified candidate to a JSON file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    data = [candidate_to_dict(c) for c in candidates]
    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(data, indent=2))
        print_info(f"Results exported to {export_path}")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
