"""Artifacts command implementation.

Finds regenerable development directories (node_modules, virtual
environments, caches) below one or more project roots and deletes them.
"""

from pathlib import Path
from typing import Annotated

import typer

from dirsweep.cli.display import create_candidates_table, print_scan_summary
from dirsweep.cli.types import (
    AutoOption,
    ConfigOption,
    DryRunOption,
    MinSizeOption,
    WhitelistOption,
    WorkersOption,
    build_classifier,
    load_settings,
)
from dirsweep.cli.workflow import run_cleanup
from dirsweep.core.artifacts import DEFAULT_ARTIFACT_KINDS, scan_artifacts
from dirsweep.core.config import ConfigurationError
from dirsweep.core.roots import resolve_roots
from dirsweep.utils.formatting import console, print_error


def artifacts(
    roots: Annotated[
        list[Path] | None,
        typer.Argument(help="Project directories to search (default: current directory)."),
    ] = None,
    kind: Annotated[
        list[str] | None,
        typer.Option("--kind", "-k", help="Artifact directory name (repeatable)."),
    ] = None,
    min_size: MinSizeOption = None,
    whitelist: WhitelistOption = None,
    config: ConfigOption = None,
    list_only: Annotated[
        bool,
        typer.Option("--list", "-l", help="Only list artifacts, do not delete."),
    ] = False,
    auto: AutoOption = False,
    dry_run: DryRunOption = False,
    workers: WorkersOption = None,
) -> None:
    """Find and delete development artifact directories.

    Nested artifacts of the same kind are collapsed to the outermost one.

    Examples:
        dirsweep artifacts ~/projects --list
        dirsweep artifacts ~/projects -k node_modules --auto
    """
    settings = load_settings(
        config_path=config,
        roots=roots or [Path.cwd()],
        min_size_mb=min_size,
        whitelist=whitelist,
        workers=workers,
    )
    try:
        resolved = resolve_roots(settings.roots)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    classifier = build_classifier(settings, match_installed=False)
    candidates = scan_artifacts(resolved, classifier, kind or DEFAULT_ARTIFACT_KINDS)

    if list_only:
        orphans = [c for c in candidates if c.is_orphan]
        if orphans:
            console.print(create_candidates_table(orphans, title="Artifact Directories"))
        print_scan_summary(candidates)
        return

    report = run_cleanup(
        candidates,
        auto=auto,
        dry_run=dry_run,
        workers=settings.workers,
        command="dirsweep artifacts",
    )

    if report is not None and report.failed_count:
        raise typer.Exit(code=1)
