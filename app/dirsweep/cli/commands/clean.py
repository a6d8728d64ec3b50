"""Clean command implementation.

Scans for orphaned application directories and deletes them, either
after interactive review or, with --auto, all at once.
"""

import typer

from dirsweep.cli.types import (
    AutoOption,
    ConfigOption,
    DryRunOption,
    MinSizeOption,
    RootOption,
    WhitelistOption,
    WorkersOption,
    build_classifier,
    load_settings,
)
from dirsweep.cli.workflow import run_cleanup
from dirsweep.core.config import ConfigurationError
from dirsweep.core.roots import resolve_roots
from dirsweep.core.scanner import DirectoryScanner
from dirsweep.utils.formatting import print_error

app = typer.Typer(
    help="Delete orphaned application directories.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean(
    ctx: typer.Context,
    root: RootOption = None,
    min_size: MinSizeOption = None,
    whitelist: WhitelistOption = None,
    config: ConfigOption = None,
    auto: AutoOption = False,
    dry_run: DryRunOption = False,
    workers: WorkersOption = None,
) -> None:
    """Review and delete orphaned application directories.

    Every orphan starts selected. Toggle entries by number, then enter
    [bold]d[/bold] and type DELETE to confirm. With --auto every orphan
    is deleted without review.

    Examples:
        dirsweep clean                    # Interactive review
        dirsweep clean --auto --dry-run   # Show what --auto would delete
        dirsweep clean -w Steam -m 100    # Protect "Steam", 100 MiB threshold
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = load_settings(
        config_path=config,
        roots=root,
        min_size_mb=min_size,
        whitelist=whitelist,
        workers=workers,
    )
    try:
        roots = resolve_roots(settings.roots)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    scanner = DirectoryScanner(roots, build_classifier(settings))
    candidates = list(scanner.scan())

    report = run_cleanup(
        candidates,
        auto=auto,
        dry_run=dry_run,
        workers=settings.workers,
        command="dirsweep clean",
    )

    if report is not None and report.failed_count:
        raise typer.Exit(code=1)
