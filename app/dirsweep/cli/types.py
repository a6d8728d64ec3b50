"""Shared types and helpers for CLI commands.

This module merges the configuration file with command-line overrides
and builds the engine objects every command needs, so the commands do
not duplicate that wiring.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from dirsweep.core.classifier import Classifier
from dirsweep.core.config import ConfigurationError, SweepConfig, load_config
from dirsweep.core.whitelist import Whitelist
from dirsweep.sources import collect_installed_names, get_sources
from dirsweep.utils.formatting import print_error

# Reusable option declarations
RootOption = Annotated[
    list[Path] | None,
    typer.Option("--root", "-r", help="Directory whose children are scanned (repeatable)."),
]
MinSizeOption = Annotated[
    float | None,
    typer.Option("--min-size", "-m", min=0, help="Minimum orphan size in MiB."),
]
WhitelistOption = Annotated[
    list[str] | None,
    typer.Option("--whitelist", "-w", help="Extra directory name to protect (repeatable)."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Configuration file to use."),
]
WorkersOption = Annotated[
    int | None,
    typer.Option("--workers", "-j", min=1, max=8, help="Parallel deletion workers."),
]
AutoOption = Annotated[
    bool,
    typer.Option("--auto", "-y", help="Delete every orphan without interactive review."),
]
DryRunOption = Annotated[
    bool,
    typer.Option("--dry-run", help="Show what would be deleted."),
]


@dataclass(frozen=True, slots=True)
class RunSettings:
    """Effective settings for one command run.

    Attributes:
        config: Configuration file contents (or defaults).
        roots: Requested scan roots (unvalidated).
        min_size_bytes: Minimum orphan size.
        whitelist: Protected names (baseline + config + CLI).
        workers: Deletion worker count.
    """

    config: SweepConfig
    roots: tuple[Path, ...]
    min_size_bytes: int
    whitelist: Whitelist
    workers: int


def load_settings(
    *,
    config_path: Path | None = None,
    roots: list[Path] | None = None,
    min_size_mb: float | None = None,
    whitelist: list[str] | None = None,
    workers: int | None = None,
) -> RunSettings:
    """Merge the configuration file with command-line overrides.

    Exits with code 1 when the configuration file is invalid.
    """
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    effective_roots = tuple(roots) if roots else tuple(Path(r) for r in config.roots)
    threshold = config
    if min_size_mb is not None:
        threshold = config.model_copy(update={"min_size_mb": min_size_mb})

    return RunSettings(
        config=config,
        roots=effective_roots,
        min_size_bytes=threshold.min_size_bytes,
        whitelist=Whitelist([*config.whitelist, *(whitelist or [])]),
        workers=workers if workers is not None else config.workers,
    )


def build_classifier(settings: RunSettings, *, match_installed: bool = True) -> Classifier:
    """Create a Classifier, collecting installed names when requested."""
    installed: list[str] = []
    if match_installed:
        installed = collect_installed_names(
            get_sources(settings.config.installed_sources),
            extra=settings.config.extra_installed,
        )
    return Classifier(
        whitelist=settings.whitelist,
        min_size_bytes=settings.min_size_bytes,
        installed_names=installed,
    )
