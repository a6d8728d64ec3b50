"""Config command implementation.

Shows, locates and initializes the dirsweep configuration file.
"""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer

from dirsweep.core.config import ConfigurationError, SweepConfig, load_config, save_config
from dirsweep.core.paths import get_config_path
from dirsweep.core.whitelist import BASELINE_WHITELIST
from dirsweep.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage the dirsweep configuration file.",
    no_args_is_help=True,
)

PathOption = Annotated[
    Path | None,
    typer.Option("--path", "-p", help="Configuration file to use."),
]


@app.command()
def path() -> None:
    """Print the default configuration file path."""
    console.print(str(get_config_path()), highlight=False, soft_wrap=True)


@app.command()
def show(
    config_path: PathOption = None,
    baseline: Annotated[
        bool,
        typer.Option("--baseline", help="Also list the built-in protected names."),
    ] = False,
) -> None:
    """Show the effective configuration as TOML."""
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(
        tomli_w.dumps(config.model_dump()), highlight=False, markup=False, soft_wrap=True
    )

    if baseline:
        console.print("[header]Built-in protected names:[/]")
        console.print(", ".join(BASELINE_WHITELIST), highlight=False, markup=False)


@app.command()
def init(
    config_path: PathOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Write a configuration file with default settings."""
    target = config_path or get_config_path()
    if target.exists() and not force:
        print_info(f"Configuration already exists: {target} (use --force to overwrite)")
        raise typer.Exit(code=0)

    try:
        written = save_config(SweepConfig(), target)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Configuration written to {written}")
