"""CLI package for dirsweep.

This package contains the Typer application and all subcommands.
"""

from dirsweep.cli.main import app

__all__ = ["app"]
