"""CLI commands for dirsweep.

This package contains all subcommand implementations.
"""

from dirsweep.cli.commands import artifacts, clean, config, history, scan

__all__ = ["artifacts", "clean", "config", "history", "scan"]
