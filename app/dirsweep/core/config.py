"""User configuration.

Settings are stored in ~/.config/dirsweep/config.toml. Every setting has
a default, so a missing file is not an error; command-line options
override whatever the file provides.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dirsweep.core.paths import get_config_path

logger = logging.getLogger(__name__)

InstalledSource = Literal["dpkg", "flatpak", "snap", "desktop"]

# dpkg is opt-in: very short package names ("ed", "at") would match
# almost any directory through the substring test
DEFAULT_INSTALLED_SOURCES: tuple[InstalledSource, ...] = ("flatpak", "snap", "desktop")

BYTES_PER_MB = 1024 * 1024


class ConfigurationError(Exception):
    """Raised when the run cannot start because of invalid settings."""


class SweepConfig(BaseModel):
    """Configuration for scanning and cleanup.

    Attributes:
        min_size_mb: Directories smaller than this (in MiB) are never orphans.
        whitelist: Extra directory names to protect, added to the baseline.
        roots: Directories whose children are scanned. Empty = platform defaults.
        workers: Number of parallel deletion workers.
        installed_sources: Where installed application names are collected from.
        extra_installed: Names always treated as installed applications.
    """

    model_config = ConfigDict(extra="forbid")

    min_size_mb: Annotated[
        float,
        Field(ge=0, description="Minimum orphan size in MiB"),
    ] = 1.0
    whitelist: Annotated[
        list[str],
        Field(default_factory=list, description="Extra protected names"),
    ]
    roots: Annotated[
        list[str],
        Field(default_factory=list, description="Scan roots (empty = defaults)"),
    ]
    workers: Annotated[
        int,
        Field(ge=1, le=8, description="Parallel deletion workers (1-8)"),
    ] = 1
    installed_sources: Annotated[
        list[InstalledSource],
        Field(
            default_factory=lambda: list(DEFAULT_INSTALLED_SOURCES),
            description="Installed-name sources",
        ),
    ]
    extra_installed: Annotated[
        list[str],
        Field(default_factory=list, description="Names always treated as installed"),
    ]

    @property
    def min_size_bytes(self) -> int:
        """Minimum orphan size in bytes."""
        return int(self.min_size_mb * BYTES_PER_MB)


def load_config(path: Path | None = None) -> SweepConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated SweepConfig; defaults if the file does not exist.

    Raises:
        ConfigurationError: If the file cannot be read, parsed, or validated.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return SweepConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read config {config_path}: {e}") from e

    try:
        return SweepConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: SweepConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        config: The SweepConfig to save.
        path: Path to save the config. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigurationError(f"Failed to write config {config_path}: {e}") from e

    return config_path
