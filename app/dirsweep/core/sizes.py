"""Directory size measurement and free-space sampling."""

import os
import shutil
from pathlib import Path


class SizeMeasurementError(OSError):
    """Raised when a directory tree cannot be fully measured."""


def measure_size(path: str | Path) -> int:
    """Sum the sizes of all files below a directory.

    Symbolic links are counted by their own size and never followed.
    Any unreadable entry aborts the measurement, so a returned size is
    always complete.

    Args:
        path: Directory to measure.

    Returns:
        Total size in bytes.

    Raises:
        SizeMeasurementError: If any part of the tree cannot be read.
    """
    total = 0
    stack = [os.fspath(path)]

    try:
        while stack:
            current = stack.pop()
            with os.scandir(current) as it:
                for entry in it:
                    if entry.is_dir(follow_symlinks=False):
                        stack.append(entry.path)
                    else:
                        total += entry.stat(follow_symlinks=False).st_size
    except OSError as e:
        msg = f"Cannot measure {path}: {e.strerror or e}"
        raise SizeMeasurementError(msg) from e

    return total


def free_space(path: str | Path) -> int:
    """Return the free bytes on the volume holding ``path``.

    Raises:
        OSError: If the volume cannot be queried.
    """
    return shutil.disk_usage(os.fspath(path)).free
