"""dirsweep - find and remove orphaned application directories."""

__version__ = "0.1.0"
