"""Core engine: classification, matching, deduplication, selection, deletion."""

from dirsweep.core.classifier import Classifier
from dirsweep.core.config import ConfigurationError, SweepConfig, load_config
from dirsweep.core.dedup import collapse_nested, collapse_nested_by_kind
from dirsweep.core.executor import DeletionExecutor
from dirsweep.core.matcher import find_owner, matches
from dirsweep.core.scanner import DirectoryScanner, list_directories
from dirsweep.core.session import (
    CONFIRMATION_TOKEN,
    SessionPhase,
    SessionState,
    auto_select,
    start_session,
    transition,
)
from dirsweep.core.whitelist import BASELINE_WHITELIST, Whitelist

__all__ = [
    "BASELINE_WHITELIST",
    "CONFIRMATION_TOKEN",
    "Classifier",
    "ConfigurationError",
    "DeletionExecutor",
    "DirectoryScanner",
    "SessionPhase",
    "SessionState",
    "SweepConfig",
    "Whitelist",
    "auto_select",
    "collapse_nested",
    "collapse_nested_by_kind",
    "find_owner",
    "list_directories",
    "load_config",
    "matches",
    "start_session",
    "transition",
]
