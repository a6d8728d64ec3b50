"""Selection, deletion and history recording shared by cleanup commands."""

import logging
from collections.abc import Sequence

from dirsweep.cli.display import create_results_table, print_deletion_summary
from dirsweep.cli.interactive import run_session
from dirsweep.core.dedup import collapse_nested
from dirsweep.core.executor import DeletionExecutor
from dirsweep.core.session import auto_select
from dirsweep.core.state import HistoryStore
from dirsweep.models.candidate import Candidate
from dirsweep.models.history import create_history_entry
from dirsweep.models.outcome import DeletionReport
from dirsweep.utils.formatting import console, print_info, print_success, print_warning

logger = logging.getLogger(__name__)


def select_for_deletion(candidates: Sequence[Candidate], *, auto: bool) -> list[Candidate]:
    """Choose what to delete, interactively or (auto) every orphan."""
    if auto:
        return auto_select(candidates)
    return run_session(candidates)


def outermost(selection: Sequence[Candidate]) -> list[Candidate]:
    """Drop selected candidates that lie inside another selected candidate.

    Artifact candidates are only collapsed within one kind, so a ``.venv``
    inside a selected ``node_modules`` can still be selected. Removing the
    ancestor removes it too. Selection order is kept.
    """
    kept = {id(c) for c in collapse_nested(selection, path_of=lambda c: c.path)}
    for candidate in selection:
        if id(candidate) not in kept:
            logger.debug("Skipping %s: inside another selected directory", candidate.path)
    return [c for c in selection if id(c) in kept]


def run_cleanup(
    candidates: Sequence[Candidate],
    *,
    auto: bool,
    dry_run: bool,
    workers: int,
    command: str,
) -> DeletionReport | None:
    """Select orphans, delete them and record the run.

    Args:
        candidates: Classified candidates (any classification).
        auto: Skip the interactive session and delete every orphan.
        dry_run: Report what would be deleted without deleting.
        workers: Deletion worker count.
        command: Command string stored in history.

    Returns:
        The deletion report, or None if nothing was deleted.
    """
    if not any(c.is_orphan for c in candidates):
        print_success("No orphaned directories found.")
        return None

    selection = select_for_deletion(candidates, auto=auto)
    if not selection:
        print_info("Nothing deleted.")
        return None

    executor = DeletionExecutor(workers=workers, dry_run=dry_run)
    report = executor.execute(outermost(selection))

    console.print(create_results_table(report))
    print_deletion_summary(report)

    if not dry_run:
        record_history(report, command=command, auto=auto, workers=workers)

    return report


def record_history(report: DeletionReport, *, command: str, auto: bool, workers: int) -> None:
    """Append the run to the history file; failures only warn."""
    try:
        entry = create_history_entry(
            report,
            command=command,
            metadata={"mode": "auto" if auto else "interactive", "workers": workers},
        )
        HistoryStore().record(entry)
    except (OSError, RuntimeError, ValueError) as e:
        logger.warning("Failed to record deletion history: %s", e)
        print_warning(f"Could not record to history: {e}")
