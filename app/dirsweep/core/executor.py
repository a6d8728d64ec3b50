"""Deletion of selected orphan directories.

Removes each selected candidate independently: one failure never stops
the rest of the batch and nothing is retried. Failures are sorted into
LOCKED (in use or access denied, usually harmless) and OTHER.

Freed space is reported twice. The calculated figure is the sum of the
pre-measured sizes of removed directories; the observed figure is the
change in free space on a reference volume sampled right before the
first removal and right after the last. Other processes writing to the
volume make the two differ, and both are reported as measured.
"""

import errno
import logging
import os
import queue
import shutil
import stat
import threading
from collections.abc import Callable, Sequence
from pathlib import Path

from dirsweep.core.sizes import free_space
from dirsweep.models.candidate import Candidate
from dirsweep.models.outcome import DeletionOutcome, DeletionReport, FailureKind

logger = logging.getLogger(__name__)

MAX_WORKERS = 8

# errno values meaning "someone else holds this" or "not allowed"
_LOCKED_ERRNOS = frozenset(
    {
        errno.EACCES,
        errno.EPERM,
        errno.EBUSY,
        errno.ETXTBSY,
        errno.EROFS,
    }
)

# Windows: ERROR_ACCESS_DENIED, ERROR_SHARING_VIOLATION, ERROR_LOCK_VIOLATION
_LOCKED_WINERRORS = frozenset({5, 32, 33})

RemoveFn = Callable[[str], None]
FreeSpaceFn = Callable[[str], int]


def classify_failure(error: OSError) -> FailureKind:
    """Categorize a removal error.

    Args:
        error: Exception raised while removing a directory.

    Returns:
        LOCKED for permission, busy and sharing errors; OTHER otherwise.
    """
    if isinstance(error, PermissionError):
        return FailureKind.LOCKED
    if error.errno in _LOCKED_ERRNOS:
        return FailureKind.LOCKED
    if getattr(error, "winerror", None) in _LOCKED_WINERRORS:
        return FailureKind.LOCKED
    return FailureKind.OTHER


def _clear_readonly(func: Callable[[str], object], path: str, exc: BaseException) -> None:
    """rmtree error hook: retry once after clearing a read-only bit."""
    if not isinstance(exc, PermissionError):
        raise exc
    try:
        os.chmod(path, stat.S_IWRITE | stat.S_IREAD | stat.S_IEXEC)
    except OSError:
        raise exc from None
    func(path)


def remove_tree(path: str) -> None:
    """Remove a directory tree.

    Raises:
        FileNotFoundError: If the path does not exist.
        NotADirectoryError: If the path is not a real directory.
        OSError: If any part of the tree cannot be removed.
    """
    target = Path(path)
    if not target.exists() and not target.is_symlink():
        msg = f"Path does not exist: {path}"
        raise FileNotFoundError(errno.ENOENT, msg, path)
    if target.is_symlink() or not target.is_dir():
        msg = f"Not a directory: {path}"
        raise NotADirectoryError(errno.ENOTDIR, msg, path)
    shutil.rmtree(path, onexc=_clear_readonly)


def reference_volume(candidates: Sequence[Candidate]) -> str | None:
    """Pick the path whose volume is sampled for observed freed space.

    Uses the parent of the first candidate; the parent survives the
    deletion so it can still be sampled afterwards.
    """
    if not candidates:
        return None
    return str(Path(candidates[0].path).parent)


class DeletionExecutor:
    """Removes selected orphan candidates.

    Attributes:
        _workers: Number of worker threads (1 = run in the calling thread).
        _dry_run: If True, report what would be deleted without deleting.
    """

    def __init__(
        self,
        *,
        workers: int = 1,
        dry_run: bool = False,
        remove: RemoveFn = remove_tree,
        measure_free: FreeSpaceFn = free_space,
    ) -> None:
        """Initialize the DeletionExecutor.

        Args:
            workers: Worker pool size (1 to MAX_WORKERS).
            dry_run: If True, nothing is removed.
            remove: Removal primitive; raises OSError on failure.
            measure_free: Free-space probe for the reference volume.

        Raises:
            ValueError: If workers is outside 1..MAX_WORKERS.
        """
        if not 1 <= workers <= MAX_WORKERS:
            msg = f"Workers must be between 1 and {MAX_WORKERS}, got {workers}"
            raise ValueError(msg)
        self._workers = workers
        self._dry_run = dry_run
        self._remove = remove
        self._measure_free = measure_free

    def execute(self, candidates: Sequence[Candidate]) -> DeletionReport:
        """Remove every candidate and aggregate the outcomes.

        Candidates that are not selected orphans are refused with an
        OTHER failure and never touched.

        Args:
            candidates: Selected orphan candidates.

        Returns:
            DeletionReport with outcomes in input order.
        """
        if not candidates:
            return DeletionReport(outcomes=())

        reference = reference_volume(candidates)
        before = self._sample_free(reference)

        if self._workers == 1 or len(candidates) == 1:
            outcomes = [self._delete_single(c) for c in candidates]
        else:
            outcomes = self._run_pool(candidates)

        after = self._sample_free(reference)

        observed: int | None = None
        if self._dry_run:
            observed = 0
        elif before is not None and after is not None:
            observed = after - before

        return DeletionReport(
            outcomes=tuple(outcomes),
            observed_freed_bytes=observed,
            reference_path=reference,
        )

    def _run_pool(self, candidates: Sequence[Candidate]) -> list[DeletionOutcome]:
        """Process candidates on a fixed pool of worker threads.

        Workers take indexed candidates from a work queue and put
        outcomes on a results queue; this thread is the only reader of
        the results queue and restores input order.
        """
        work: queue.Queue[tuple[int, Candidate] | None] = queue.Queue()
        results: queue.Queue[tuple[int, DeletionOutcome]] = queue.Queue()

        for item in enumerate(candidates):
            work.put(item)

        num_workers = min(self._workers, len(candidates))
        for _ in range(num_workers):
            work.put(None)

        def run_worker() -> None:
            while True:
                item = work.get()
                if item is None:
                    break
                index, candidate = item
                results.put((index, self._delete_single(candidate)))

        threads = [
            threading.Thread(target=run_worker, name=f"dirsweep-delete-{i}", daemon=True)
            for i in range(num_workers)
        ]
        for thread in threads:
            thread.start()

        collected: dict[int, DeletionOutcome] = {}
        while len(collected) < len(candidates):
            index, outcome = results.get()
            collected[index] = outcome

        for thread in threads:
            thread.join()

        return [collected[i] for i in range(len(candidates))]

    def _delete_single(self, candidate: Candidate) -> DeletionOutcome:
        if not candidate.is_orphan or not candidate.selected:
            return DeletionOutcome(
                candidate=candidate,
                succeeded=False,
                failure_reason=f"Refusing to delete non-selected or non-orphan: {candidate.path}",
                failure_kind=FailureKind.OTHER,
            )

        if self._dry_run:
            logger.info("Dry-run: would delete %s", candidate.path)
            return DeletionOutcome(candidate=candidate, succeeded=True, dry_run=True)

        try:
            self._remove(candidate.path)
        except OSError as e:
            kind = classify_failure(e)
            logger.warning("Failed to delete %s (%s): %s", candidate.path, kind.value, e)
            return DeletionOutcome(
                candidate=candidate,
                succeeded=False,
                failure_reason=str(e),
                failure_kind=kind,
            )
        # Worker threads must always publish an outcome
        except Exception as e:  # noqa: BLE001
            logger.exception("Unexpected error deleting %s", candidate.path)
            return DeletionOutcome(
                candidate=candidate,
                succeeded=False,
                failure_reason=f"{type(e).__name__}: {e}",
                failure_kind=FailureKind.OTHER,
            )

        logger.info("Deleted %s", candidate.path)
        return DeletionOutcome(candidate=candidate, succeeded=True)

    def _sample_free(self, path: str | None) -> int | None:
        if path is None or self._dry_run:
            return None
        try:
            return self._measure_free(path)
        except OSError as e:
            logger.warning("Cannot sample free space on %s: %s", path, e)
            return None
