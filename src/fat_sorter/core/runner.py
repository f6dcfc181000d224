"""Run reorganizations over several root folders on a worker thread."""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .cancellation import CancellationToken
from .reorganizer import DirectoryReorganizer, Outcome, ReorganizationCounters, ReorganizationResult

logger = logging.getLogger(__name__)

SPLIT_WARNING = "After an error, files may be in their original folder or a temporary folder."


@dataclass
class BatchResult:
    """Results for every root folder processed, in order."""
    results: List[ReorganizationResult] = field(default_factory=list)

    @property
    def counters(self) -> ReorganizationCounters:
        totals = ReorganizationCounters()
        for result in self.results:
            totals.add(result.counters)
        return totals

    @property
    def outcome(self) -> Outcome:
        for result in self.results:
            if not result.succeeded:
                return result.outcome
        return Outcome.SUCCESS

    @property
    def stranded_folders(self) -> List[Path]:
        """Temporary folders left holding content after a failure or cancel."""
        return [result.temp_folder for result in self.results if result.temp_folder]


def reorganize_all(reorganizer: DirectoryReorganizer, roots: Iterable[Path]) -> BatchResult:
    """Reorganize each root in turn, stopping at the first that doesn't succeed."""
    batch = BatchResult()
    for root in roots:
        result = reorganizer.reorganize(Path(root))
        batch.results.append(result)
        if not result.succeeded:
            break
    return batch


def format_summary(batch: BatchResult) -> List[str]:
    """Summary lines telling the user what was found and changed."""
    lines = []
    if batch.outcome is not Outcome.SUCCESS:
        lines.append(SPLIT_WARNING)
        for folder in batch.stranded_folders:
            lines.append(f"Temporary folder left in place: {folder}")

    counters = batch.counters
    moved = counters.entries_moved
    sorted_count = counters.subfolders_resorted
    lines.append(
        f"Moved {moved:,} {'file (or subfolder)' if moved == 1 else 'files (or subfolders)'}"
        f" and sorted {sorted_count:,} {'subfolder' if sorted_count == 1 else 'subfolders'}."
    )
    return lines


class ReorganizationJob:
    """Runs ``reorganize_all`` on a dedicated thread.

    The controlling thread stays free to call ``cancel()``, which takes
    effect at the worker's next checkpoint between filesystem operations.
    """

    def __init__(self, reorganizer: DirectoryReorganizer, roots: Iterable[Path]):
        self.reorganizer = reorganizer
        self.roots = [Path(root) for root in roots]
        self._result: Optional[BatchResult] = None
        self._exception: Optional[BaseException] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def token(self) -> CancellationToken:
        return self.reorganizer.token

    def start(self) -> None:
        """Start the worker thread."""
        if self._thread is not None:
            raise RuntimeError("Reorganization job already started")

        self._thread = threading.Thread(target=self._run, name="fat-sorter-worker", daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        """Ask the worker to stop at its next checkpoint."""
        logger.info("Cancellation requested")
        self.token.cancel()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker; return True once it has finished."""
        if self._thread is None:
            raise RuntimeError("Reorganization job not started")
        self._thread.join(timeout)
        return not self._thread.is_alive()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def result(self) -> BatchResult:
        """Get the finished batch, re-raising anything the worker didn't expect."""
        if self.running or self._thread is None:
            raise RuntimeError("Reorganization job has not finished")
        if self._exception is not None:
            raise self._exception
        return self._result

    def _run(self) -> None:
        try:
            self._result = reorganize_all(self.reorganizer, self.roots)
        except Exception as e:
            logger.exception("Unexpected error in reorganization worker")
            self._exception = e
        finally:
            self.reorganizer.sink.set_status("")
