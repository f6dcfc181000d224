"""Recreate folders with their entries written back in sorted order.

FAT16/FAT32 list a folder's entries in the order they were created. To sort
a folder we create an empty temporary sibling, rename every entry into it in
sorted order, delete the emptied original and give the temporary folder the
original name. Subfolders are recreated inside the temporary folder and
filled the same way, so the whole tree is rewritten in one pass.

The swap at the end is two separate calls (delete, then rename) and is not
atomic: a crash between them leaves the sorted content under the temporary
name. Every failure is reported with the paths involved so nothing is left
ambiguous.
"""

import logging
import os
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from ..exceptions import (
    CreateFailedError,
    DeleteFailedError,
    FatSorterError,
    InvalidTargetError,
    MoveFailedError,
    RenameFailedError,
)
from ..models.config import Config
from ..models.entry import EntrySnapshot, OrderingPolicy
from ..progress_sink import NullProgressSink, ProgressSink
from .cancellation import CancellationToken
from .sort_keys import sort_entries
from .throttle import OperationThrottle

logger = logging.getLogger(__name__)

TEMP_PREFIX = "Temp"
MAX_TEMP_ATTEMPTS = 100


class Outcome(Enum):
    """How a run ended."""
    SUCCESS = "success"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class ReorganizationCounters:
    """Totals for one run."""
    entries_moved: int = 0  # files and non-recursed subfolders renamed
    subfolders_resorted: int = 0  # subfolders recreated and refilled

    @property
    def total(self) -> int:
        return self.entries_moved + self.subfolders_resorted

    def add(self, other: "ReorganizationCounters") -> None:
        self.entries_moved += other.entries_moved
        self.subfolders_resorted += other.subfolders_resorted


@dataclass
class ReorganizationResult:
    """Counters and outcome for one root folder."""
    root: Path
    counters: ReorganizationCounters
    outcome: Outcome
    error: Optional[FatSorterError] = None
    temp_folder: Optional[Path] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is Outcome.SUCCESS


@dataclass
class RunState:
    """Mutable state threaded through one top-level reorganization."""
    token: CancellationToken
    sink: ProgressSink
    counters: ReorganizationCounters = field(default_factory=ReorganizationCounters)


class DirectoryReorganizer:
    """Rewrite a folder tree so every folder lists its entries in order."""

    def __init__(
        self,
        policy: OrderingPolicy = OrderingPolicy.SUBFOLDERS_FIRST,
        case_sensitive: bool = False,
        recurse: bool = True,
        throttle: Optional[OperationThrottle] = None,
        sink: Optional[ProgressSink] = None,
        token: Optional[CancellationToken] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.policy = policy
        self.case_sensitive = case_sensitive
        self.recurse = recurse
        self.throttle = throttle or OperationThrottle()
        self.sink = sink or NullProgressSink()
        self.token = token or CancellationToken()
        self._clock = clock

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "DirectoryReorganizer":
        """Create a reorganizer from a loaded configuration."""
        return cls(
            policy=config.sorting.policy,
            case_sensitive=config.sorting.case_sensitive,
            recurse=config.sorting.recurse,
            throttle=OperationThrottle.from_config(config.throttle),
            **kwargs
        )

    def reorganize(self, root_path: Path) -> ReorganizationResult:
        """Sort one folder, and its subfolders when recursion is on.

        Fatal filesystem errors are reported through the sink and returned in
        the result rather than raised, so the caller always gets the counters
        accumulated before the failure.
        """
        state = RunState(token=self.token, sink=self.sink)
        root_path = Path(root_path)
        result = ReorganizationResult(root=root_path, counters=state.counters,
                                      outcome=Outcome.SUCCESS)

        if state.token.cancelled:
            result.outcome = Outcome.CANCELLED
            return result

        try:
            completed = self._reorganize_root(root_path, state, result)
        except FatSorterError as e:
            logger.error("Reorganization of %s failed: %s", root_path, e)
            state.sink.log(str(e))
            result.outcome = Outcome.FAILED
            result.error = e
            return result

        if not completed:
            logger.info("Reorganization of %s cancelled", root_path)
            result.outcome = Outcome.CANCELLED
        return result

    def list_entries(self, folder: Path) -> List[EntrySnapshot]:
        """List a folder's entries in the order they will be recreated."""
        return sort_entries(self._list_children(folder), self.policy, self.case_sensitive)

    def _reorganize_root(self, given: Path, state: RunState,
                         result: ReorganizationResult) -> bool:
        """Replace ``given`` with a sorted copy. Returns False if cancelled."""
        try:
            folder = given.resolve()
        except (OSError, RuntimeError):
            folder = None
        if folder is None or not folder.is_dir():
            raise InvalidTargetError(f"Not a folder (directory): {given}", given)
        result.root = folder

        stamp = folder.stat().st_mtime_ns
        state.sink.log(f"Original folder is: {folder}")

        parent = folder.parent
        if parent == folder:
            raise InvalidTargetError(f"Can't get parent folder for: {folder}", folder)
        state.sink.log(f"Parent folder is: {parent}")

        temp = self._make_temp_folder(parent)
        result.temp_folder = temp
        state.sink.log(f"Temporary folder is: {temp}")
        if state.token.cancelled:
            return False

        if not self._relocate_children(folder, temp, state):
            return False

        self.throttle.before_delete()
        try:
            folder.rmdir()
        except OSError as e:
            raise DeleteFailedError(f"Can't delete original folder: {folder}", folder, e)
        state.sink.log(f"Deleted original folder: {folder}")

        self.throttle.before_rename()
        try:
            temp.rename(folder)
        except OSError as e:
            raise RenameFailedError(f"Can't rename {temp} as {folder}", temp, folder, e)
        state.sink.log(f"Renamed {temp} as {folder}")
        result.temp_folder = None

        self._restore_mod_time(folder, stamp)
        return True

    def _relocate_children(self, source: Path, target: Path, state: RunState) -> bool:
        """Move every entry of ``source`` into the empty folder ``target``.

        Returns False as soon as cancellation is seen; entries already moved
        stay in ``target`` and the rest stay in ``source``.
        """
        if state.token.cancelled:
            return False

        for entry in self.list_entries(source):
            if state.token.cancelled:
                return False

            old_path = source / entry.name
            if not os.path.lexists(old_path):
                logger.debug("Skipping %s, removed since listing", old_path)
                continue
            state.sink.set_status(str(old_path))
            new_path = target / entry.name

            if self.recurse and entry.is_directory:
                if not self._resort_subfolder(old_path, new_path, state):
                    return False
            else:
                self._move_entry(old_path, new_path, state)

            self._restore_mod_time(new_path, entry.mod_time, follow_symlinks=not entry.is_symlink)

        return True

    def _resort_subfolder(self, old_path: Path, new_path: Path, state: RunState) -> bool:
        state.sink.log(f"Resorting subfolder: {old_path}")
        self.throttle.before_create()
        try:
            new_path.mkdir()
        except OSError as e:
            raise CreateFailedError(f"Can't create subfolder: {new_path}", new_path, e)
        state.sink.log(f"Created subfolder: {new_path}")

        if not self._relocate_children(old_path, new_path, state):
            return False

        self.throttle.before_delete()
        try:
            old_path.rmdir()
        except OSError as e:
            raise DeleteFailedError(f"Can't delete subfolder: {old_path}", old_path, e)
        state.sink.log(f"Deleted subfolder: {old_path}")
        state.counters.subfolders_resorted += 1
        return True

    def _move_entry(self, old_path: Path, new_path: Path, state: RunState) -> None:
        message = f"Can't rename {old_path} as {new_path}"
        # os.rename replaces existing files on POSIX
        if os.path.lexists(new_path):
            raise MoveFailedError(message, old_path, new_path,
                                  FileExistsError(f"{new_path} already exists"))

        self.throttle.before_move()
        try:
            old_path.rename(new_path)
        except OSError as e:
            raise MoveFailedError(message, old_path, new_path, e)
        state.sink.log(f"Moved {old_path} -> {new_path}")
        state.counters.entries_moved += 1

    def _list_children(self, folder: Path) -> List[EntrySnapshot]:
        """Snapshot a folder's entries; an unreadable folder has none."""
        entries = []
        try:
            with os.scandir(folder) as it:
                for dir_entry in it:
                    try:
                        entries.append(EntrySnapshot.from_dir_entry(dir_entry))
                    except FileNotFoundError:
                        continue
        except OSError as e:
            logger.warning("Can't list %s, treating it as empty: %s", folder, e)
            return []
        return entries

    def _make_temp_folder(self, parent: Path) -> Path:
        """Create an empty, uniquely named folder beside the one being sorted."""
        stamp = int(self._clock() * 1000)
        for attempt in range(MAX_TEMP_ATTEMPTS):
            temp = parent / f"{TEMP_PREFIX}{stamp + attempt}"
            try:
                temp.mkdir()
                return temp
            except FileExistsError:
                continue
            except OSError as e:
                raise CreateFailedError(f"Can't create temporary folder: {temp}", temp, e)
        raise CreateFailedError(f"Can't create temporary folder: {temp}", temp,
                                FileExistsError(f"{temp} already exists"))

    def _restore_mod_time(self, path: Path, mod_time_ns: int, follow_symlinks: bool = True) -> None:
        """Put back a captured modification time; failures are only logged."""
        try:
            stat = os.stat(path, follow_symlinks=follow_symlinks)
            os.utime(path, ns=(stat.st_atime_ns, mod_time_ns), follow_symlinks=follow_symlinks)
        except (OSError, NotImplementedError) as e:
            logger.warning("Can't restore modification time of %s: %s", path, e)
