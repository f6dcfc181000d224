"""Directory entry model captured at listing time."""

import os
from dataclasses import dataclass
from enum import Enum

from ..exceptions import ConfigurationError


class OrderingPolicy(Enum):
    """Placement of subfolders relative to files."""
    SUBFOLDERS_FIRST = "first"
    SUBFOLDERS_LAST = "last"
    MIXED = "mixed"

    @classmethod
    def from_name(cls, name: str) -> "OrderingPolicy":
        """Look up a policy by its short name ("first", "last", "mixed")."""
        if not isinstance(name, str):
            raise ConfigurationError(f"Sort order must be a name, got {name!r}")
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(policy.value for policy in cls)
            raise ConfigurationError(f"Unknown sort order '{name}' (expected one of: {choices})")


@dataclass(frozen=True, slots=True)
class EntrySnapshot:
    """One directory entry as it was when its folder was listed."""

    name: str
    is_directory: bool
    mod_time: int  # st_mtime_ns
    is_symlink: bool = False

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry) -> "EntrySnapshot":
        """Capture a snapshot from an ``os.scandir`` entry.

        Symbolic links are never treated as directories, so the walk never
        follows them out of the tree being sorted.
        """
        is_symlink = entry.is_symlink()
        stat = entry.stat(follow_symlinks=False)
        return cls(
            name=entry.name,
            is_directory=entry.is_dir(follow_symlinks=False),
            mod_time=stat.st_mtime_ns,
            is_symlink=is_symlink,
        )

    @property
    def kind(self) -> str:
        """Human-readable kind of entry."""
        if self.is_directory:
            return "folder"
        if self.is_symlink:
            return "link"
        return "file"
