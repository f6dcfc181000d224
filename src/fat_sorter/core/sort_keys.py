"""Sort keys that decide the order entries are written back in.

Keys are plain strings compared by codepoint, never by locale collation, so
the same names always come out in the same order on every machine.
"""

from typing import Iterable, List, NewType

from ..models.entry import EntrySnapshot, OrderingPolicy

SortKey = NewType("SortKey", str)

# Separates the lowercase form from the original name in case-insensitive keys
CASE_SEPARATOR = " "

_KIND_PREFIXES = {
    # policy: (folder prefix, file prefix)
    OrderingPolicy.SUBFOLDERS_FIRST: ("1 ", "2 "),
    OrderingPolicy.SUBFOLDERS_LAST: ("2 ", "1 "),
    OrderingPolicy.MIXED: ("", ""),
}


def kind_prefix(is_directory: bool, policy: OrderingPolicy) -> str:
    """Get the prefix that places folders before or after files."""
    folder_prefix, file_prefix = _KIND_PREFIXES[policy]
    return folder_prefix if is_directory else file_prefix


def build_sort_key(entry: EntrySnapshot, policy: OrderingPolicy,
                   case_sensitive: bool = False) -> SortKey:
    """Build the sort key for one entry.

    Ignoring case, the key is the lowercase name followed by the original
    name, so names differing only by case end up next to each other and still
    have a stable order. With strict case, the original name is compared on
    its own: "Banana" sorts before "apple" because 'B' < 'a'.
    """
    key = kind_prefix(entry.is_directory, policy)
    if not case_sensitive:
        key += entry.name.lower() + CASE_SEPARATOR
    return SortKey(key + entry.name)


def sort_entries(entries: Iterable[EntrySnapshot], policy: OrderingPolicy,
                 case_sensitive: bool = False) -> List[EntrySnapshot]:
    """Return entries in the order they should be recreated."""
    return sorted(entries, key=lambda entry: build_sort_key(entry, policy, case_sensitive))
