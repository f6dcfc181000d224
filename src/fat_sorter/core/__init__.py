"""Core folder reorganization modules."""

from .cancellation import CancellationToken
from .reorganizer import (
    DirectoryReorganizer,
    Outcome,
    ReorganizationCounters,
    ReorganizationResult,
    RunState,
)
from .runner import BatchResult, ReorganizationJob, format_summary, reorganize_all
from .sort_keys import SortKey, build_sort_key, sort_entries
from .throttle import OperationThrottle

__all__ = [
    'CancellationToken',
    'DirectoryReorganizer',
    'Outcome',
    'ReorganizationCounters',
    'ReorganizationResult',
    'RunState',
    'BatchResult',
    'ReorganizationJob',
    'format_summary',
    'reorganize_all',
    'SortKey',
    'build_sort_key',
    'sort_entries',
    'OperationThrottle',
]
