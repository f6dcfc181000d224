"""FAT Folder Sorter

Rewrites folders on FAT16/FAT32 media so their entries are stored, and
therefore listed by devices, in sorted order.
"""

__version__ = "0.1.0"

from .core.cancellation import CancellationToken
from .core.reorganizer import (
    DirectoryReorganizer,
    Outcome,
    ReorganizationCounters,
    ReorganizationResult,
)
from .core.runner import BatchResult, ReorganizationJob, reorganize_all
from .core.throttle import OperationThrottle
from .models.entry import EntrySnapshot, OrderingPolicy
from .progress_sink import ProgressSink, RecordingProgressSink

__all__ = [
    # Core components
    "DirectoryReorganizer",
    "ReorganizationJob",
    "CancellationToken",
    "OperationThrottle",
    "ProgressSink",
    "RecordingProgressSink",

    # Types and enums
    "EntrySnapshot",
    "OrderingPolicy",
    "Outcome",
    "ReorganizationCounters",
    "ReorganizationResult",
    "BatchResult",

    # Utilities
    "reorganize_all",
]
