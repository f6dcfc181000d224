"""Data models for the FAT folder sorter."""

from .entry import EntrySnapshot, OrderingPolicy
from .config import Config, SortingConfig, ThrottleConfig

__all__ = ["EntrySnapshot", "OrderingPolicy", "Config", "SortingConfig", "ThrottleConfig"]
