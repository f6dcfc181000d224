"""Custom exceptions for the FAT folder sorter."""

from pathlib import Path
from typing import Optional


class FatSorterError(Exception):
    """Base exception for FAT folder sorter errors."""
    pass


class InvalidTargetError(FatSorterError):
    """Raised when a given path is not a folder or has no parent folder."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


class FileOperationError(FatSorterError):
    """Raised when a filesystem operation fails during reorganization."""

    def __init__(self, message: str, path: Path, cause: Optional[OSError] = None):
        super().__init__(message)
        self.path = path
        self.cause = cause


class CreateFailedError(FileOperationError):
    """Raised when a temporary folder or subfolder can't be created."""
    pass


class DeleteFailedError(FileOperationError):
    """Raised when an emptied folder can't be deleted."""
    pass


class MoveFailedError(FileOperationError):
    """Raised when an entry can't be renamed into its new folder."""

    def __init__(self, message: str, path: Path, target: Path,
                 cause: Optional[OSError] = None):
        super().__init__(message, path, cause)
        self.target = target


class RenameFailedError(MoveFailedError):
    """Raised when the temporary folder can't take the original name.

    The reorganized content is left under the temporary name.
    """
    pass


class ConfigurationError(FatSorterError):
    """Raised when there's an error in configuration."""
    pass
