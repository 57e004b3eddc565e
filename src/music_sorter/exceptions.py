"""Custom exceptions for music sorter."""


class MusicSorterError(Exception):
    """Base exception for music sorter errors."""
    pass


class MetadataError(MusicSorterError):
    """Raised when a tag container cannot be read or decoded."""
    pass


class ConfigurationError(MusicSorterError):
    """Raised when there's an error in configuration."""
    pass


class InvalidRootError(MusicSorterError):
    """Raised when the directory to walk does not exist or is not a directory."""
    pass


class FileOperationError(MusicSorterError):
    """Raised when file operations fail."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class DeletionError(FileOperationError):
    """Raised when an index file cannot be deleted."""
    pass


class DirectoryCreationError(FileOperationError):
    """Raised when a destination directory cannot be created."""
    pass


class MoveError(FileOperationError):
    """Raised when a file cannot be renamed to its destination."""
    pass


class MissingFilenameError(FileOperationError):
    """Raised when a path has no filename component to keep."""
    pass
