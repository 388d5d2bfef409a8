"""
Custom exception hierarchy for the photo library.

Every failure the library can report derives from PhotoLibraryError so
callers (the CLI in particular) can catch library problems in one place
while letting genuine bugs surface.
"""


class PhotoLibraryError(Exception):
    """Base exception for all photo library errors."""
    pass


class FileHashError(PhotoLibraryError):
    """Raised when a file cannot be opened or read for hashing."""

    def __init__(self, path, reason):
        self.path = path
        super().__init__(f"Could not hash {path}: {reason}")


class FileOperationError(PhotoLibraryError):
    """Raised when a move, directory creation or index write fails."""
    pass


class FormatError(PhotoLibraryError):
    """Raised when hash text or an entry cannot be encoded/decoded."""
    pass


class CorruptIndexError(PhotoLibraryError):
    """Raised when the persisted index is malformed."""

    def __init__(self, path, reason, line_no=None):
        self.path = path
        self.line_no = line_no
        where = f"{path}:{line_no}" if line_no is not None else str(path)
        super().__init__(f"Corrupt index {where}: {reason}")


class UnsupportedVersionError(PhotoLibraryError):
    """Raised when the index was written by a newer format revision."""

    def __init__(self, path, version, supported):
        self.path = path
        self.version = version
        self.supported = supported
        super().__init__(
            f"Index {path} has version {version}, this build supports up to {supported}"
        )


class MetadataError(PhotoLibraryError):
    """Raised when a file's creation timestamp is unavailable."""
    pass


class DuplicateEntryError(PhotoLibraryError):
    """Raised when recording a hash the library already holds."""
    pass


class ConfigError(PhotoLibraryError):
    """Raised when the configuration is missing or invalid."""
    pass
