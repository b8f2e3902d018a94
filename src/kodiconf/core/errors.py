"""Path validation errors.

These are the only failures allowed to stop a reload. Everything else in the
settings pipeline degrades to a default value.
"""

from __future__ import annotations


class PathValidationError(Exception):
    """A configured directory cannot be used."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class PathNotSet(PathValidationError):
    def __init__(self, path: str = "."):
        super().__init__(path, "Path not set")


class UnsupportedNetworkPath(PathValidationError):
    def __init__(self, path: str):
        super().__init__(
            path,
            f"Network paths are not supported, change {path} to a locally mounted path by the OS",
        )


class NotADirectory(PathValidationError):
    def __init__(self, path: str):
        super().__init__(path, f"{path} is not a valid directory")


class FilesystemError(PathValidationError):
    """Wraps the OSError (or ValueError for malformed paths) raised while probing a directory."""

    def __init__(self, path: str, error: OSError | ValueError):
        super().__init__(path, str(error))
        self.error = error
