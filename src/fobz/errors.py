"""Errors raised while reading or writing .fobz archives."""

from pathlib import Path


class FobzError(Exception):
    """Base error for .fobz archive operations."""

    def __init__(self, path: str | Path, message: str):
        self.path = str(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


class ArchiveIOError(FobzError):
    """Archive file could not be opened, created, read or finalized."""


class FormatError(FobzError):
    """A required entry is missing or does not match its expected shape."""
