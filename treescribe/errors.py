# treescribe/errors.py

"""
Exception hierarchy for tree generation.

Fatal conditions (bad options, a root that is not a directory, a failed
export) are raised to the caller. Recoverable conditions
(:class:`EntryUnavailable`, :class:`DirectoryUnreadable`) are raised only
inside the traversal, where the builder logs them and keeps going.
"""

from __future__ import annotations

from pathlib import Path


class TreescribeError(Exception):
    """Base class for every error raised by this package."""


class InvalidConfiguration(TreescribeError, ValueError):
    """An option value is unknown or out of range."""


class NotADirectory(TreescribeError, NotADirectoryError):
    """The traversal root does not resolve to a directory."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Path must be a directory: {self.path}")


class EntryUnavailable(TreescribeError):
    """A listed entry vanished before it could be stat'ed."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path} not found or inaccessible")


class DirectoryUnreadable(TreescribeError):
    """A directory could not be listed or its entries could not be stat'ed."""

    def __init__(self, path: Path | str, reason: BaseException | str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Error reading directory {self.path}: {reason}")


class OutputWriteFailure(TreescribeError, OSError):
    """Persisting exported output failed."""

    def __init__(self, path: Path | str, reason: BaseException | str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write file {self.path}: {reason}")
