# treescribe/fs.py

"""
Filesystem access used by the tree builder.

The builder only needs two operations, listing a directory and stat'ing an
entry, so they are expressed as the small :class:`FileSystem` protocol.
:class:`LocalFileSystem` implements it on top of the real filesystem; tests
may substitute their own implementation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from stat import S_ISDIR
from typing import Protocol

from treescribe.errors import EntryUnavailable


@dataclass(frozen=True)
class EntryInfo:
    """
    Metadata snapshot of a single filesystem entry.

    Attributes
    ----------
    is_dir : bool
        Whether the entry (after following symlinks) is a directory.
    size : int
        Raw size in bytes as reported by ``stat``.
    is_symlink : bool
        Whether the entry itself is a symbolic link.
    available : bool
        ``False`` for the placeholder of an entry that could not be stat'ed.
    """

    is_dir: bool
    size: int = 0
    is_symlink: bool = False
    available: bool = True


# Placeholder for entries that vanished between listing and stat.
MISSING_ENTRY = EntryInfo(is_dir=False, size=0, available=False)


class FileSystem(Protocol):
    def list_directory(self, path: Path) -> list[str]:
        """Return the names of the immediate entries of ``path``."""
        ...

    def stat(self, path: Path) -> EntryInfo:
        """Return metadata for ``path``; raise :class:`EntryUnavailable` if it is gone."""
        ...


class LocalFileSystem:
    """:class:`FileSystem` backed by ``os`` and ``pathlib``."""

    def list_directory(self, path: Path) -> list[str]:
        return os.listdir(path)

    def stat(self, path: Path) -> EntryInfo:
        try:
            is_symlink = path.is_symlink()
            st = path.stat()
        except FileNotFoundError as exc:
            # dangling symlinks land here too
            raise EntryUnavailable(path) from exc
        return EntryInfo(
            is_dir=S_ISDIR(st.st_mode),
            size=st.st_size,
            is_symlink=is_symlink,
        )


def format_size(size: int) -> str:
    """
    Render a byte count as the short label appended to file lines.

    Uses base-1024 units with one decimal above bytes, e.g. ``" (512B)"``,
    ``" (1.5KB)"``, ``" (2.0MB)"``.
    """

    if size < 1024:
        label = f"{size}B"
    elif size < 1024**2:
        label = f"{size / 1024:.1f}KB"
    elif size < 1024**3:
        label = f"{size / 1024**2:.1f}MB"
    else:
        label = f"{size / 1024**3:.1f}GB"
    return f" ({label})"
