# treescribe/stats.py

"""
Counters collected during a single traversal.

A :class:`TreeStats` instance is created when a traversal starts, fed by the
tree builder as entries are accepted, and read once at the end, either as a
text summary or as a plain dictionary for JSON output.
"""

from __future__ import annotations

import os
import threading
import time
from collections import Counter
from typing import Any

from treescribe.symbols import paint

NO_EXTENSION = "no extension"
RULE = "─" * 30

_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def format_bytes(size: int) -> str:
    """
    Format a byte count with base-1024 units and at most two decimals.

    Trailing zeros are dropped: ``0B``, ``1000B``, ``1KB``, ``1.5KB``,
    ``2.25MB``.
    """

    value = float(size)
    for unit in _UNITS:
        if abs(value) < 1024 or unit == _UNITS[-1]:
            break
        value /= 1024
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text}{unit}"


class TreeStats:
    """
    Traversal statistics.

    Attributes
    ----------
    total_files : int
    total_dirs : int
    total_size : int
        Sum of the sizes of every counted file, in bytes.
    file_types : collections.Counter
        Lowercase extension (``".py"``) or ``"no extension"`` to count, in
        first-seen order.
    max_depth_reached : int
        Largest depth at which a directory was counted.
    """

    def __init__(self) -> None:
        self.total_files = 0
        self.total_dirs = 0
        self.total_size = 0
        self.file_types: Counter[str] = Counter()
        self.max_depth_reached = 0
        self.start_time = time.monotonic()
        self._lock = threading.Lock()

    def add_file(self, path: os.PathLike[str] | str, size: int) -> None:
        ext = os.path.splitext(os.fspath(path))[1].lower() or NO_EXTENSION
        with self._lock:
            self.total_files += 1
            self.total_size += size
            self.file_types[ext] += 1

    def add_directory(self, depth: int) -> None:
        with self._lock:
            self.total_dirs += 1
            self.max_depth_reached = max(self.max_depth_reached, depth)

    def elapsed(self) -> float:
        """Seconds since the accumulator was created."""
        return time.monotonic() - self.start_time

    def sorted_file_types(self) -> list[tuple[str, int]]:
        # Counter keeps insertion order and sorted() is stable, so ties stay first-seen
        return sorted(self.file_types.items(), key=lambda item: item[1], reverse=True)

    def summary(self, use_colors: bool = False) -> str:
        """
        Return the human-readable summary block.

        The block starts and ends with a newline so it can be appended
        directly after a rendered tree.
        """

        def style(text: str, name: str) -> str:
            return paint(text, name) if use_colors else text

        lines = [
            "",
            style("Directory Summary", "bold"),
            style(RULE, "bold"),
            f"{style('Total Files:', 'blue')} {self.total_files}",
            f"{style('Total Directories:', 'blue')} {self.total_dirs}",
            f"{style('Total Size:', 'blue')} {format_bytes(self.total_size)}",
            f"{style('Max Depth:', 'blue')} {self.max_depth_reached} levels",
            f"{style('Scan Time:', 'blue')} {self.elapsed():.2f}s",
            "",
            style("File Types", "bold"),
            style(RULE, "bold"),
        ]
        for ext, count in self.sorted_file_types():
            lines.append(f"{style(ext.ljust(15), 'yellow')} {count} files")
        return "\n".join(lines) + "\n"

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "total_dirs": self.total_dirs,
            "total_size": self.total_size,
            "file_types": dict(self.sorted_file_types()),
            "max_depth_reached": self.max_depth_reached,
            "scan_time": round(self.elapsed(), 2),
        }
