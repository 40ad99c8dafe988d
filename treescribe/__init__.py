"""
treescribe — render directory structures as text, markdown or JSON.

This package walks a directory and produces a ``tree``-style listing with
configurable exclusion, ordering, size and icon annotations, and an optional
statistics summary. Output can be printed as console/ascii text, wrapped as a
markdown section, returned as a JSON-ready document, or exported to
``.md``/``.txt``/``.json``/``.html`` files.

The API is based on ``pathlib.Path``; the main entry points are
:func:`generate_tree` (build and render in one call) and :func:`build_tree`.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .errors import (
    DirectoryUnreadable,
    EntryUnavailable,
    InvalidConfiguration,
    NotADirectory,
    OutputWriteFailure,
    TreescribeError,
)
from .options import OutputFormat, SortStrategy, TreeOptions
from .render import render, write_output
from .sort import order_entries
from .stats import TreeStats
from .tree import TreeBuilder, TreeResult, build_tree, generate_tree

__all__ = [
    "DirectoryUnreadable",
    "EntryUnavailable",
    "InvalidConfiguration",
    "NotADirectory",
    "OutputFormat",
    "OutputWriteFailure",
    "SortStrategy",
    "TreeBuilder",
    "TreeOptions",
    "TreeResult",
    "TreeStats",
    "TreescribeError",
    "build_tree",
    "generate_tree",
    "order_entries",
    "render",
    "write_output",
]
