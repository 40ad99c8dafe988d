# treescribe/sort.py

"""
Ordering of sibling entries.

Every strategy ends with the same name comparison (case-insensitive, then
exact) so the output order is fully deterministic for a given listing.
"""

from __future__ import annotations

import os
from typing import Callable, Iterable, Mapping

from treescribe.fs import EntryInfo
from treescribe.options import SortStrategy


def name_key(name: str) -> tuple[str, str]:
    return (name.casefold(), name)


def _is_dir(info: EntryInfo | None) -> bool:
    return info is not None and info.is_dir


def _size(info: EntryInfo | None) -> int:
    return info.size if info is not None else 0


def order_entries(
    names: Iterable[str],
    strategy: SortStrategy | str | None = SortStrategy.DIRECTORY_FIRST,
    metadata: Mapping[str, EntryInfo] | None = None,
) -> list[str]:
    """
    Return ``names`` in display order.

    Parameters
    ----------
    names : iterable of str
        Entry names of a single directory level.
    strategy : SortStrategy | str | None
        ``name``, ``directory-first``, ``type`` (same as directory-first),
        ``size`` (largest first) or ``extension``. Unknown values and
        ``None`` fall back to ``directory-first``.
    metadata : mapping, optional
        Name to :class:`EntryInfo`. Names without metadata sort as
        zero-sized files.

    Returns
    -------
    list[str]
        A permutation of ``names``.
    """

    metadata = metadata or {}
    try:
        strategy = SortStrategy(strategy)
    except ValueError:
        strategy = SortStrategy.DIRECTORY_FIRST

    key: Callable[[str], tuple]
    if strategy is SortStrategy.NAME:
        key = name_key
    elif strategy is SortStrategy.SIZE:
        key = lambda n: (-_size(metadata.get(n)), *name_key(n))  # noqa: E731
    elif strategy is SortStrategy.EXTENSION:
        key = lambda n: (os.path.splitext(n)[1].lower(), *name_key(n))  # noqa: E731
    else:
        key = lambda n: (not _is_dir(metadata.get(n)), *name_key(n))  # noqa: E731

    return sorted(names, key=key)
