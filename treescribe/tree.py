# treescribe/tree.py

"""
Directory tree generation.

This module walks a directory and turns it into indented text lines, one per
entry, in the style of the Unix ``tree`` command. At each directory level the
builder:

- lists the immediate entries,
- drops entries matching an exclusion pattern,
- stats the remaining entries (optionally on a thread pool), dropping any
  entry that cannot be stat'ed,
- orders them with :func:`treescribe.sort.order_entries`,
- emits one line per entry, counts it, and descends into directories until
  ``max_depth`` is exceeded.

Excluded entries are never stat'ed, displayed or counted, and excluded
directories are never descended into.

Alongside the text, the builder produces an :mod:`anytree` node tree with
the same shape, which is what the JSON exporter serialises as ``nodes``.

The main entry points are :func:`build_tree`, which returns a
:class:`TreeResult`, and :func:`generate_tree`, which also applies the
format envelope.
"""


from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from anytree import Node

from treescribe.errors import DirectoryUnreadable, EntryUnavailable, NotADirectory
from treescribe.fs import MISSING_ENTRY, EntryInfo, FileSystem, LocalFileSystem, format_size
from treescribe.options import OutputFormat, TreeOptions
from treescribe.render import render
from treescribe.sort import order_entries
from treescribe.stats import TreeStats
from treescribe.symbols import get_icon, get_symbols, paint

logger = logging.getLogger(__name__)

DIRECTORY_STYLE = "blue"


@dataclass
class TreeResult:
    """
    Outcome of one traversal.

    Attributes
    ----------
    body : str
        Rendered lines, each terminated by a newline.
    stats : TreeStats
        Counters collected while walking.
    root : anytree.Node
        Node for the root directory; children mirror the emitted lines.
    """

    body: str
    stats: TreeStats
    root: Node

    @property
    def lines(self) -> list[str]:
        return self.body.splitlines()


class TreeBuilder:
    """
    Recursive tree generator bound to one set of options.

    Parameters
    ----------
    options : TreeOptions, optional
        Traversal and formatting options. Defaults to ``TreeOptions()``.
    fs : FileSystem, optional
        Filesystem access. Defaults to :class:`LocalFileSystem`.
    """

    def __init__(self, options: TreeOptions | None = None, fs: FileSystem | None = None) -> None:
        self.options = options or TreeOptions()
        self.fs = fs or LocalFileSystem()
        self.symbols = get_symbols(self.options.format, self.options.fancy)
        self._executor: ThreadPoolExecutor | None = None

    def build(self, root: Path | str) -> TreeResult:
        """
        Walk ``root`` and return the rendered body with its statistics.

        Raises
        ------
        NotADirectory
            If ``root`` does not exist or is not a directory.
        """

        root = Path(root).resolve()
        try:
            info = self.fs.stat(root)
        except EntryUnavailable as exc:
            raise NotADirectory(root) from exc
        if not info.is_dir:
            raise NotADirectory(root)

        logger.debug("Analyzing directory structure of %s", root)
        stats = TreeStats()
        lines: list[str] = []
        root_node = Node(root.name or str(root), fs_path=root, is_dir=True, is_symlink=False, size_bytes=0)

        if self.options.show_root:
            root_name = str(root) if self.options.full_path else (root.name or str(root))
            lines.append(self._paint_dir(f"{root_name}/"))

        if self.options.workers > 1:
            with ThreadPoolExecutor(max_workers=self.options.workers) as executor:
                self._executor = executor
                try:
                    self._walk(root, root_node, "", 0, lines, stats)
                finally:
                    self._executor = None
        else:
            self._walk(root, root_node, "", 0, lines, stats)

        logger.debug("Directory tree generated: %d entries", stats.total_files + stats.total_dirs)
        return TreeResult(body="".join(line + "\n" for line in lines), stats=stats, root=root_node)

    def _walk(
        self,
        directory: Path,
        parent: Node,
        prefix: str,
        depth: int,
        lines: list[str],
        stats: TreeStats,
    ) -> None:
        opts = self.options
        if opts.max_depth is not None and depth > opts.max_depth:
            return

        try:
            names = [name for name in self.fs.list_directory(directory) if not opts.is_excluded(name)]
            metadata = self._resolve(directory, names)
        except OSError as exc:
            logger.error("%s", DirectoryUnreadable(directory, exc))
            return

        ordered = order_entries(list(metadata), opts.sort_by, metadata)
        for index, name in enumerate(ordered):
            path = directory / name
            info = metadata[name]
            is_last = index == len(ordered) - 1

            if info.is_dir:
                stats.add_directory(depth)
            else:
                stats.add_file(path, info.size)

            node = Node(
                name,
                parent=parent,
                fs_path=path,
                is_dir=info.is_dir,
                is_symlink=info.is_symlink,
                size_bytes=0 if info.is_dir else info.size,
            )
            display = str(path) if opts.full_path else name
            lines.append(self.format_line(display, info, is_last, prefix))

            if info.is_dir and (opts.follow_symlinks or not info.is_symlink):
                if opts.format is OutputFormat.MARKDOWN:
                    child_prefix = prefix + self.symbols.indent
                elif is_last:
                    child_prefix = prefix + self.symbols.indent
                else:
                    child_prefix = prefix + self.symbols.pipe + "   "
                self._walk(path, node, child_prefix, depth + 1, lines, stats)

    def _resolve(self, directory: Path, names: list[str]) -> dict[str, EntryInfo]:
        paths = [directory / name for name in names]
        if self._executor is not None:
            infos = list(self._executor.map(self._stat, paths))
        else:
            infos = [self._stat(p) for p in paths]
        # entries whose stat failed are dropped together with their subtree
        return {name: info for name, info in zip(names, infos) if info is not None}

    def _stat(self, path: Path) -> EntryInfo | None:
        try:
            return self.fs.stat(path)
        except EntryUnavailable as exc:
            logger.warning("Warning: %s", exc)
            return MISSING_ENTRY
        except OSError as exc:
            logger.error("Error reading %s: %s", path, exc)
            return None

    def format_line(self, name: str, info: EntryInfo, is_last: bool, prefix: str = "") -> str:
        """
        Format one entry line.

        Layout is ``{prefix}{glyph} {icon }{name}{/}{ (size)}``. Markdown
        always uses the bullet glyph; other formats use the terminal glyph
        for the last sibling.
        """

        opts = self.options
        sym = self.symbols
        glyph = sym.last if is_last and opts.format is not OutputFormat.MARKDOWN else sym.branch
        icon = ""
        if opts.use_icons:
            icon = get_icon(Path(name).name, info.is_dir, opts.file_types) + " "
        suffix = "/" if info.is_dir else ""
        size = format_size(info.size) if opts.show_size and info.available and not info.is_dir else ""

        line = f"{prefix}{glyph} {icon}{name}{suffix}{size}"
        return self._paint_dir(line) if info.is_dir else line

    def _paint_dir(self, text: str) -> str:
        return paint(text, DIRECTORY_STYLE) if self.options.use_colors else text


def build_tree(
    root: Path | str,
    options: TreeOptions | None = None,
    *,
    fs: FileSystem | None = None,
) -> TreeResult:
    """Walk ``root`` with ``options`` and return the :class:`TreeResult`."""
    return TreeBuilder(options, fs).build(root)


def generate_tree(
    root: Path | str,
    options: TreeOptions | None = None,
    *,
    fs: FileSystem | None = None,
) -> str | dict[str, Any]:
    """
    Walk ``root`` and return the final output for ``options.format``.

    Text formats return a string; the ``json`` format returns a dictionary
    (see :func:`treescribe.render.render`).
    """

    options = options or TreeOptions()
    result = build_tree(root, options, fs=fs)
    return render(result.body, options, result.stats, nodes=result.root)
