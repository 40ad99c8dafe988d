# treescribe/symbols.py

"""
Branch glyphs, file type icons and terminal colouring.

Markdown output always uses a bullet list layout. Every other format picks
between box-drawing glyphs (``├──``, ``└──``, ``│``) and a plain ASCII set
(``|--``, ```--``, ``|``) depending on the ``fancy`` option.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from rich.console import Console
from rich.text import Text

from treescribe.options import DEFAULT_FILE_TYPES, OutputFormat


@dataclass(frozen=True)
class Symbols:
    pipe: str
    branch: str
    last: str
    indent: str


MARKDOWN_SYMBOLS = Symbols(pipe="  ", branch="*", last="*", indent="  ")
FANCY_SYMBOLS = Symbols(pipe="│", branch="├──", last="└──", indent="    ")
PLAIN_SYMBOLS = Symbols(pipe="|", branch="|--", last="`--", indent="    ")

ICONS: Mapping[str, str] = {
    "directory": "📁",
    "image": "🖼️",
    "video": "🎥",
    "audio": "🎵",
    "archive": "📦",
    "pdf": "📕",
    "code": "💻",
    "default": "📄",
}


def get_symbols(fmt: OutputFormat, fancy: bool = True) -> Symbols:
    if fmt is OutputFormat.MARKDOWN:
        return MARKDOWN_SYMBOLS
    return FANCY_SYMBOLS if fancy else PLAIN_SYMBOLS


def file_type(name: str, file_types: Mapping[str, tuple[str, ...]] = DEFAULT_FILE_TYPES) -> str:
    """
    Classify a file name by its extension.

    Parameters
    ----------
    name : str
        File name or path. Only the extension is considered, case-insensitively.
    file_types : mapping
        Type name to extensions (with leading dot). The first type listing
        the extension wins.

    Returns
    -------
    str
        The matching type name, or ``"default"``.
    """

    ext = os.path.splitext(name)[1].lower()
    for kind, extensions in file_types.items():
        if ext in extensions:
            return kind
    return "default"


def get_icon(
    name: str,
    is_dir: bool,
    file_types: Mapping[str, tuple[str, ...]] = DEFAULT_FILE_TYPES,
) -> str:
    """Return the icon for an entry; directories ignore their extension."""
    if is_dir:
        return ICONS["directory"]
    return ICONS.get(file_type(name, file_types), ICONS["default"])


_ansi_console = Console(
    force_terminal=True,
    color_system="standard",
    highlight=False,
    emoji=False,
    soft_wrap=True,
    width=10_000,
)


def paint(text: str, style: str) -> str:
    """Return ``text`` wrapped in the ANSI escape codes for a rich ``style``."""
    if not text:
        return text
    with _ansi_console.capture() as capture:
        _ansi_console.print(Text(text, style=style), end="")
    return capture.get()
