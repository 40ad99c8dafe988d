# treescribe/options.py

"""
Immutable traversal and formatting options.

A :class:`TreeOptions` value is built once per invocation and handed to
every component that needs it. Values are validated at construction time,
so a tree is never partially rendered with a bad format or sort strategy.

Exclusion patterns are a small tagged variant: :class:`LiteralPattern`
matches an entry name exactly, :class:`RegexPattern` matches when its
regular expression is found anywhere in the name. Both expose
``matches(name)`` so callers never need to inspect the pattern type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union

from treescribe.errors import InvalidConfiguration


class OutputFormat(str, Enum):
    ASCII = "ascii"
    MARKDOWN = "markdown"
    JSON = "json"
    CONSOLE = "console"


class SortStrategy(str, Enum):
    NAME = "name"
    DIRECTORY_FIRST = "directory-first"
    TYPE = "type"
    SIZE = "size"
    EXTENSION = "extension"


@dataclass(frozen=True)
class LiteralPattern:
    """Exclude entries whose name equals ``name``."""

    name: str

    def matches(self, name: str) -> bool:
        return name == self.name

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class RegexPattern:
    """Exclude entries whose name contains a match for ``regex``."""

    regex: re.Pattern

    def matches(self, name: str) -> bool:
        return self.regex.search(name) is not None

    def __str__(self) -> str:
        return f"/{self.regex.pattern}/"


ExclusionPattern = Union[LiteralPattern, RegexPattern]


def exclusion_pattern(value: str | re.Pattern | ExclusionPattern) -> ExclusionPattern:
    """
    Coerce a user-supplied value into an exclusion pattern.

    Strings wrapped in slashes (``"/\\.pyc$/"``) are compiled as regular
    expressions; any other string is a literal name. Compiled patterns and
    existing pattern objects are accepted as-is.

    Raises
    ------
    InvalidConfiguration
        If the value has an unsupported type or the regex does not compile.
    """

    if isinstance(value, (LiteralPattern, RegexPattern)):
        return value
    if isinstance(value, re.Pattern):
        return RegexPattern(value)
    if isinstance(value, str):
        if len(value) > 2 and value.startswith("/") and value.endswith("/"):
            try:
                return RegexPattern(re.compile(value[1:-1]))
            except re.error as exc:
                raise InvalidConfiguration(f"Invalid exclude pattern {value!r}: {exc}") from exc
        return LiteralPattern(value)
    raise InvalidConfiguration(f"Invalid exclude pattern: {value!r}")


DEFAULT_EXCLUDE: tuple[ExclusionPattern, ...] = (
    LiteralPattern("node_modules"),
    LiteralPattern(".git"),
    LiteralPattern(".DS_Store"),
)

DEFAULT_FILE_TYPES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "image": (".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp"),
        "video": (".mp4", ".mov", ".avi", ".mkv", ".webm"),
        "audio": (".mp3", ".wav", ".ogg", ".m4a"),
        "archive": (".zip", ".rar", ".7z", ".tar", ".gz"),
        "pdf": (".pdf",),
        "code": (".js", ".ts", ".py", ".java", ".cpp", ".html", ".css", ".json", ".xml"),
    }
)


def _choice(enum_cls: type[Enum], value: Any, label: str) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise InvalidConfiguration(f"Invalid {label}: {value}. Must be one of: {valid}") from None


@dataclass(frozen=True)
class TreeOptions:
    """
    Options controlling a single tree generation.

    Parameters
    ----------
    format : OutputFormat | str, default="ascii"
        One of ``ascii``, ``markdown``, ``json`` or ``console``.
    max_depth : int | None, default=None
        Deepest directory level to list. ``0`` lists only the root's
        immediate entries; ``None`` is unbounded.
    show_size : bool, default=False
        Append a human-readable size to file lines.
    full_path : bool, default=False
        Display full paths instead of bare names.
    show_root : bool, default=False
        Emit a line for the root directory before its entries.
    fancy : bool, default=True
        Use box-drawing glyphs instead of plain ASCII ones.
    exclude : iterable of patterns, default=node_modules, .git, .DS_Store
        Entries matching any pattern are neither shown, counted nor
        descended into. See :func:`exclusion_pattern`.
    use_colors : bool, default=False
        Colour directory lines and the summary. Forced off unless the format
        is ``console``.
    show_stats : bool, default=False
        Attach traversal statistics to the output.
    use_icons : bool, default=False
        Prefix each entry with a file type icon.
    sort_by : SortStrategy | str | None, default="directory-first"
        Sibling ordering. ``None`` selects the default.
    follow_symlinks : bool, default=False
        Descend into symlinked directories. When ``False`` they are listed
        but not traversed.
    file_types : mapping, optional
        Icon classification table: type name to list of extensions.
    workers : int, default=1
        Threads used to stat the entries of one directory level.

    Raises
    ------
    InvalidConfiguration
        If any value is unknown or out of range.
    """

    format: OutputFormat = OutputFormat.ASCII
    max_depth: int | None = None
    show_size: bool = False
    full_path: bool = False
    show_root: bool = False
    fancy: bool = True
    exclude: tuple[ExclusionPattern, ...] = DEFAULT_EXCLUDE
    use_colors: bool = False
    show_stats: bool = False
    use_icons: bool = False
    sort_by: SortStrategy = SortStrategy.DIRECTORY_FIRST
    follow_symlinks: bool = False
    file_types: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: DEFAULT_FILE_TYPES, hash=False)
    workers: int = 1

    def __post_init__(self) -> None:
        fmt = _choice(OutputFormat, self.format, "format")
        sort_by = SortStrategy.DIRECTORY_FIRST if self.sort_by is None else self.sort_by
        sort_by = _choice(SortStrategy, sort_by, "sort type")

        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise InvalidConfiguration(f"Invalid max depth: {self.max_depth!r}")
            if self.max_depth < 0:
                raise InvalidConfiguration(f"Invalid max depth: {self.max_depth}. Must be >= 0")
        if not isinstance(self.workers, int) or self.workers < 1:
            raise InvalidConfiguration(f"Invalid worker count: {self.workers!r}")

        if isinstance(self.exclude, (str, re.Pattern)):
            raise InvalidConfiguration("exclude must be a sequence of patterns")
        exclude = tuple(exclusion_pattern(p) for p in self.exclude)

        file_types = MappingProxyType(
            {kind: tuple(ext.lower() for ext in exts) for kind, exts in self.file_types.items()}
        )

        # frozen dataclass: normalised values go through object.__setattr__
        object.__setattr__(self, "format", fmt)
        object.__setattr__(self, "sort_by", sort_by)
        object.__setattr__(self, "exclude", exclude)
        object.__setattr__(self, "file_types", file_types)
        object.__setattr__(self, "use_colors", bool(self.use_colors) and fmt is OutputFormat.CONSOLE)

    def is_excluded(self, name: str) -> bool:
        return any(pattern.matches(name) for pattern in self.exclude)

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-safe view of the options."""
        return {
            "format": self.format.value,
            "maxDepth": self.max_depth,
            "showSize": self.show_size,
            "fullPath": self.full_path,
            "showRoot": self.show_root,
            "fancy": self.fancy,
            "exclude": [str(p) for p in self.exclude],
            "useColors": self.use_colors,
            "showStats": self.show_stats,
            "useIcons": self.use_icons,
            "sortBy": self.sort_by.value,
            "followSymlinks": self.follow_symlinks,
        }
