# treescribe/config.py

"""
Configuration file loading.

Settings come from three layers, later ones overriding earlier ones key by
key (nested groups are merged recursively, lists are replaced whole):

1. :data:`DEFAULT_CONFIG`,
2. ``~/.treescriberc``,
3. ``./.treescriberc``.

Config files are JSON documents. A missing file is skipped silently; an
unreadable or malformed one is skipped with a warning so a bad file never
prevents a tree from being generated.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from treescribe.options import TreeOptions
from treescribe.render import write_text_atomic

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".treescriberc"

DEFAULT_CONFIG: dict[str, Any] = {
    "display": {
        "fancy": True,
        "useIcons": False,
        "useColors": True,
        "showSize": False,
        "showStats": False,
        "showRoot": False,
        "fullPath": False,
    },
    "sorting": {
        "enabled": True,
        "default": "directory-first",
    },
    "filtering": {
        "maxDepth": None,
        "exclude": ["node_modules", ".git", ".DS_Store"],
        "followSymlinks": False,
    },
    "export": {
        "defaultFormat": "ascii",
        "outputDir": "./",
    },
    "fileTypes": {
        "image": [".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp"],
        "video": [".mp4", ".mov", ".avi", ".mkv", ".webm"],
        "audio": [".mp3", ".wav", ".ogg", ".m4a"],
        "archive": [".zip", ".rar", ".7z", ".tar", ".gz"],
        "pdf": [".pdf"],
        "code": [".js", ".ts", ".py", ".java", ".cpp", ".html", ".css", ".json", ".xml"],
    },
}


def deep_merge(target: Mapping[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``target`` updated with ``source``, merging nested mappings."""
    result = copy.deepcopy(dict(target))
    for key, value in source.items():
        if isinstance(value, Mapping):
            base = result.get(key)
            result[key] = deep_merge(base if isinstance(base, Mapping) else {}, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def read_config_file(path: Path) -> dict[str, Any] | None:
    """
    Read one config file.

    Returns ``None`` when the file does not exist or cannot be used; the
    latter case is logged as a warning.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.warning("Could not read config file %s: %s", path, exc)
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring malformed config file %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level must be an object", path)
        return None

    for group in list(data):
        if group in DEFAULT_CONFIG and not isinstance(data[group], dict):
            logger.warning("Ignoring \"%s\" in config file %s: expected an object", group, path)
            del data[group]
    return data


def config_paths(home: Path | None = None, cwd: Path | None = None) -> list[Path]:
    home = Path.home() if home is None else Path(home)
    cwd = Path.cwd() if cwd is None else Path(cwd)
    return [home / CONFIG_FILENAME, cwd / CONFIG_FILENAME]


def load_config(home: Path | None = None, cwd: Path | None = None) -> dict[str, Any]:
    """Return the merged configuration document (defaults, home file, local file)."""
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for path in config_paths(home, cwd):
        data = read_config_file(path)
        if data is not None:
            logger.debug("Loaded config file %s", path)
            merged = deep_merge(merged, data)
    return merged


def create_default_config(path: Path | str) -> dict[str, Any]:
    """Write :data:`DEFAULT_CONFIG` to ``path`` and return it."""
    write_text_atomic(Path(path), json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    return copy.deepcopy(DEFAULT_CONFIG)


def to_options(config: Mapping[str, Any], **overrides: Any) -> TreeOptions:
    """
    Build :class:`TreeOptions` from a configuration document.

    Keyword arguments override the values taken from the document; ``None``
    overrides are ignored.

    Raises
    ------
    InvalidConfiguration
        If the resulting values are invalid.
    """

    display = config.get("display", {})
    sorting = config.get("sorting", {})
    filtering = config.get("filtering", {})
    export = config.get("export", {})

    values: dict[str, Any] = {
        "format": export.get("defaultFormat", "ascii"),
        "max_depth": filtering.get("maxDepth"),
        "show_size": display.get("showSize", False),
        "full_path": display.get("fullPath", False),
        "show_root": display.get("showRoot", False),
        "fancy": display.get("fancy", True) is not False,
        "exclude": tuple(filtering.get("exclude", ())),
        "use_colors": display.get("useColors", False),
        "show_stats": display.get("showStats", False),
        "use_icons": display.get("useIcons", False),
        "sort_by": sorting.get("default") if sorting.get("enabled", True) else None,
        "follow_symlinks": filtering.get("followSymlinks", False),
    }
    if "fileTypes" in config:
        values["file_types"] = {kind: tuple(exts) for kind, exts in config["fileTypes"].items()}

    values.update({key: value for key, value in overrides.items() if value is not None})
    return TreeOptions(**values)
