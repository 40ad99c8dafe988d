# tests/test_options.py
import dataclasses
import json
import re

import pytest

from treescribe import InvalidConfiguration, OutputFormat, SortStrategy, TreeOptions
from treescribe.options import DEFAULT_EXCLUDE, DEFAULT_FILE_TYPES, LiteralPattern, RegexPattern, exclusion_pattern


def test_defaults():
    opts = TreeOptions()

    assert opts.format is OutputFormat.ASCII
    assert opts.sort_by is SortStrategy.DIRECTORY_FIRST
    assert opts.max_depth is None
    assert opts.fancy is True
    assert opts.exclude == DEFAULT_EXCLUDE
    assert opts.is_excluded("node_modules")
    assert not opts.is_excluded("node_modules_backup")


def test_strings_are_coerced():
    opts = TreeOptions(format="markdown", sort_by="size")
    assert opts.format is OutputFormat.MARKDOWN
    assert opts.sort_by is SortStrategy.SIZE


@pytest.mark.parametrize(
    "kwargs",
    [
        {"format": "yaml"},
        {"sort_by": "date"},
        {"max_depth": -1},
        {"max_depth": "3"},
        {"max_depth": True},
        {"workers": 0},
        {"exclude": "node_modules"},
        {"exclude": [42]},
        {"exclude": ["/[unclosed/"]},
    ],
)
def test_invalid_values_fail_at_construction(kwargs):
    with pytest.raises(InvalidConfiguration):
        TreeOptions(**kwargs)


def test_invalid_configuration_is_a_value_error():
    with pytest.raises(ValueError, match="Must be one of: ascii, markdown, json, console"):
        TreeOptions(format="html")


def test_none_sort_selects_default():
    assert TreeOptions(sort_by=None).sort_by is SortStrategy.DIRECTORY_FIRST


def test_colors_only_for_console():
    assert TreeOptions(format="console", use_colors=True).use_colors is True
    assert TreeOptions(format="ascii", use_colors=True).use_colors is False
    assert TreeOptions(format="json", use_colors=True).use_colors is False


def test_options_are_immutable():
    opts = TreeOptions()
    with pytest.raises(dataclasses.FrozenInstanceError):
        opts.max_depth = 3


def test_exclusion_pattern_variants():
    literal = exclusion_pattern("dist")
    assert literal == LiteralPattern("dist")
    assert literal.matches("dist")
    assert not literal.matches("dist2")

    regex = exclusion_pattern(r"/^\.venv/")
    assert isinstance(regex, RegexPattern)
    assert regex.matches(".venv-py312")
    assert not regex.matches("my.venv")
    assert str(regex) == r"/^\.venv/"

    compiled = exclusion_pattern(re.compile("cache"))
    assert compiled.matches("__pycache__")

    # a lone slash is a literal name, not an empty regex
    assert exclusion_pattern("/") == LiteralPattern("/")


def test_any_pattern_excludes():
    opts = TreeOptions(exclude=["a.txt", re.compile(r"\.log$")])
    assert opts.is_excluded("a.txt")
    assert opts.is_excluded("server.log")
    assert not opts.is_excluded("b.txt")


def test_file_types_are_normalised():
    opts = TreeOptions(file_types={"data": [".CSV"]})
    assert opts.file_types["data"] == (".csv",)


def test_default_file_types_ignored_by_hash():
    first, second = TreeOptions(), TreeOptions(file_types={"data": [".csv"]})

    assert first.file_types == DEFAULT_FILE_TYPES
    assert first.file_types["code"] == DEFAULT_FILE_TYPES["code"]
    assert hash(first) == hash(second)


def test_as_dict_is_json_safe():
    opts = TreeOptions(format="console", exclude=["dist", r"/\.pyc$/"], max_depth=2)
    data = json.loads(json.dumps(opts.as_dict()))

    assert data["format"] == "console"
    assert data["exclude"] == ["dist", r"/\.pyc$/"]
    assert data["maxDepth"] == 2
    assert data["sortBy"] == "directory-first"
