# tests/test_config.py
import json
import logging
from pathlib import Path

import pytest

from treescribe import InvalidConfiguration, OutputFormat, SortStrategy
from treescribe.config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    create_default_config,
    deep_merge,
    load_config,
    to_options,
)
from treescribe.options import LiteralPattern, RegexPattern


@pytest.fixture
def dirs(tmp_path: Path):
    home = tmp_path / "home"
    cwd = tmp_path / "work"
    home.mkdir()
    cwd.mkdir()
    return home, cwd


def _write_config(directory: Path, data) -> None:
    text = data if isinstance(data, str) else json.dumps(data)
    (directory / CONFIG_FILENAME).write_text(text, encoding="utf-8")


def test_defaults_without_files(dirs):
    home, cwd = dirs
    assert load_config(home, cwd) == DEFAULT_CONFIG


def test_local_overrides_home_per_field(dirs):
    home, cwd = dirs
    _write_config(home, {"display": {"showSize": True, "useIcons": True}})
    _write_config(cwd, {"display": {"useIcons": False}, "sorting": {"default": "size"}})

    config = load_config(home, cwd)

    assert config["display"]["showSize"] is True
    assert config["display"]["useIcons"] is False
    # untouched siblings keep their defaults
    assert config["display"]["fancy"] is True
    assert config["sorting"] == {"enabled": True, "default": "size"}


def test_lists_are_replaced_whole(dirs):
    home, cwd = dirs
    _write_config(cwd, {"filtering": {"exclude": ["dist"]}})

    assert load_config(home, cwd)["filtering"]["exclude"] == ["dist"]


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_bad_file_falls_back_with_warning(dirs, content, caplog: pytest.LogCaptureFixture):
    home, cwd = dirs
    _write_config(home, {"display": {"showSize": True}})
    _write_config(cwd, content)

    with caplog.at_level(logging.WARNING, logger="treescribe"):
        config = load_config(home, cwd)

    assert config["display"]["showSize"] is True
    assert config["filtering"] == DEFAULT_CONFIG["filtering"]
    assert any(CONFIG_FILENAME in r.getMessage() for r in caplog.records)


def test_non_object_group_is_dropped_with_warning(dirs, caplog: pytest.LogCaptureFixture):
    home, cwd = dirs
    _write_config(cwd, {"display": "oops", "sorting": ["size"], "filtering": {"exclude": ["dist"]}})

    with caplog.at_level(logging.WARNING, logger="treescribe"):
        config = load_config(home, cwd)

    assert config["display"] == DEFAULT_CONFIG["display"]
    assert config["sorting"] == DEFAULT_CONFIG["sorting"]
    assert config["filtering"]["exclude"] == ["dist"]
    messages = [r.getMessage() for r in caplog.records]
    assert any('"display"' in m for m in messages)
    assert any('"sorting"' in m for m in messages)
    assert to_options(config).sort_by is SortStrategy.DIRECTORY_FIRST


def test_deep_merge_does_not_mutate_inputs():
    base = {"a": {"b": 1, "c": [1]}}
    merged = deep_merge(base, {"a": {"b": 2}, "d": 3})

    assert merged == {"a": {"b": 2, "c": [1]}, "d": 3}
    assert base == {"a": {"b": 1, "c": [1]}}
    merged["a"]["c"].append(2)
    assert base["a"]["c"] == [1]


def test_create_default_config(tmp_path: Path):
    path = tmp_path / CONFIG_FILENAME

    returned = create_default_config(path)

    assert returned == DEFAULT_CONFIG
    assert json.loads(path.read_text(encoding="utf-8")) == DEFAULT_CONFIG


def test_to_options_maps_document():
    config = deep_merge(
        DEFAULT_CONFIG,
        {
            "display": {"showSize": True, "fancy": False, "useColors": True},
            "filtering": {"maxDepth": 2, "exclude": ["dist", "/\\.pyc$/"]},
            "export": {"defaultFormat": "markdown"},
            "sorting": {"default": "extension"},
        },
    )

    opts = to_options(config)

    assert opts.format is OutputFormat.MARKDOWN
    assert opts.max_depth == 2
    assert opts.show_size is True
    assert opts.fancy is False
    assert opts.use_colors is False  # markdown never has colours
    assert opts.sort_by is SortStrategy.EXTENSION
    assert opts.exclude[0] == LiteralPattern("dist")
    assert isinstance(opts.exclude[1], RegexPattern)
    assert opts.file_types["code"][0] == ".js"


def test_to_options_overrides_skip_none():
    opts = to_options(DEFAULT_CONFIG, format="console", max_depth=None, show_stats=True)

    assert opts.format is OutputFormat.CONSOLE
    assert opts.max_depth is None
    assert opts.show_stats is True
    assert opts.use_colors is True


def test_disabled_sorting_uses_default_order():
    config = deep_merge(DEFAULT_CONFIG, {"sorting": {"enabled": False, "default": "size"}})
    assert to_options(config).sort_by is SortStrategy.DIRECTORY_FIRST


def test_invalid_values_in_document():
    config = deep_merge(DEFAULT_CONFIG, {"export": {"defaultFormat": "pdf"}})
    with pytest.raises(InvalidConfiguration):
        to_options(config)
