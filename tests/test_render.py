# tests/test_render.py
import json
from datetime import datetime
from pathlib import Path

import pytest

from treescribe import OutputWriteFailure, TreeOptions, build_tree, generate_tree
from treescribe.errors import InvalidConfiguration
from treescribe.render import MARKDOWN_HEADER, render, render_html, serialize, write_output, write_text_atomic
from treescribe.stats import TreeStats


def _make_file(p: Path, content: str = "x"):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")


BODY = "├── src/\n│   └── a.py\n└── top.txt\n"


def _stats() -> TreeStats:
    stats = TreeStats()
    stats.add_directory(0)
    stats.add_file("src/a.py", 10)
    stats.add_file("top.txt", 5)
    return stats


def test_plain_formats_return_body():
    assert render(BODY, TreeOptions(format="ascii"), _stats()) == BODY
    assert render(BODY, TreeOptions(format="console"), _stats()) == BODY


def test_stats_summary_is_appended_to_text():
    out = render(BODY, TreeOptions(show_stats=True), _stats())

    assert out.startswith(BODY + "\n\nDirectory Summary")
    assert "Total Files: 2" in out


def test_markdown_header():
    out = render(BODY, TreeOptions(format="markdown", show_stats=True), _stats())

    assert out.startswith(MARKDOWN_HEADER + BODY + "\n\nDirectory Summary")


def test_json_document():
    options = TreeOptions(format="json", show_stats=True, max_depth=2)
    document = render(BODY, options, _stats())

    assert set(document) == {"generated", "config", "tree", "stats"}
    assert document["tree"] == BODY
    assert "Directory Summary" not in document["tree"]
    assert document["stats"]["total_files"] == 2
    assert document["config"]["format"] == "json"
    assert document["config"]["maxDepth"] == 2
    assert datetime.fromisoformat(document["generated"])
    json.dumps(document)


def test_json_without_stats_omits_key():
    document = render(BODY, TreeOptions(format="json"), _stats())
    assert "stats" not in document


def test_json_nodes_export(tmp_path: Path):
    _make_file(tmp_path / "src/a.py", "abc")
    options = TreeOptions(format="json")

    document = generate_tree(tmp_path, options)

    nodes = document["nodes"]
    assert nodes["is_dir"] is True
    assert "fs_path" not in nodes
    (src,) = nodes["children"]
    assert src["name"] == "src"
    assert src["children"] == [{"name": "a.py", "is_dir": False, "is_symlink": False, "size_bytes": 3}]


def test_html_page_escapes_content():
    page = render_html("<b>dir</b>/\n", datetime(2024, 1, 2, 3, 4, 5))

    assert page.startswith("<!DOCTYPE html>")
    assert "Generated: 2024-01-02 03:04:05" in page
    assert "<pre>&lt;b&gt;dir&lt;/b&gt;/\n</pre>" in page


def test_serialize():
    assert serialize(BODY, "txt") == BODY
    assert serialize(BODY, "md") == BODY
    assert json.loads(serialize({"tree": BODY}, "json")) == {"tree": BODY}
    assert "<pre>" in serialize(BODY, "html")
    with pytest.raises(InvalidConfiguration):
        serialize(BODY, "pdf")


@pytest.mark.parametrize("export", ["md", "txt", "json", "html"])
def test_write_output_uses_format_extension(tmp_path: Path, export):
    _make_file(tmp_path / "project/a.txt")
    fmt = {"md": "markdown", "txt": "ascii", "json": "json", "html": "ascii"}[export]
    content = generate_tree(tmp_path / "project", TreeOptions(format=fmt))

    target = write_output(tmp_path / "tree", content, export)

    assert target == tmp_path / f"tree.{export}"
    text = target.read_text(encoding="utf-8")
    assert "a.txt" in text
    # no temporary files left behind
    assert sorted(p.name for p in tmp_path.iterdir()) == sorted(["project", f"tree.{export}"])


def test_write_text_atomic_replaces_existing(tmp_path: Path):
    target = tmp_path / "out.txt"
    target.write_text("old", encoding="utf-8")

    write_text_atomic(target, "new")

    assert target.read_text(encoding="utf-8") == "new"


def test_write_failure_is_reported(tmp_path: Path):
    with pytest.raises(OutputWriteFailure) as excinfo:
        write_output(tmp_path / "missing-dir" / "tree", BODY, "txt")
    assert isinstance(excinfo.value, OSError)
    assert not (tmp_path / "missing-dir").exists()


def test_build_and_render_stats_for_empty_tree(tmp_path: Path):
    result = build_tree(tmp_path, TreeOptions(show_stats=True))
    out = render(result.body, TreeOptions(show_stats=True), result.stats)

    assert "Total Files: 0" in out
    assert "Total Size: 0B" in out
