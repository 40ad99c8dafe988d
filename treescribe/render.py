# treescribe/render.py

"""
Output envelopes and file export.

:func:`render` is pure: it wraps a generated tree body in the envelope of the
requested format. :func:`write_output` is the only function here touching the
disk; it serialises an export and writes it atomically, so an interrupted run
never leaves a half-written file behind.
"""

from __future__ import annotations

import html
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

from anytree import Node
from anytree.exporter import DictExporter

from treescribe.errors import InvalidConfiguration, OutputWriteFailure
from treescribe.options import OutputFormat, TreeOptions

if TYPE_CHECKING:
    from treescribe.stats import TreeStats

logger = logging.getLogger(__name__)

MARKDOWN_HEADER = "## Directory Structure\n\n"

# Export choice -> (output format, file extension)
EXPORT_FORMATS: Mapping[str, tuple[OutputFormat, str]] = {
    "md": (OutputFormat.MARKDOWN, "md"),
    "txt": (OutputFormat.ASCII, "txt"),
    "json": (OutputFormat.JSON, "json"),
    "html": (OutputFormat.ASCII, "html"),
}

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Directory Tree</title>
    <style>
        body {{
            font-family: monospace;
            padding: 20px;
            background: #f5f5f5;
        }}
        pre {{
            background: white;
            padding: 20px;
            border-radius: 5px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
            white-space: pre-wrap;
        }}
        .header {{
            color: #666;
            margin-bottom: 20px;
        }}
    </style>
</head>
<body>
    <div class="header">
        <h1>Directory Tree</h1>
        <p>Generated: {timestamp}</p>
    </div>
    <pre>{content}</pre>
</body>
</html>
"""

_node_exporter = DictExporter(
    attriter=lambda attrs: [(k, v) for k, v in attrs if k != "fs_path"],
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def nodes_to_dict(root: Node) -> dict[str, Any]:
    """Export an entry node tree as nested dictionaries (``children`` lists)."""
    return _node_exporter.export(root)


def render(
    body: str,
    options: TreeOptions,
    stats: TreeStats | None = None,
    *,
    nodes: Node | None = None,
) -> str | dict[str, Any]:
    """
    Wrap a tree body in the envelope for ``options.format``.

    Parameters
    ----------
    body : str
        Lines produced by the tree builder.
    options : TreeOptions
        Options used for the traversal.
    stats : TreeStats, optional
        Statistics of the traversal. Only used when ``options.show_stats``.
    nodes : anytree.Node, optional
        Entry node tree, added to JSON output as ``nodes``.

    Returns
    -------
    str | dict
        ``markdown``: ``"## Directory Structure"`` header followed by the
        text. ``json``: a dictionary with ``generated``, ``config``, ``tree``
        and, when enabled, structured ``stats``. Other formats: the text.
        The text is the body with the stats summary appended when enabled;
        JSON never carries the textual summary.
    """

    show_stats = options.show_stats and stats is not None

    if options.format is OutputFormat.JSON:
        document: dict[str, Any] = {
            "generated": _now().isoformat(),
            "config": options.as_dict(),
            "tree": body,
        }
        if show_stats:
            document["stats"] = stats.as_dict()
        if nodes is not None:
            document["nodes"] = nodes_to_dict(nodes)
        return document

    text = body
    if show_stats:
        text += "\n" + stats.summary(options.use_colors)

    if options.format is OutputFormat.MARKDOWN:
        return MARKDOWN_HEADER + text
    return text


def render_html(content: str, timestamp: datetime | None = None) -> str:
    """Embed plain text output in a minimal standalone HTML page."""
    timestamp = timestamp or datetime.now()
    return HTML_TEMPLATE.format(
        timestamp=html.escape(timestamp.strftime("%Y-%m-%d %H:%M:%S")),
        content=html.escape(content),
    )


def serialize(content: str | Mapping[str, Any], export: str) -> str:
    """Turn rendered output into the text written for an ``export`` choice."""
    if export not in EXPORT_FORMATS:
        raise InvalidConfiguration(
            f"Invalid export format: {export}. Must be one of: {', '.join(EXPORT_FORMATS)}"
        )
    if export == "json":
        return json.dumps(content, indent=2, ensure_ascii=False) + "\n"
    if not isinstance(content, str):
        raise TypeError(f"{export} export expects text output, got {type(content).__name__}")
    if export == "html":
        return render_html(content)
    return content


def write_text_atomic(path: Path | str, text: str) -> Path:
    """
    Write ``text`` to ``path`` in a single step.

    The data goes to a temporary file in the destination directory which is
    then moved over ``path``.

    Raises
    ------
    OutputWriteFailure
        If any filesystem operation fails.
    """

    path = Path(path)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteFailure(path, exc) from exc
    return path


def write_output(base: Path | str, content: str | Mapping[str, Any], export: str) -> Path:
    """
    Persist rendered output as ``<base>.<ext>`` for the given export choice.

    Returns
    -------
    pathlib.Path
        The path written.
    """

    text = serialize(content, export)
    _, ext = EXPORT_FORMATS[export]
    target = Path(f"{base}.{ext}")
    write_text_atomic(target, text)
    logger.info("Tree exported to %s", target)
    return target
