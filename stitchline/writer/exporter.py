"""
Pattern exporters — serialize a Pattern and its annotation state.

text and markdown re-run the line classifier on the pattern's live snippet,
so the export always reflects the current text.  Annotations and checklist
entries are joined to lines by row id; entries recorded against a line that
has since been edited no longer match and are left out of the line listing
(they still appear in the summary sections).

json is a metadata bundle and does not classify anything.

Writing the result to a file, choosing a filename and a MIME type are the
caller's job.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Protocol, Union, runtime_checkable

from stitchline.exceptions import ExportError
from stitchline.parser.classifier import LineType, classify_lines
from stitchline.store.models import Pattern
from stitchline.store.sync import create_change_summary
from stitchline.writer.templates import (
    RULE_WIDTH,
    render_markdown_header,
    render_markdown_line,
    render_text_header,
    render_text_line,
)


class ExportFormat(str, Enum):
    TEXT = "text"
    MARKDOWN = "markdown"
    JSON = "json"


@runtime_checkable
class PatternExporter(Protocol):
    """Protocol for a single-format exporter."""

    def __call__(self, pattern: Pattern) -> str: ...


def export_text(pattern: Pattern) -> str:
    out = [
        f"PATTERN: {pattern.name}",
        f"Designer: {pattern.designer}",
        f"Difficulty: {pattern.difficulty.value}",
    ]
    if pattern.reference_url:
        out.append(f"Source: {pattern.reference_url}")
    out += ["", "=" * RULE_WIDTH, ""]

    for line in classify_lines(pattern.snippet):
        if line.type == LineType.HEADER:
            out += render_text_header(line)
        else:
            out += render_text_line(
                line,
                pattern.row_annotations.get(line.id),
                line.id in pattern.row_checklist,
            )

    out += ["", "=" * RULE_WIDTH, "ANNOTATIONS & CHANGES", "=" * RULE_WIDTH, ""]
    return "\n".join(out) + "\n" + create_change_summary(pattern)


def export_markdown(pattern: Pattern) -> str:
    out = [
        f"# {pattern.name}",
        "",
        f"**Designer:** {pattern.designer}",
        f"**Difficulty:** {pattern.difficulty.value}",
    ]
    if pattern.reference_url:
        out.append(f"**Source:** [{pattern.reference_url}]({pattern.reference_url})")
    out += ["", "---", ""]

    for line in classify_lines(pattern.snippet):
        if line.type == LineType.HEADER:
            out += render_markdown_header(line)
        else:
            out += render_markdown_line(
                line,
                pattern.row_annotations.get(line.id),
                line.id in pattern.row_checklist,
            )

    if pattern.row_annotations:
        out += ["", "---", "", "## Annotations", ""]
        out += [
            f"- **Row {row_id}:** {a.note}"
            for row_id, a in pattern.row_annotations.items()
            if a.note
        ]

    return "\n".join(out) + "\n"


def export_json(pattern: Pattern, exported_at: Optional[datetime] = None) -> str:
    stamp = exported_at or datetime.now(timezone.utc)
    data = {
        "name": pattern.name,
        "designer": pattern.designer,
        "description": pattern.description,
        "difficulty": pattern.difficulty.value,
        "snippet": pattern.snippet,
        "annotations": {row_id: a.to_dict() for row_id, a in pattern.row_annotations.items()},
        "modifications": [m.to_dict() for m in pattern.modifications],
        "versions": [v.to_dict() for v in pattern.versions],
        "exportedAt": stamp.isoformat(),
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


_EXPORTERS: dict[ExportFormat, PatternExporter] = {
    ExportFormat.TEXT: export_text,
    ExportFormat.MARKDOWN: export_markdown,
    ExportFormat.JSON: export_json,
}


def export_pattern(pattern: Pattern, fmt: Union[ExportFormat, str] = ExportFormat.TEXT) -> str:
    """
    Serialize *pattern* in the requested format.

    Parameters
    ----------
    pattern:
        The pattern aggregate, with its live snippet and annotation state.
    fmt:
        An ExportFormat or its string value ("text", "markdown", "json").

    Raises
    ------
    ExportError
        If *fmt* is not a supported format.
    """
    try:
        export_format = ExportFormat(fmt)
    except ValueError:
        supported = ", ".join(f.value for f in ExportFormat)
        raise ExportError(
            f"Export format {fmt!r} is not supported. Supported: {supported}"
        ) from None
    return _EXPORTERS[export_format](pattern)
