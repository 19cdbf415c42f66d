"""
Line templates for the exporters.

render_text_line and render_markdown_line turn one classified line plus its
annotation/completion state into output lines.  Both render the row label
and stitch count from the parsed fields, so the instruction body has those
tokens removed to avoid printing them twice.
"""

from __future__ import annotations

from typing import Optional

from stitchline.parser.classifier import PatternLine, strip_row_label, strip_stitch_count
from stitchline.store.models import RowAnnotation

RULE_WIDTH = 50


def instruction_body(line: PatternLine) -> str:
    """Line text without the leading row token and the trailing stitch count."""
    body = line.text
    if line.row_number is not None:
        body = strip_row_label(body)
    if line.stitch_count is not None:
        body = strip_stitch_count(body)
    return body.strip()


def render_text_header(line: PatternLine) -> list[str]:
    return ["", line.text.upper(), "-" * RULE_WIDTH]


def render_text_line(
    line: PatternLine,
    annotation: Optional[RowAnnotation],
    completed: bool,
) -> list[str]:
    """
    Render a non-header line for the plain-text export.

    Markers stack outermost-last:
    ``[HIGHLIGHT: <color>] [X] [✓] R3: body (N sts)``.
    """
    out = ""
    if line.row_number is not None:
        out += f"R{line.row_number}: "
    out += instruction_body(line)
    if line.stitch_count is not None:
        out += f" ({line.stitch_count} sts)"

    if completed:
        out = f"[✓] {out}"
    if annotation is not None:
        if annotation.is_crossed_out:
            out = f"[X] {out}"
        if annotation.highlight_color:
            out = f"[HIGHLIGHT: {annotation.highlight_color}] {out}"

    rendered = [out]
    if annotation is not None and annotation.note:
        rendered.append(f"  └─ Note: {annotation.note}")
    return rendered


def render_markdown_header(line: PatternLine) -> list[str]:
    return ["", f"## {line.text}", ""]


def render_markdown_line(
    line: PatternLine,
    annotation: Optional[RowAnnotation],
    completed: bool,
) -> list[str]:
    """Render a non-header line as a GitHub task-list item."""
    content = ""
    if line.row_number is not None:
        content += f"**R{line.row_number}:** "
    content += instruction_body(line)
    if line.stitch_count is not None:
        content += f" *({line.stitch_count} sts)*"

    if annotation is not None and annotation.is_crossed_out:
        content = f"~~{content}~~"

    checkbox = "- [x]" if completed else "- [ ]"
    rendered = [f"{checkbox} {content}"]
    if annotation is not None and annotation.note:
        rendered.append(f"  > {annotation.note}")
    return rendered
