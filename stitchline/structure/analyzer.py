"""
Structure analyzer — groups classified lines into sections and aggregates
pattern-level statistics.

analyze_structure is a pure function of the line list: it never mutates the
lines and never raises.  Validation findings come from the validator package
and are attached unchanged.

total_rows is the largest row number seen, not a count of rows.  Patterns
that restart numbering in each section report the largest section.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from stitchline.parser.classifier import LineType, PatternLine
from stitchline.stitches.detector import resolve_overlaps
from stitchline.validator.rules import ValidationError, validate_lines

DEFAULT_SECTION_NAME = "Main Pattern"
DEFAULT_SECTION_ID = "section-main"

_TRAILING_PUNCTUATION_RE = re.compile(r"[\s:;,.\-–—]+$")
_REPEAT_INTENT_RE = re.compile(r"\brepeat\b|\bx\s*\d+\b|\)\s*x\s*\d+", re.IGNORECASE)


@dataclass(frozen=True)
class PatternSection:
    """
    A named run of consecutive lines.

    start_line/end_line are inclusive indices into the classified line list.
    For a headed section start_line is the header's own index; ``lines``
    never contains the header.
    """

    id: str
    name: str
    start_line: int
    end_line: int
    lines: tuple[PatternLine, ...]


@dataclass(frozen=True)
class PatternStructure:
    sections: tuple[PatternSection, ...]
    total_rows: int
    detected_stitch_set: frozenset[str]
    has_repeats: bool
    validation_errors: tuple[ValidationError, ...]


def section_name(header_text: str) -> str:
    """Header text with trailing punctuation and whitespace stripped."""
    return _TRAILING_PUNCTUATION_RE.sub("", header_text.strip())


def group_sections(lines: list[PatternLine]) -> list[PatternSection]:
    """Split *lines* into sections at every header line."""
    if not lines:
        return []

    header_indices = [i for i, line in enumerate(lines) if line.type == LineType.HEADER]
    sections: list[PatternSection] = []

    first_header = header_indices[0] if header_indices else len(lines)
    if first_header > 0:
        sections.append(
            PatternSection(
                id=DEFAULT_SECTION_ID,
                name=DEFAULT_SECTION_NAME,
                start_line=0,
                end_line=first_header - 1,
                lines=tuple(lines[:first_header]),
            )
        )

    for position, header_index in enumerate(header_indices):
        next_header = (
            header_indices[position + 1] if position + 1 < len(header_indices) else len(lines)
        )
        sections.append(
            PatternSection(
                id=f"section-{header_index}",
                name=section_name(lines[header_index].text),
                start_line=header_index,
                end_line=next_header - 1,
                lines=tuple(lines[header_index + 1 : next_header]),
            )
        )

    return sections


def collect_stitch_set(lines: list[PatternLine]) -> frozenset[str]:
    """Abbreviations of every overlap-resolved stitch match across *lines*."""
    seen: set[str] = set()
    for line in lines:
        seen.update(m.abbreviation for m in resolve_overlaps(line.detected_stitches))
    return frozenset(seen)


def analyze_structure(lines: list[PatternLine]) -> PatternStructure:
    """
    Build the PatternStructure for a classified line list.

    Parameters
    ----------
    lines:
        Output of classify_lines(), in source order.

    Returns
    -------
    PatternStructure
        Sections, max row number, stitch set, repeat flag, and all validation
        findings.  An empty line list yields no sections and zero rows.
    """
    row_numbers = [line.row_number for line in lines if line.row_number is not None]
    return PatternStructure(
        sections=tuple(group_sections(lines)),
        total_rows=max(row_numbers, default=0),
        detected_stitch_set=collect_stitch_set(lines),
        has_repeats=any(_REPEAT_INTENT_RE.search(line.text) for line in lines),
        validation_errors=tuple(validate_lines(lines)),
    )
