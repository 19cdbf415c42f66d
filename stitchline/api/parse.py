"""
Public pattern parsing API.

parse_pattern() classifies free-text pattern input and analyzes its structure
in one call.  It always returns a ParseReport; malformed input degrades to
note lines and advisory validation findings rather than raising.
"""

from __future__ import annotations

from dataclasses import dataclass

from stitchline.parser.classifier import LineType, PatternLine, classify_lines
from stitchline.structure.analyzer import PatternStructure, analyze_structure


@dataclass(frozen=True)
class ParseReport:
    """Outcome of parsing a pattern snippet.

    Attributes:
        lines: Every classified non-blank line, in source order.
        structure: Sections, statistics, and validation findings for ``lines``.
    """

    lines: tuple[PatternLine, ...]
    structure: PatternStructure

    @property
    def passed(self) -> bool:
        """True when validation produced no findings."""
        return not self.structure.validation_errors

    def line_by_id(self, row_id: str) -> PatternLine | None:
        return next((line for line in self.lines if line.id == row_id), None)

    def instructions(self) -> tuple[PatternLine, ...]:
        return tuple(line for line in self.lines if line.type == LineType.INSTRUCTION)


def parse_pattern(pattern_text: str) -> ParseReport:
    """
    Classify and analyze a crochet pattern snippet.

    Parameters
    ----------
    pattern_text:
        Raw pattern text from any source (typed, pasted, OCR, scrape).

    Returns
    -------
    ParseReport
        Always returned — never raises.
    """
    lines = classify_lines(pattern_text)
    return ParseReport(lines=tuple(lines), structure=analyze_structure(lines))
