"""
Line classifier — turns raw pattern text into an ordered list of PatternLines.

Pipeline (per non-blank source line, each line independently):
  1. Extract an optional row number ("Row 3:", "Rnd. 5", "R2-4" → 2).
  2. Extract an optional stitch count ("(12 sts)", "(6)", "(18 stitches)").
  3. Attach every raw stitch match from the detector.
  4. Classify: header → instruction → note, first hit wins.
  5. Assign a stable row id.

Row ids are a deterministic function of the original line index and the
normalized line text, so annotations and checklist entries keyed by id
survive re-parsing the same snippet.  Editing a line, or inserting a line
above it, changes its id.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from stitchline.stitches.detector import detect_stitches
from stitchline.stitches.registry import StitchRegistry, get_registry
from stitchline.stitches.types import StitchMatch

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_WHITESPACE_RE = re.compile(r"\s+")

# Row token at the start of a line.  Longer spellings come first so "Rnd"
# is not read as "R" followed by garbage.
_ROW_TOKEN = r"(?:rounds?|rnds?|rows?|r)\.?\s*(\d+)(?:\s*[-–]\s*\d+)?"
_ROW_NUMBER_RE = re.compile(r"^\s*" + _ROW_TOKEN + r"(?!\d)", re.IGNORECASE)
_ROW_LABEL_RE = re.compile(r"^\s*" + _ROW_TOKEN + r"(?!\d)\s*[:.)\-]?\s*", re.IGNORECASE)

_STITCH_COUNT_RE = re.compile(r"\(\s*(\d+)\s*(?:stitches|sts?)?\s*\)", re.IGNORECASE)


class LineType(str, Enum):
    INSTRUCTION = "instruction"
    HEADER = "header"
    NOTE = "note"


@dataclass(frozen=True)
class PatternLine:
    """
    One classified, non-blank line of a pattern.

    Attributes:
        id: Stable row id (see make_row_id).
        text: The trimmed source line.
        type: header, instruction, or note.
        original_index: Index of the line in the raw text, blank lines included.
        row_number: Leading row/round number, if any.
        stitch_count: Parenthesized stitch count, if any.
        detected_stitches: Raw detector output, cross-entry overlaps included.
    """

    id: str
    text: str
    type: LineType
    original_index: int
    row_number: Optional[int] = None
    stitch_count: Optional[int] = None
    detected_stitches: tuple[StitchMatch, ...] = ()


# ── Field extraction ───────────────────────────────────────────────────────────


def extract_row_number(text: str) -> Optional[int]:
    """Return the leading row number; a range such as "R2-4" yields 2."""
    m = _ROW_NUMBER_RE.match(text)
    return int(m.group(1)) if m else None


def extract_stitch_count(text: str) -> Optional[int]:
    """Return the last parenthesized stitch count in *text*, or None."""
    counts = _STITCH_COUNT_RE.findall(text)
    return int(counts[-1]) if counts else None


def strip_row_label(text: str) -> str:
    """Remove the leading row token ("R3:", "Rnd. 5 -") from *text*."""
    return _ROW_LABEL_RE.sub("", text, count=1)


def strip_stitch_count(text: str) -> str:
    """Remove the last parenthesized stitch count from *text*."""
    matches = list(_STITCH_COUNT_RE.finditer(text))
    if not matches:
        return text
    last = matches[-1]
    return (text[: last.start()].rstrip() + " " + text[last.end() :].lstrip()).strip()


def normalize_line(text: str) -> str:
    """Lower-case and collapse runs of whitespace."""
    return _WHITESPACE_RE.sub(" ", text.strip()).lower()


def make_row_id(original_index: int, text: str) -> str:
    """Deterministic row id from the source position and normalized text."""
    digest = hashlib.sha1(normalize_line(text).encode("utf-8")).hexdigest()[:8]
    return f"row-{original_index}-{digest}"


# ── Classification ─────────────────────────────────────────────────────────────


class LineClassifier:
    """
    Classifies lines against the registry's header vocabulary.

    The header keyword regex is compiled once per classifier from the
    registry's header_keywords table.
    """

    def __init__(self, registry: Optional[StitchRegistry] = None) -> None:
        self._registry = registry or get_registry()
        alternatives = "|".join(re.escape(k) for k in self._registry.header_keywords)
        self._header_re = re.compile(rf"^(?:{alternatives})\s*:?$", re.IGNORECASE)

    def is_header(self, text: str) -> bool:
        if self._header_re.match(text):
            return True
        return len(text) < self._registry.short_header_max_length and text.endswith(":")

    def classify_line(self, text: str, original_index: int) -> PatternLine:
        """Classify one already-trimmed, non-blank line."""
        row_number = extract_row_number(text)

        if self.is_header(text):
            line_type = LineType.HEADER
        elif row_number is not None:
            line_type = LineType.INSTRUCTION
        else:
            line_type = LineType.NOTE

        return PatternLine(
            id=make_row_id(original_index, text),
            text=text,
            type=line_type,
            original_index=original_index,
            row_number=row_number,
            stitch_count=extract_stitch_count(text),
            detected_stitches=tuple(detect_stitches(text, self._registry)),
        )

    def classify(self, raw_text: str) -> list[PatternLine]:
        """Split *raw_text* into lines and classify every non-blank one."""
        lines: list[PatternLine] = []
        for index, raw_line in enumerate(_LINE_BREAK_RE.split(raw_text or "")):
            text = raw_line.strip()
            if not text:
                continue
            lines.append(self.classify_line(text, index))
        return lines


_default_classifier: LineClassifier = LineClassifier()


def classify_lines(raw_text: str) -> list[PatternLine]:
    """Classify *raw_text* with the default registry."""
    return _default_classifier.classify(raw_text)
