"""
Per-line validation rules for classified pattern text.

Each rule is a pure function ``(index, line) -> ValidationError | None`` and
is evaluated independently, so one line may produce several errors.  Findings
are advisory: nothing here raises, and the caller decides whether to block on
them or only display them.

Rules, in evaluation order:
  incomplete_repeat   -- "repeat" with no "around", "to end" or "x<N>" qualifier
  unclear_instruction -- instruction line shorter than 5 characters
  missing_number      -- inc/dec instruction with no stitch count and no "around"
  syntax              -- unbalanced parentheses
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from stitchline.parser.classifier import LineType, PatternLine

_REPEAT_RE = re.compile(r"repeat", re.IGNORECASE)
_REPEAT_QUALIFIER_RE = re.compile(r"\baround\b|\bto\s+end\b|\bx\s*\d+", re.IGNORECASE)
_SHAPING_RE = re.compile(r"\b(?:inc|dec)", re.IGNORECASE)
_AROUND_RE = re.compile(r"\baround\b", re.IGNORECASE)

MIN_INSTRUCTION_LENGTH = 5


class ValidationKind(str, Enum):
    SYNTAX = "syntax"
    MISSING_NUMBER = "missing_number"
    UNCLEAR_INSTRUCTION = "unclear_instruction"
    INCOMPLETE_REPEAT = "incomplete_repeat"


@dataclass(frozen=True)
class ValidationError:
    """A single advisory finding against one classified line."""

    line_index: int  # index into the classified line list
    kind: ValidationKind
    message: str
    suggestion: Optional[str] = None


def check_incomplete_repeat(index: int, line: PatternLine) -> Optional[ValidationError]:
    if not _REPEAT_RE.search(line.text) or _REPEAT_QUALIFIER_RE.search(line.text):
        return None
    return ValidationError(
        line_index=index,
        kind=ValidationKind.INCOMPLETE_REPEAT,
        message=f"Repeat on line {index + 1} does not say how many times or how far",
        suggestion='Add "around", "to end", or a count such as "x6"',
    )


def check_unclear_instruction(index: int, line: PatternLine) -> Optional[ValidationError]:
    if line.type != LineType.INSTRUCTION or len(line.text.strip()) >= MIN_INSTRUCTION_LENGTH:
        return None
    return ValidationError(
        line_index=index,
        kind=ValidationKind.UNCLEAR_INSTRUCTION,
        message=f"Instruction on line {index + 1} is too short to follow: {line.text!r}",
        suggestion="Write out the stitches worked in this row",
    )


def check_missing_number(index: int, line: PatternLine) -> Optional[ValidationError]:
    if line.type != LineType.INSTRUCTION:
        return None
    if not _SHAPING_RE.search(line.text):
        return None
    if line.stitch_count is not None or _AROUND_RE.search(line.text):
        return None
    return ValidationError(
        line_index=index,
        kind=ValidationKind.MISSING_NUMBER,
        message=f"Shaping row on line {index + 1} has no stitch count",
        suggestion='Add the stitch count at the end of the row, e.g. "(18 sts)"',
    )


def check_parentheses(index: int, line: PatternLine) -> Optional[ValidationError]:
    opened = line.text.count("(")
    closed = line.text.count(")")
    if opened == closed:
        return None
    return ValidationError(
        line_index=index,
        kind=ValidationKind.SYNTAX,
        message=(
            f"Unbalanced parentheses on line {index + 1}: "
            f"{opened} opening, {closed} closing"
        ),
        suggestion="Check for a missing '(' or ')'",
    )


LineRule = Callable[[int, PatternLine], Optional[ValidationError]]

RULES: tuple[LineRule, ...] = (
    check_incomplete_repeat,
    check_unclear_instruction,
    check_missing_number,
    check_parentheses,
)


def validate_lines(lines: list[PatternLine]) -> list[ValidationError]:
    """
    Run every rule over every line.

    Returns errors ordered by line index, then by rule order.  The input list
    and its lines are never modified.
    """
    errors: list[ValidationError] = []
    for index, line in enumerate(lines):
        for rule in RULES:
            error = rule(index, line)
            if error is not None:
                errors.append(error)
    return errors
