"""
Validation gate over classified lines.

validate_pattern_lines collects every rule finding into a ValidationResult.
``passed`` is True only when no rule fired; callers that treat findings as
purely advisory can ignore it and read ``errors`` directly.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from stitchline.parser.classifier import PatternLine
from stitchline.validator.rules import ValidationError, ValidationKind, validate_lines


@dataclass(frozen=True)
class ValidationResult:
    """Aggregate outcome of validating a classified pattern."""

    passed: bool
    errors: tuple[ValidationError, ...]

    def count_by_kind(self) -> dict[ValidationKind, int]:
        """Number of findings per ValidationKind (kinds with no findings omitted)."""
        return dict(Counter(e.kind for e in self.errors))

    def for_line(self, line_index: int) -> tuple[ValidationError, ...]:
        return tuple(e for e in self.errors if e.line_index == line_index)


def validate_pattern_lines(lines: list[PatternLine]) -> ValidationResult:
    """Run all line rules and wrap the findings in a ValidationResult."""
    errors = validate_lines(lines)
    return ValidationResult(passed=not errors, errors=tuple(errors))
