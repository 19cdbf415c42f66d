"""
Pattern Validator — public API.

Exposed names
-------------
validate_lines          -- run every line rule, return a list of findings
validate_pattern_lines  -- same, wrapped in a ValidationResult (passed, errors)
ValidationResult        -- aggregate result
ValidationError         -- a single finding (line_index, kind, message, suggestion)
ValidationKind          -- syntax | missing_number | unclear_instruction | incomplete_repeat
"""

from stitchline.validator.result import ValidationResult, validate_pattern_lines
from stitchline.validator.rules import ValidationError, ValidationKind, validate_lines

__all__ = [
    "validate_lines",
    "validate_pattern_lines",
    "ValidationResult",
    "ValidationError",
    "ValidationKind",
]
