"""
Exception classes for stitchline.

Parsing and validation never raise on text input; these exceptions cover the
store and exporter, where a caller passed something that cannot be acted on.
All inherit from StitchlineError.
"""

from __future__ import annotations


class StitchlineError(Exception):
    """Base exception for all stitchline errors."""


class PatternNotFoundError(StitchlineError, KeyError):
    """Raised when a store operation names a pattern id that is not loaded.

    Attributes:
        pattern_id: The id that failed to resolve.
    """

    def __init__(self, pattern_id: str) -> None:
        super().__init__(f"Pattern {pattern_id!r} is not loaded in the store")
        self.pattern_id = pattern_id

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


class ExportError(StitchlineError, ValueError):
    """Raised when an export format is not supported."""
