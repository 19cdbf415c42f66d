"""
stitchline: turn free-form crochet pattern text into addressable rows.

Example:
    >>> from stitchline import parse_pattern
    >>> report = parse_pattern("Body:\\nR1: MR, 6 sc (6 sts)")
    >>> [line.type.value for line in report.lines]
    ['header', 'instruction']
    >>> sorted(report.structure.detected_stitch_set)
    ['MR', 'sc']
"""

from stitchline.api.parse import ParseReport, parse_pattern
from stitchline.exceptions import ExportError, PatternNotFoundError, StitchlineError
from stitchline.parser.classifier import LineType, PatternLine, classify_lines
from stitchline.store.config import StoreConfig
from stitchline.store.models import (
    OperationStatus,
    Pattern,
    PatternDifficulty,
    PatternModification,
    PatternVersion,
    RowAnnotation,
)
from stitchline.store.store import AnnotationStore
from stitchline.structure.analyzer import PatternSection, PatternStructure, analyze_structure
from stitchline.validator.rules import ValidationError, ValidationKind
from stitchline.writer.exporter import ExportFormat, export_pattern

__version__ = "0.1.0"
__all__ = [
    # Main API
    "parse_pattern",
    "ParseReport",
    "classify_lines",
    "analyze_structure",
    "export_pattern",
    "ExportFormat",
    # Parsed output
    "LineType",
    "PatternLine",
    "PatternSection",
    "PatternStructure",
    "ValidationError",
    "ValidationKind",
    # Store
    "AnnotationStore",
    "StoreConfig",
    "OperationStatus",
    "Pattern",
    "PatternDifficulty",
    "PatternModification",
    "PatternVersion",
    "RowAnnotation",
    # Exceptions
    "StitchlineError",
    "PatternNotFoundError",
    "ExportError",
]
