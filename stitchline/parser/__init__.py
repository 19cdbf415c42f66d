from stitchline.parser.classifier import (
    LineClassifier,
    LineType,
    PatternLine,
    classify_lines,
    extract_row_number,
    extract_stitch_count,
    make_row_id,
    strip_row_label,
    strip_stitch_count,
)

__all__ = [
    "LineType",
    "PatternLine",
    "LineClassifier",
    "classify_lines",
    "extract_row_number",
    "extract_stitch_count",
    "make_row_id",
    "strip_row_label",
    "strip_stitch_count",
]
