from .detector import detect_stitches, highlight_segments, resolve_overlaps
from .registry import DEFAULT_STITCH_COLOR, StitchRegistry, get_registry
from .types import StitchCategory, StitchEntry, StitchMatch, TextSegment

__all__ = [
    # Enums
    "StitchCategory",
    # Runtime objects
    "StitchMatch",
    "TextSegment",
    # Registry entry type (frozen, loaded from YAML)
    "StitchEntry",
    # Registry
    "StitchRegistry",
    "get_registry",
    "DEFAULT_STITCH_COLOR",
    # Detection
    "detect_stitches",
    "resolve_overlaps",
    "highlight_segments",
]
