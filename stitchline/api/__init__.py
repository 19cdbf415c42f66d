from stitchline.api.parse import ParseReport, parse_pattern

__all__ = ["parse_pattern", "ParseReport"]
