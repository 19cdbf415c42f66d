from stitchline.writer.exporter import (
    ExportFormat,
    PatternExporter,
    export_json,
    export_markdown,
    export_pattern,
    export_text,
)

__all__ = [
    "ExportFormat",
    "PatternExporter",
    "export_pattern",
    "export_text",
    "export_markdown",
    "export_json",
]
