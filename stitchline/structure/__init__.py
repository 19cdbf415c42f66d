from stitchline.structure.analyzer import (
    DEFAULT_SECTION_NAME,
    PatternSection,
    PatternStructure,
    analyze_structure,
    collect_stitch_set,
    group_sections,
    section_name,
)

__all__ = [
    "PatternSection",
    "PatternStructure",
    "analyze_structure",
    "group_sections",
    "section_name",
    "collect_stitch_set",
    "DEFAULT_SECTION_NAME",
]
