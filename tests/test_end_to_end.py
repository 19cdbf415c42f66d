"""
End-to-end integration tests for the full stitchline pipeline.

Exercises: raw text → parse_pattern → AnnotationStore (checklist,
annotations, modifications, versions) → export_pattern, verifying that row
ids tie every stage together.
"""

from __future__ import annotations

import json

from stitchline import (
    AnnotationStore,
    ExportFormat,
    LineType,
    Pattern,
    ValidationKind,
    export_pattern,
    parse_pattern,
)

_SNIPPET = "Body:\nR1: MR, 6 sc (6 sts)\nR2: inc around (12 sts)\nR3: repeat"


class TestParsePipeline:
    def setup_method(self):
        self.report = parse_pattern(_SNIPPET)

    def test_line_types(self):
        assert [line.type for line in self.report.lines] == [
            LineType.HEADER,
            LineType.INSTRUCTION,
            LineType.INSTRUCTION,
            LineType.INSTRUCTION,
        ]

    def test_structure(self):
        structure = self.report.structure
        assert structure.total_rows == 3
        assert structure.detected_stitch_set == frozenset({"sc", "inc", "MR"})
        assert structure.has_repeats is True
        assert [s.name for s in structure.sections] == ["Body"]

    def test_validation(self):
        errors = self.report.structure.validation_errors
        repeats = [e for e in errors if e.kind == ValidationKind.INCOMPLETE_REPEAT]
        assert len(repeats) == 1
        assert repeats[0].line_index == 3
        assert not any(e.kind == ValidationKind.MISSING_NUMBER for e in errors)


class TestAnnotateVersionExport:
    def setup_method(self):
        self.store = AnnotationStore()
        self.store.add_pattern(Pattern(id="bunny", name="Bunny", snippet=_SNIPPET, designer="Ana"))
        self.rows = {line.row_number: line for line in parse_pattern(_SNIPPET).instructions()}

    def test_full_round_trip(self):
        r1, r2 = self.rows[1].id, self.rows[2].id
        self.store.toggle_row("bunny", r1)
        self.store.add_row_annotation("bunny", r2, note="place marker")
        self.store.track_modification("bunny", "Added marker note")
        version = self.store.create_version("bunny")

        self.store.update_snippet("bunny", _SNIPPET.replace("R3: repeat", "R3: sc around (12 sts)"))
        self.store.remove_row_annotation("bunny", r2)
        self.store.restore_version("bunny", version.version_number)

        text = export_pattern(self.store.get_pattern("bunny"), ExportFormat.TEXT)
        lines = text.splitlines()
        assert "[✓] R1: MR, 6 sc (6 sts)" in lines
        assert "R2: inc around (12 sts)" in lines
        assert "  └─ Note: place marker" in lines
        assert "R3: repeat" in lines
        assert "Total modifications: 0" in lines

    def test_json_carries_versions(self):
        self.store.track_modification("bunny", "first pass")
        self.store.create_version("bunny")
        data = json.loads(export_pattern(self.store.get_pattern("bunny"), "json"))
        (version,) = data["versions"]
        assert version["versionNumber"] == 1
        assert version["changeLog"][0]["description"] == "first pass"
        assert data["modifications"] == []

    def test_row_ids_survive_reparse(self):
        first = [line.id for line in parse_pattern(_SNIPPET).lines]
        second = [line.id for line in parse_pattern(self.store.get_pattern("bunny").snippet).lines]
        assert first == second
