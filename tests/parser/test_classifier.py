"""
Tests for parser.classifier — line splitting, field extraction, classification
priority, and stable row ids.
"""

from __future__ import annotations

import pytest

from stitchline.parser import (
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

_SAMPLE = """Materials:
Worsted yarn, 4 mm hook

Body:
R1: MR, 6 sc (6 sts)
R2: inc around (12 sts)

Rnd 3: (sc, inc) x6 (18 sts)
Stuff firmly as you go.
"""

# ── Field extraction ───────────────────────────────────────────────────────────


class TestExtractRowNumber:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Row 3: sc across", 3),
            ("row 12 sc across", 12),
            ("Rows 3-5: sc around", 3),
            ("Rnd. 5: inc around", 5),
            ("Rnd 7 sc around", 7),
            ("Round 9: dec around", 9),
            ("R1: MR, 6 sc", 1),
            ("R2-4: sc around (12 sts)", 2),
            ("R10 – 12: sc around", 10),
        ],
    )
    def test_row_tokens(self, text, expected):
        assert extract_row_number(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["Stuff firmly", "Red yarn 2 skeins", "6 sc in MR", "Repeat rows 2-3", ""],
    )
    def test_no_row_token(self, text):
        assert extract_row_number(text) is None


class TestExtractStitchCount:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("R1: 6 sc (6 sts)", 6),
            ("R2: inc around (12)", 12),
            ("R3: sc around (18 stitches)", 18),
            ("R4: sc around (1 st)", 1),
            ("R5: (sc, inc) x6 (18 STS)", 18),
            ("R6: 6 sc (6 sts), then (12 sts)", 12),
        ],
    )
    def test_counts(self, text, expected):
        assert extract_stitch_count(text) == expected

    @pytest.mark.parametrize("text", ["R1: 6 sc", "(sc, inc) x6", "(12 sts", "sc 12 sts"])
    def test_no_count(self, text):
        assert extract_stitch_count(text) is None


class TestStripHelpers:
    def test_strip_row_label(self):
        assert strip_row_label("R3: sc around") == "sc around"
        assert strip_row_label("Rnd. 5 - inc around") == "inc around"
        assert strip_row_label("Rows 2-4: sc") == "sc"

    def test_strip_row_label_leaves_other_text(self):
        assert strip_row_label("Stuff firmly") == "Stuff firmly"

    def test_strip_stitch_count(self):
        assert strip_stitch_count("inc around (12 sts)") == "inc around"
        assert strip_stitch_count("(sc, inc) x6 (18 sts)") == "(sc, inc) x6"
        assert strip_stitch_count("sc around") == "sc around"


# ── Row ids ────────────────────────────────────────────────────────────────────


class TestRowIds:
    def test_deterministic(self):
        assert make_row_id(3, "R1: 6 sc") == make_row_id(3, "R1: 6 sc")

    def test_normalizes_case_and_whitespace(self):
        assert make_row_id(0, "R1:  6 SC") == make_row_id(0, "r1: 6 sc")

    def test_depends_on_index_and_text(self):
        assert make_row_id(0, "R1: 6 sc") != make_row_id(1, "R1: 6 sc")
        assert make_row_id(0, "R1: 6 sc") != make_row_id(0, "R1: 7 sc")

    def test_format(self):
        row_id = make_row_id(4, "R1: 6 sc")
        prefix, index, digest = row_id.split("-")
        assert prefix == "row"
        assert index == "4"
        assert len(digest) == 8

    def test_stable_across_reclassification(self):
        first = [line.id for line in classify_lines(_SAMPLE)]
        second = [line.id for line in classify_lines(_SAMPLE)]
        assert first == second
        assert len(set(first)) == len(first)

    def test_duplicate_text_gets_distinct_ids(self):
        lines = classify_lines("R1: sc around\nR1: sc around")
        assert lines[0].id != lines[1].id

    def test_editing_one_line_keeps_other_ids(self):
        before = classify_lines("Body:\nR1: 6 sc\nR2: inc around")
        after = classify_lines("Body:\nR1: 6 sc\nR2: inc around (12 sts)")
        assert before[1].id == after[1].id
        assert before[2].id != after[2].id


# ── Classification ─────────────────────────────────────────────────────────────


class TestClassifyLines:
    def test_empty_input(self):
        assert classify_lines("") == []
        assert classify_lines("\n  \n\t\n") == []

    def test_one_line_per_non_blank_source_line(self):
        lines = classify_lines(_SAMPLE)
        assert len(lines) == 7
        assert [line.text for line in lines] == [
            "Materials:",
            "Worsted yarn, 4 mm hook",
            "Body:",
            "R1: MR, 6 sc (6 sts)",
            "R2: inc around (12 sts)",
            "Rnd 3: (sc, inc) x6 (18 sts)",
            "Stuff firmly as you go.",
        ]

    def test_original_index_counts_blank_lines(self):
        lines = classify_lines(_SAMPLE)
        assert [line.original_index for line in lines] == [0, 1, 3, 4, 5, 7, 8]

    def test_types(self):
        types = [line.type for line in classify_lines(_SAMPLE)]
        assert types == [
            LineType.HEADER,
            LineType.NOTE,
            LineType.HEADER,
            LineType.INSTRUCTION,
            LineType.INSTRUCTION,
            LineType.INSTRUCTION,
            LineType.NOTE,
        ]

    def test_windows_line_endings(self):
        lines = classify_lines("Body:\r\nR1: 6 sc\r\n\r\nR2: inc around")
        assert [line.text for line in lines] == ["Body:", "R1: 6 sc", "R2: inc around"]
        assert [line.original_index for line in lines] == [0, 1, 3]

    def test_lines_are_trimmed(self):
        (line,) = classify_lines("    R1: 6 sc   ")
        assert line.text == "R1: 6 sc"

    def test_fields_attached(self):
        line = classify_lines("R1: MR, 6 sc (6 sts)")[0]
        assert line.row_number == 1
        assert line.stitch_count == 6
        assert [m.abbreviation for m in line.detected_stitches] == ["MR", "sc"]

    def test_note_keeps_stitch_count_and_stitches(self):
        line = classify_lines("Finish with 6 sc (6 sts)")[0]
        assert line.type == LineType.NOTE
        assert line.row_number is None
        assert line.stitch_count == 6
        assert [m.abbreviation for m in line.detected_stitches] == ["sc"]

    def test_pattern_line_is_frozen(self):
        line = classify_lines("R1: 6 sc")[0]
        with pytest.raises(AttributeError):
            line.text = "changed"  # type: ignore[misc]

    def test_never_raises_on_garbage(self):
        lines = classify_lines("((((\n%%%\n)))) x")
        assert all(line.type == LineType.NOTE for line in lines)


class TestClassificationPriority:
    @pytest.mark.parametrize(
        "text",
        ["Body", "Body:", "sleeves:", "EARS", "Assembly :", "Notes", "Gauge:", "Size"],
    )
    def test_keyword_headers(self, text):
        assert classify_lines(text)[0].type == LineType.HEADER

    def test_short_line_ending_in_colon_is_header(self):
        assert classify_lines("Left Arm (make 2):")[0].type == LineType.HEADER

    def test_long_line_ending_in_colon_is_note(self):
        text = "Before you begin, read through every round of the pattern below:"
        assert len(text) >= 50
        assert classify_lines(text)[0].type == LineType.NOTE

    def test_keyword_must_be_whole_line(self):
        line = classify_lines("Body is worked in continuous rounds")[0]
        assert line.type == LineType.NOTE

    def test_header_beats_instruction(self):
        # A bare row label ending in a colon is a short colon-terminated line.
        line = classify_lines("Row 1:")[0]
        assert line.type == LineType.HEADER
        assert line.row_number == 1

    def test_instruction_requires_leading_row_token(self):
        assert classify_lines("Work R1 again")[0].type == LineType.NOTE


class TestLineClassifier:
    def test_classify_line_directly(self):
        classifier = LineClassifier()
        line = classifier.classify_line("R4: sc around (24 sts)", original_index=9)
        assert isinstance(line, PatternLine)
        assert line.original_index == 9
        assert line.id == make_row_id(9, "R4: sc around (24 sts)")

    def test_is_header(self):
        classifier = LineClassifier()
        assert classifier.is_header("Tail:")
        assert not classifier.is_header("R1: 6 sc")
