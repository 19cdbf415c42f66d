"""Tests for store.sync — journal entries, counter updates, change summaries."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from stitchline.store import (
    CounterUpdate,
    JournalEntry,
    Pattern,
    PatternModification,
    RowAnnotation,
    create_change_summary,
    sync_pattern_to_project,
)
from stitchline.store.sync import checklist_counter_update

_T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def _modification(n: int) -> PatternModification:
    return PatternModification(
        id=f"m{n}", description=f"change {n}", timestamp=_T0 + timedelta(hours=n)
    )


@pytest.fixture
def pattern() -> Pattern:
    return Pattern(
        id="p1",
        name="Bunny",
        row_checklist={"r1", "r2"},
        row_annotations={
            "r1": RowAnnotation(row_id="r1", created_at=_T0, note="use a marker"),
            "r2": RowAnnotation(row_id="r2", created_at=_T0, is_crossed_out=True),
        },
        modifications=[_modification(1)],
    )


class TestSyncPatternToProject:
    def test_journal_entries(self, pattern):
        sync = sync_pattern_to_project(pattern)
        assert sync.journal_entries == (
            JournalEntry(text="[Pattern Row r1] use a marker", timestamp=_T0),
            JournalEntry(text="[Pattern Change] change 1", timestamp=_T0 + timedelta(hours=1)),
        )

    def test_counter_prefers_row_label(self, pattern):
        sync = sync_pattern_to_project(pattern, counter_labels=["Stitches", "Row count"])
        assert sync.counter_update == CounterUpdate(counter_name="Row count", value=2)

    def test_counter_default_label(self, pattern):
        assert checklist_counter_update(pattern) == CounterUpdate("Rows", 2)

    def test_no_counter_when_nothing_complete(self):
        assert checklist_counter_update(Pattern(id="p2", name="Empty")) is None

    def test_read_only(self, pattern):
        sync_pattern_to_project(pattern)
        assert len(pattern.modifications) == 1
        assert pattern.row_checklist == {"r1", "r2"}


class TestChangeSummary:
    def test_full_summary(self, pattern):
        assert create_change_summary(pattern) == (
            "Pattern: Bunny\n"
            "Total modifications: 1\n"
            "Total annotations: 2\n"
            "\n"
            "Recent Changes:\n"
            "- 2024-03-01T10:00:00+00:00: change 1\n"
            "\n"
            "Annotations:\n"
            "Row r1: use a marker\n"
        )

    def test_lists_only_last_five_changes(self, pattern):
        pattern.modifications = [_modification(n) for n in range(1, 8)]
        summary = create_change_summary(pattern)
        assert "Total modifications: 7" in summary
        assert "change 2\n" not in summary
        for n in range(3, 8):
            assert f"change {n}\n" in summary

    def test_empty_pattern(self):
        summary = create_change_summary(Pattern(id="p2", name="Empty"))
        assert summary == "Pattern: Empty\nTotal modifications: 0\nTotal annotations: 0\n\n"
