"""
Project sync helpers — turn a pattern's annotation state into entries a
project journal or row counter can consume, and summarize changes for export.

All functions are read-only over the Pattern.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from stitchline.store.models import Pattern

# Number of modifications listed under "Recent Changes" in a change summary.
RECENT_CHANGES_LIMIT = 5


@dataclass(frozen=True)
class JournalEntry:
    text: str
    timestamp: datetime


@dataclass(frozen=True)
class CounterUpdate:
    counter_name: str
    value: int


@dataclass(frozen=True)
class ProjectSync:
    journal_entries: tuple[JournalEntry, ...]
    counter_update: Optional[CounterUpdate]


def annotations_to_journal(pattern: Pattern) -> list[JournalEntry]:
    """One journal entry per annotation that carries a note."""
    return [
        JournalEntry(text=f"[Pattern Row {row_id}] {a.note}", timestamp=a.created_at)
        for row_id, a in pattern.row_annotations.items()
        if a.note
    ]


def modifications_to_journal(pattern: Pattern) -> list[JournalEntry]:
    """One journal entry per pending modification."""
    return [
        JournalEntry(text=f"[Pattern Change] {m.description}", timestamp=m.timestamp)
        for m in pattern.modifications
    ]


def checklist_counter_update(
    pattern: Pattern, counter_labels: Iterable[str] = ()
) -> Optional[CounterUpdate]:
    """
    Counter value mirroring the number of completed rows.

    Targets the first label containing "row" (case-insensitive), else "Rows".
    Returns None when no row is complete.
    """
    completed = len(pattern.row_checklist)
    if completed == 0:
        return None
    label = next((lbl for lbl in counter_labels if "row" in lbl.lower()), "Rows")
    return CounterUpdate(counter_name=label, value=completed)


def sync_pattern_to_project(pattern: Pattern, counter_labels: Iterable[str] = ()) -> ProjectSync:
    entries = annotations_to_journal(pattern) + modifications_to_journal(pattern)
    return ProjectSync(
        journal_entries=tuple(entries),
        counter_update=checklist_counter_update(pattern, counter_labels),
    )


def create_change_summary(pattern: Pattern) -> str:
    """Plain-text summary of pending modifications and annotation notes."""
    modifications = pattern.modifications
    annotations = pattern.row_annotations

    lines = [
        f"Pattern: {pattern.name}",
        f"Total modifications: {len(modifications)}",
        f"Total annotations: {len(annotations)}",
        "",
    ]

    if modifications:
        lines.append("Recent Changes:")
        for m in modifications[-RECENT_CHANGES_LIMIT:]:
            lines.append(f"- {m.timestamp.isoformat()}: {m.description}")
        lines.append("")

    noted = [(row_id, a.note) for row_id, a in annotations.items() if a.note]
    if noted:
        lines.append("Annotations:")
        lines.extend(f"Row {row_id}: {note}" for row_id, note in noted)

    return "\n".join(lines) + "\n"
