"""
Data models for the annotation & versioning store.

RowAnnotation, PatternModification, VersionSnapshot and PatternVersion are
frozen: once a version is created nothing can change what it recorded.
Pattern is the mutable aggregate that an external persistence layer loads and
saves; the store mutates it in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional


class PatternDifficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class OperationStatus(str, Enum):
    """Explicit outcome of a store mutation that targets an optional entry."""

    APPLIED = "applied"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RowAnnotation:
    """User-authored note, highlight, or cross-out mark on one row."""

    row_id: str
    created_at: datetime
    note: Optional[str] = None
    highlight_color: Optional[str] = None
    is_crossed_out: bool = False
    modified_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "rowId": self.row_id,
            "note": self.note,
            "highlightColor": self.highlight_color,
            "isCrossedOut": self.is_crossed_out,
            "createdAt": self.created_at.isoformat(),
            "modifiedAt": self.modified_at.isoformat() if self.modified_at else None,
        }


@dataclass(frozen=True)
class PatternModification:
    """Append-only change-log entry, consumed by the next version."""

    id: str
    description: str
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class VersionSnapshot:
    """Snippet text and annotation map captured when a version is created."""

    snippet: str
    annotations: MappingProxyType[str, RowAnnotation] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        # Copy so later edits to the caller's dict never reach the snapshot.
        if not isinstance(self.annotations, MappingProxyType):
            object.__setattr__(self, "annotations", MappingProxyType(dict(self.annotations)))


@dataclass(frozen=True)
class PatternVersion:
    """Immutable, numbered snapshot of a pattern."""

    id: str
    version_number: int
    timestamp: datetime
    snapshot: VersionSnapshot
    change_log: tuple[PatternModification, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "versionNumber": self.version_number,
            "timestamp": self.timestamp.isoformat(),
            "snapshot": {
                "snippet": self.snapshot.snippet,
                "annotations": {
                    row_id: a.to_dict() for row_id, a in self.snapshot.annotations.items()
                },
            },
            "changeLog": [m.to_dict() for m in self.change_log],
        }


@dataclass
class Pattern:
    """
    The pattern aggregate.

    Only ``snippet``, ``row_checklist``, ``row_annotations``,
    ``modifications``, ``versions`` and ``current_version_number`` are touched
    by the store; the descriptive fields are carried for export.
    """

    id: str
    name: str
    snippet: str = ""
    designer: str = ""
    description: str = ""
    difficulty: PatternDifficulty = PatternDifficulty.BEGINNER
    reference_url: Optional[str] = None

    row_checklist: set[str] = field(default_factory=set)
    row_annotations: dict[str, RowAnnotation] = field(default_factory=dict)
    modifications: list[PatternModification] = field(default_factory=list)
    versions: list[PatternVersion] = field(default_factory=list)
    current_version_number: int = 0
