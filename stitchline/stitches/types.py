"""
Core type definitions for the stitch vocabulary.

StitchCategory is the canonical vocabulary; StitchEntry rows are loaded from
the YAML stitch dictionary and are frozen after startup.  StitchMatch and
TextSegment are the runtime objects produced by the detector.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# ── Enums ──────────────────────────────────────────────────────────────────────


class StitchCategory(str, Enum):
    """Broad family a stitch abbreviation belongs to."""

    BASIC = "basic"  # sc, hdc, dc, tr ...
    INCREASE = "increase"  # inc, 2sc ...
    DECREASE = "decrease"  # dec, sc2tog ...
    SPECIAL = "special"  # bobble, puff, popcorn ...
    POST = "post"  # fpdc, bpdc ...
    LOOP = "loop"  # BLO, FLO ...
    OTHER = "other"  # ch, sl st, MR ...


# ── Registry entry type (frozen, loaded from YAML) ────────────────────────────


@dataclass(frozen=True)
class StitchEntry:
    abbreviation: str
    full_name: str
    category: StitchCategory
    color: str
    pattern: re.Pattern[str]


# ── Runtime objects ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class StitchMatch:
    """
    One occurrence of a dictionary stitch inside a line of text.

    start_index/end_index are character offsets into the scanned line;
    end_index is exclusive, so ``line[start_index:end_index]`` is the
    matched token.
    """

    abbreviation: str
    full_name: str
    category: StitchCategory
    start_index: int
    end_index: int

    def overlaps(self, other: StitchMatch) -> bool:
        """True when the two spans share at least one character."""
        return self.start_index < other.end_index and other.start_index < self.end_index


@dataclass(frozen=True)
class TextSegment:
    """A run of highlighted or plain text produced by highlight_segments()."""

    text: str
    is_stitch: bool
    color: Optional[str] = None
