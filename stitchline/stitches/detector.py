"""
Stitch detection over a single line of pattern text.

Three pure functions, all driven by the registry's stitch dictionary:

  detect_stitches    → every dictionary match, sorted by start offset
  resolve_overlaps   → first-kept-wins filter over sorted matches
  highlight_segments → plain/stitch text runs for the presentation layer

detect_stitches deliberately keeps cross-entry overlaps ("inv dec" also
matches the standalone "dec" entry).  Callers that need a clean partition of
the line run resolve_overlaps on the result.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from .registry import StitchRegistry, get_registry
from .types import StitchMatch, TextSegment


def detect_stitches(line: str, registry: Optional[StitchRegistry] = None) -> list[StitchMatch]:
    """
    Return all dictionary stitch occurrences in *line*.

    Each entry's regex is scanned over the whole line independently, so an
    entry never overlaps itself.  The union is sorted by start offset; the
    sort is stable over a declaration-ordered collection, so matches starting
    at the same offset keep dictionary order.
    """
    reg = registry or get_registry()
    matches: list[StitchMatch] = []

    for entry in reg.entries:
        for m in entry.pattern.finditer(line):
            matches.append(
                StitchMatch(
                    abbreviation=entry.abbreviation,
                    full_name=entry.full_name,
                    category=entry.category,
                    start_index=m.start(),
                    end_index=m.end(),
                )
            )

    return sorted(matches, key=lambda match: match.start_index)


def resolve_overlaps(matches: Iterable[StitchMatch]) -> list[StitchMatch]:
    """
    Drop matches whose span intersects an already-kept match.

    *matches* must already be in detector order (start offset, then
    dictionary order).  The first match kept at any position dominates
    everything that starts before its span ends.
    """
    kept: list[StitchMatch] = []
    for match in matches:
        if not any(match.overlaps(existing) for existing in kept):
            kept.append(match)
    return kept


def highlight_segments(
    text: str,
    highlight_color: Optional[str] = None,
    registry: Optional[StitchRegistry] = None,
) -> list[TextSegment]:
    """
    Split *text* into alternating plain and stitch segments.

    Stitch segments carry their dictionary colour, or *highlight_color* when
    the caller overrides it.  Concatenating every segment's text reproduces
    *text* exactly.
    """
    reg = registry or get_registry()
    resolved = resolve_overlaps(detect_stitches(text, reg))
    if not resolved:
        return [TextSegment(text=text, is_stitch=False)] if text else []

    segments: list[TextSegment] = []
    last_index = 0
    for match in resolved:
        if match.start_index > last_index:
            segments.append(TextSegment(text=text[last_index : match.start_index], is_stitch=False))
        entry = reg.get_stitch_info(match.abbreviation)
        color = highlight_color or (entry.color if entry else reg.color_for_category(match.category))
        segments.append(
            TextSegment(
                text=text[match.start_index : match.end_index],
                is_stitch=True,
                color=color,
            )
        )
        last_index = match.end_index

    if last_index < len(text):
        segments.append(TextSegment(text=text[last_index:], is_stitch=False))
    return segments
