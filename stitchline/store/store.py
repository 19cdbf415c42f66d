"""
AnnotationStore — in-memory annotation, modification-log and version state,
keyed by pattern id.

Operations:

  add_row_annotation      insert or overwrite (no merge), fresh created_at
  update_row_annotation   merge into an existing annotation, stamp modified_at
  remove_row_annotation   delete if present
  toggle_row              flip a row in the completion checklist
  track_modification      append to the pending modification log
  create_version          snapshot snippet + annotations, drain the log
  restore_version         overwrite live snippet + annotations from a snapshot
  get_version             pure lookup

Operations on an optional entry (an annotation row, a version number) report
OperationStatus.NOT_FOUND or None instead of raising.  An unknown pattern id
is a caller error and raises PatternNotFoundError.

Concurrency: single writer per pattern, no internal locking.  Every method
is synchronous and completes its read-modify-write before returning, so
create_version cannot interleave with track_modification inside one thread;
hosts that share a store across threads must serialize calls per pattern.
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Optional

from stitchline.exceptions import PatternNotFoundError
from stitchline.store.config import StoreConfig
from stitchline.store.models import (
    OperationStatus,
    Pattern,
    PatternModification,
    PatternVersion,
    RowAnnotation,
    VersionSnapshot,
)

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"note", "highlight_color", "is_crossed_out"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class AnnotationStore:
    """
    Holds Pattern aggregates and applies annotation/version operations to them.

    Parameters
    ----------
    config:
        Retention and restore policy.
    clock:
        Returns the timestamp for new annotations, modifications and versions.
        Injected so tests can pin time.
    id_factory:
        Returns ids for modifications and versions.
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._config = config or StoreConfig()
        self._clock = clock
        self._new_id = id_factory
        self._patterns: dict[str, Pattern] = {}

    @property
    def config(self) -> StoreConfig:
        return self._config

    # ── Pattern lifecycle ──────────────────────────────────────────────────────

    def add_pattern(self, pattern: Pattern) -> None:
        """Load *pattern* into the store, replacing any pattern with the same id."""
        self._patterns[pattern.id] = pattern

    def get_pattern(self, pattern_id: str) -> Pattern:
        try:
            return self._patterns[pattern_id]
        except KeyError:
            raise PatternNotFoundError(pattern_id) from None

    def remove_pattern(self, pattern_id: str) -> OperationStatus:
        if self._patterns.pop(pattern_id, None) is None:
            return OperationStatus.NOT_FOUND
        return OperationStatus.APPLIED

    def patterns(self) -> list[Pattern]:
        return list(self._patterns.values())

    def update_snippet(self, pattern_id: str, snippet: str) -> None:
        """Replace the live snippet text.  Existing annotations are kept as-is."""
        self.get_pattern(pattern_id).snippet = snippet

    # ── Annotations ────────────────────────────────────────────────────────────

    def add_row_annotation(
        self,
        pattern_id: str,
        row_id: str,
        note: Optional[str] = None,
        highlight_color: Optional[str] = None,
        is_crossed_out: bool = False,
    ) -> RowAnnotation:
        """Insert or overwrite the annotation for *row_id*.

        Overwriting discards every field of the previous annotation, including
        its created_at.
        """
        pattern = self.get_pattern(pattern_id)
        annotation = RowAnnotation(
            row_id=row_id,
            created_at=self._clock(),
            note=note,
            highlight_color=highlight_color,
            is_crossed_out=is_crossed_out,
        )
        pattern.row_annotations[row_id] = annotation
        return annotation

    def update_row_annotation(self, pattern_id: str, row_id: str, **changes: Any) -> OperationStatus:
        """
        Merge *changes* into the existing annotation for *row_id*.

        Accepted keys: ``note``, ``highlight_color``, ``is_crossed_out``.

        Returns
        -------
        OperationStatus
            APPLIED on success; NOT_FOUND when the row has no annotation, in
            which case nothing is created.

        Raises
        ------
        TypeError
            If *changes* names a field that cannot be updated.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"Cannot update annotation field(s): {', '.join(sorted(unknown))}")

        pattern = self.get_pattern(pattern_id)
        existing = pattern.row_annotations.get(row_id)
        if existing is None:
            logger.warning(
                "update_row_annotation: pattern %s has no annotation for row %s; nothing updated",
                pattern_id,
                row_id,
            )
            return OperationStatus.NOT_FOUND

        pattern.row_annotations[row_id] = dataclasses.replace(
            existing, **changes, modified_at=self._clock()
        )
        return OperationStatus.APPLIED

    def remove_row_annotation(self, pattern_id: str, row_id: str) -> OperationStatus:
        pattern = self.get_pattern(pattern_id)
        if pattern.row_annotations.pop(row_id, None) is None:
            logger.debug("remove_row_annotation: no annotation for row %s", row_id)
            return OperationStatus.NOT_FOUND
        return OperationStatus.APPLIED

    def get_row_annotation(self, pattern_id: str, row_id: str) -> Optional[RowAnnotation]:
        return self.get_pattern(pattern_id).row_annotations.get(row_id)

    # ── Checklist ──────────────────────────────────────────────────────────────

    def toggle_row(self, pattern_id: str, row_id: str) -> bool:
        """Flip *row_id* in the completion checklist; return the new state."""
        checklist = self.get_pattern(pattern_id).row_checklist
        if row_id in checklist:
            checklist.discard(row_id)
            return False
        checklist.add(row_id)
        return True

    def is_row_complete(self, pattern_id: str, row_id: str) -> bool:
        return row_id in self.get_pattern(pattern_id).row_checklist

    # ── Modification log ───────────────────────────────────────────────────────

    def track_modification(self, pattern_id: str, description: str) -> PatternModification:
        """Append a timestamped entry to the pending modification log."""
        pattern = self.get_pattern(pattern_id)
        modification = PatternModification(
            id=self._new_id(),
            description=description,
            timestamp=self._clock(),
        )
        pattern.modifications.append(modification)

        limit = self._config.max_modifications
        if limit is not None and len(pattern.modifications) > limit:
            dropped = len(pattern.modifications) - limit
            del pattern.modifications[:dropped]
            logger.info(
                "Pattern %s: dropped %d oldest pending modification(s) (limit %d)",
                pattern_id,
                dropped,
                limit,
            )
        return modification

    # ── Versions ───────────────────────────────────────────────────────────────

    def create_version(self, pattern_id: str) -> PatternVersion:
        """
        Snapshot the live snippet and annotations as the next version.

        Reads state, numbers the version, stores it with the pending
        modification log as its change log, then drains the log, all in one
        call.  The snapshot holds copies; later edits to the pattern do not
        reach it.
        """
        pattern = self.get_pattern(pattern_id)
        version = PatternVersion(
            id=self._new_id(),
            version_number=pattern.current_version_number + 1,
            timestamp=self._clock(),
            snapshot=VersionSnapshot(
                snippet=pattern.snippet,
                annotations=dict(pattern.row_annotations),
            ),
            change_log=tuple(pattern.modifications),
        )
        pattern.versions.append(version)
        pattern.current_version_number = version.version_number
        pattern.modifications = []

        limit = self._config.max_versions
        if limit is not None and len(pattern.versions) > limit:
            del pattern.versions[: len(pattern.versions) - limit]

        logger.info(
            "Pattern %s: created version %d (%d change(s))",
            pattern_id,
            version.version_number,
            len(version.change_log),
        )
        return version

    def get_version(self, pattern_id: str, version_number: int) -> Optional[PatternVersion]:
        """Return the stored version with *version_number*, or None."""
        pattern = self.get_pattern(pattern_id)
        return next((v for v in pattern.versions if v.version_number == version_number), None)

    def list_versions(self, pattern_id: str) -> list[PatternVersion]:
        return list(self.get_pattern(pattern_id).versions)

    def restore_version(self, pattern_id: str, version_number: int) -> OperationStatus:
        """
        Overwrite the live snippet and annotation map from a stored version.

        The pending modification log is left as it is.  No version of the
        overwritten state is kept unless ``config.snapshot_before_restore`` is
        set, in which case one is created first (draining the log into it).

        Returns
        -------
        OperationStatus
            APPLIED when the version existed; NOT_FOUND otherwise, with the
            pattern unchanged.
        """
        version = self.get_version(pattern_id, version_number)
        if version is None:
            logger.warning(
                "restore_version: pattern %s has no version %d; nothing restored",
                pattern_id,
                version_number,
            )
            return OperationStatus.NOT_FOUND

        if self._config.snapshot_before_restore:
            self.create_version(pattern_id)

        pattern = self.get_pattern(pattern_id)
        pattern.snippet = version.snapshot.snippet
        pattern.row_annotations = dict(version.snapshot.annotations)
        logger.info("Pattern %s: restored version %d", pattern_id, version_number)
        return OperationStatus.APPLIED
