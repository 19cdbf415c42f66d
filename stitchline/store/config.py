"""
Policy configuration for the AnnotationStore.

Defaults keep every version and modification and never snapshot on restore.
Retention limits and pre-restore snapshots are opt-in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StoreConfig:
    """
    Attributes:
        max_versions: Keep at most this many versions per pattern, dropping the
            oldest.  None keeps every version.  Version numbers never reuse.
        max_modifications: Keep at most this many pending modifications,
            dropping the oldest.  None keeps every entry.
        snapshot_before_restore: When True, restore_version() first creates a
            version of the state it is about to overwrite.
    """

    max_versions: Optional[int] = None
    max_modifications: Optional[int] = None
    snapshot_before_restore: bool = False

    def __post_init__(self) -> None:
        if self.max_versions is not None and self.max_versions < 1:
            raise ValueError(f"max_versions must be >= 1 or None, got {self.max_versions}")
        if self.max_modifications is not None and self.max_modifications < 1:
            raise ValueError(
                f"max_modifications must be >= 1 or None, got {self.max_modifications}"
            )
