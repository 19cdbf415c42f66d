from stitchline.store.config import StoreConfig
from stitchline.store.models import (
    OperationStatus,
    Pattern,
    PatternDifficulty,
    PatternModification,
    PatternVersion,
    RowAnnotation,
    VersionSnapshot,
)
from stitchline.store.store import AnnotationStore
from stitchline.store.sync import (
    CounterUpdate,
    JournalEntry,
    ProjectSync,
    create_change_summary,
    sync_pattern_to_project,
)

__all__ = [
    # Store
    "AnnotationStore",
    "StoreConfig",
    "OperationStatus",
    # Models
    "Pattern",
    "PatternDifficulty",
    "RowAnnotation",
    "PatternModification",
    "PatternVersion",
    "VersionSnapshot",
    # Sync
    "JournalEntry",
    "CounterUpdate",
    "ProjectSync",
    "sync_pattern_to_project",
    "create_change_summary",
]
