"""
Models for the hierarchy cascade API.

- hierarchy: entity kinds and the DocumentRef composite key
- cascade: delete counts, duplication mapping, service results
"""

from models.cascade import (
    BatchCommitSummary,
    CascadeDeleteCounts,
    CascadeDeletePreview,
    CascadeDeleteResponse,
    CascadeDeleteResult,
    DuplicateWeekResponse,
    DuplicateWeekResult,
    ExerciseMapping,
    SetMapping,
    WeekDuplicationMapping,
    WorkoutMapping,
)
from models.hierarchy import DELETE_SCOPE_KINDS, DocumentRef, EntityKind

__all__ = [
    # Hierarchy
    "DELETE_SCOPE_KINDS",
    "DocumentRef",
    "EntityKind",
    # Cascade
    "BatchCommitSummary",
    "CascadeDeleteCounts",
    "CascadeDeletePreview",
    "CascadeDeleteResponse",
    "CascadeDeleteResult",
    "DuplicateWeekResponse",
    "DuplicateWeekResult",
    "ExerciseMapping",
    "SetMapping",
    "WeekDuplicationMapping",
    "WorkoutMapping",
]
