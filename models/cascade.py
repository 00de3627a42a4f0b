"""
Models for cascade delete previews, cascade deletes and week duplication.

CascadeDeleteCounts and the duplication mapping are returned to API callers;
the result dataclasses are what the services hand back in-process.
"""

from dataclasses import dataclass
from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field

from models.hierarchy import DocumentRef


class CascadeDeleteCounts(BaseModel):
    """Child entities removed by a cascade delete."""

    model_config = ConfigDict(frozen=True)

    workouts: int = Field(default=0, ge=0)
    exercises: int = Field(default=0, ge=0)
    sets: int = Field(default=0, ge=0)

    @computed_field
    @property
    def total_items(self) -> int:
        return self.workouts + self.exercises + self.sets

    @property
    def has_items(self) -> bool:
        return self.total_items > 0

    def summary(self) -> str:
        """
        Human-readable summary for confirmation prompts.

        Example: "3 workouts, 9 exercises, 27 sets"
        """
        parts = []
        for count, noun in (
            (self.workouts, "workout"),
            (self.exercises, "exercise"),
            (self.sets, "set"),
        ):
            if count > 0:
                parts.append(f"{count} {noun}{'s' if count > 1 else ''}")
        return ", ".join(parts)


class CascadeDeletePreview(BaseModel):
    """Response body for delete-preview endpoints."""

    counts: CascadeDeleteCounts
    summary: str


class CascadeDeleteResponse(BaseModel):
    """Response body for cascade delete endpoints."""

    deleted: int
    batches: int
    already_deleted: bool = False
    counts: CascadeDeleteCounts


# =============================================================================
# Duplication mapping
# =============================================================================


class SetMapping(BaseModel):
    old_set_id: str
    new_set_id: str


class ExerciseMapping(BaseModel):
    old_exercise_id: str
    new_exercise_id: str
    sets: List[SetMapping] = Field(default_factory=list)


class WorkoutMapping(BaseModel):
    old_workout_id: str
    new_workout_id: str
    exercises: List[ExerciseMapping] = Field(default_factory=list)


class WeekDuplicationMapping(BaseModel):
    """Old -> new identity pairs for every node of a duplicated week."""

    old_week_id: str
    new_week_id: str
    workouts: List[WorkoutMapping] = Field(default_factory=list)


class DuplicateWeekResponse(BaseModel):
    """Response body for the duplicate-week endpoint."""

    program_id: str
    new_week_id: str
    name: str
    created: int
    batches: int
    mapping: WeekDuplicationMapping


# =============================================================================
# Service results
# =============================================================================


@dataclass
class BatchCommitSummary:
    """Outcome of committing a sequence of write batches."""

    operations: int = 0
    batches: int = 0


@dataclass
class CascadeDeleteResult:
    """Result of CascadeDeleter.delete."""

    scope: DocumentRef
    deleted: int
    batches: int
    counts: CascadeDeleteCounts
    already_deleted: bool = False

    def to_response(self) -> CascadeDeleteResponse:
        return CascadeDeleteResponse(
            deleted=self.deleted,
            batches=self.batches,
            already_deleted=self.already_deleted,
            counts=self.counts,
        )


@dataclass
class DuplicateWeekResult:
    """Result of WeekDuplicator.duplicate."""

    source_week: DocumentRef
    new_week: DocumentRef
    name: str
    mapping: WeekDuplicationMapping
    created: int
    batches: int
    counts: CascadeDeleteCounts

    def to_response(self) -> DuplicateWeekResponse:
        return DuplicateWeekResponse(
            program_id=self.new_week.program_id,
            new_week_id=self.new_week.id,
            name=self.name,
            created=self.created,
            batches=self.batches,
            mapping=self.mapping,
        )
