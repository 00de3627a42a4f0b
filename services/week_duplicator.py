"""
Week duplicator.

Deep-copies a week with all of its workouts, exercises and sets into a new
sibling week named by the copy name generator.

Workflow:
1. Ownership check on the source week
2. Name the copy from a snapshot of sibling week names
3. Stage the new week
4. Walk the source subtree depth-first, top-down, staging one creation per node
   with a new identity and ancestor ids pointing at the new ancestors
5. Commit creations in bounded-size batches
6. Record an audit entry (best-effort, non-blocking)

Creations are staged parents-first, so any committed prefix of the batches is
a connected subtree rooted at the new week.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from application.exceptions import (
    BatchCommitError,
    DocumentNotFoundError,
    InvalidScopeError,
    WeekDuplicationError,
)
from application.ports import DuplicationLogRepository, HierarchyStore, WriteOperation
from core.constants import DEFAULT_BATCH_BUDGET
from models.cascade import (
    CascadeDeleteCounts,
    DuplicateWeekResult,
    ExerciseMapping,
    SetMapping,
    WeekDuplicationMapping,
    WorkoutMapping,
)
from models.hierarchy import (
    ANCESTOR_FIELDS,
    IDENTITY_FIELD,
    OWNER_FIELD,
    TIMESTAMP_FIELDS,
    DocumentRef,
    EntityKind,
)
from services.copy_naming import generate_copy_name
from services.ownership_guard import OwnershipGuard
from services.write_batching import BatchWriter

logger = logging.getLogger(__name__)

# Week fields carried over to the copy besides name and keys
COPIED_WEEK_FIELDS = ("order_index", "notes")

DUPLICATION_LOG_TYPE = "duplicate_week"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def copy_document(source: Dict, new_ref: DocumentRef, timestamp: str) -> Dict:
    """
    Copy a document to a new key.

    Every field except identity, timestamps and ancestor ids is copied as-is;
    ancestor ids are rewritten from ``new_ref`` and timestamps are fresh.

    Args:
        source: Source document
        new_ref: Key of the copy
        timestamp: Creation timestamp for the copy

    Returns:
        Data for the new document
    """
    skipped = TIMESTAMP_FIELDS | ANCESTOR_FIELDS | {IDENTITY_FIELD}
    data = {key: value for key, value in source.items() if key not in skipped}
    data.update(new_ref.key_fields())
    data["created_at"] = timestamp
    data["updated_at"] = timestamp
    return data


def copy_set(source: Dict, new_ref: DocumentRef, timestamp: str) -> Dict:
    """Copy a set; completion state is always reset."""
    data = copy_document(source, new_ref, timestamp)
    data["checked"] = False
    data["checked_at"] = None
    return data


class WeekDuplicator:
    """
    Duplicates a week subtree under the same program.

    A failed multi-batch duplication leaves a partial copy behind and is not
    safe to retry by re-invocation (a retry creates another copy with a new
    name). WeekDuplicationError carries the partial copy's key so the caller
    can remove it with a cascade delete.
    """

    def __init__(
        self,
        store: HierarchyStore,
        batch_budget: int = DEFAULT_BATCH_BUDGET,
        duplication_log: Optional[DuplicationLogRepository] = None,
    ):
        self._store = store
        self._guard = OwnershipGuard(store)
        self._writer = BatchWriter(store, batch_budget)
        self._duplication_log = duplication_log

    async def duplicate(self, week_ref: DocumentRef, user_id: str) -> DuplicateWeekResult:
        """
        Duplicate a week and its whole subtree.

        Args:
            week_ref: Key of the source week
            user_id: Authenticated caller

        Returns:
            DuplicateWeekResult with the new week key, name and id mapping

        Raises:
            InvalidScopeError: If week_ref is not a week
            DocumentNotFoundError: If the source week does not exist
            PermissionDeniedError: If the caller does not own the source week
            WeekDuplicationError: If a batch fails to commit
            StoreError: If reading the source subtree fails (nothing is written)
        """
        if week_ref.kind is not EntityKind.WEEK:
            raise InvalidScopeError(f"Only weeks can be duplicated, got {week_ref.kind.value}")

        source_week = await self._guard.verify(week_ref, user_id)
        if source_week is None:
            raise DocumentNotFoundError(str(week_ref))

        program_ref = week_ref.parent
        siblings = await self._store.list_children(program_ref, EntityKind.WEEK)
        name = generate_copy_name(
            source_week.get("name") or "",
            [sibling.get("name") or "" for sibling in siblings],
        )

        timestamp = _now()
        new_week = program_ref.child(EntityKind.WEEK)
        week_data = {
            field: source_week.get(field) for field in COPIED_WEEK_FIELDS
        }
        week_data.update(new_week.key_fields())
        week_data.update(
            {
                "name": name,
                OWNER_FIELD: source_week.get(OWNER_FIELD),
                "created_at": timestamp,
                "updated_at": timestamp,
            }
        )

        operations = [WriteOperation.create(new_week, week_data)]
        mapping = WeekDuplicationMapping(old_week_id=week_ref.id, new_week_id=new_week.id)
        counts = await self._stage_workouts(
            week_ref, new_week, timestamp, operations, mapping
        )

        logger.info(
            f"Duplicating {week_ref} as '{name}' ({new_week.id}): "
            f"{len(operations)} documents"
        )

        try:
            summary = await self._writer.commit(operations)
        except BatchCommitError as e:
            raise WeekDuplicationError(
                f"Duplication of {week_ref} failed: {e}",
                batch_index=e.batch_index,
                total_batches=e.total_batches,
                committed_operations=e.committed_operations,
                new_week=new_week,
            ) from e

        await self._record(week_ref, new_week, user_id)

        return DuplicateWeekResult(
            source_week=week_ref,
            new_week=new_week,
            name=name,
            mapping=mapping,
            created=summary.operations,
            batches=summary.batches,
            counts=counts,
        )

    async def _stage_workouts(
        self,
        source_week: DocumentRef,
        new_week: DocumentRef,
        timestamp: str,
        operations: List[WriteOperation],
        mapping: WeekDuplicationMapping,
    ) -> CascadeDeleteCounts:
        workouts = await self._store.list_children(source_week, EntityKind.WORKOUT)
        exercise_total = 0
        set_total = 0

        for workout in workouts:
            new_workout = new_week.child(EntityKind.WORKOUT)
            operations.append(
                WriteOperation.create(
                    new_workout, copy_document(workout, new_workout, timestamp)
                )
            )
            workout_map = WorkoutMapping(
                old_workout_id=workout[IDENTITY_FIELD],
                new_workout_id=new_workout.id,
            )

            exercises, sets = await self._stage_exercises(
                source_week.child(EntityKind.WORKOUT, workout[IDENTITY_FIELD]),
                new_workout,
                timestamp,
                operations,
                workout_map,
            )
            exercise_total += exercises
            set_total += sets
            mapping.workouts.append(workout_map)

        return CascadeDeleteCounts(
            workouts=len(workouts),
            exercises=exercise_total,
            sets=set_total,
        )

    async def _stage_exercises(
        self,
        source_workout: DocumentRef,
        new_workout: DocumentRef,
        timestamp: str,
        operations: List[WriteOperation],
        workout_map: WorkoutMapping,
    ) -> Tuple[int, int]:
        exercises = await self._store.list_children(source_workout, EntityKind.EXERCISE)
        set_total = 0

        for exercise in exercises:
            new_exercise = new_workout.child(EntityKind.EXERCISE)
            operations.append(
                WriteOperation.create(
                    new_exercise, copy_document(exercise, new_exercise, timestamp)
                )
            )
            exercise_map = ExerciseMapping(
                old_exercise_id=exercise[IDENTITY_FIELD],
                new_exercise_id=new_exercise.id,
            )

            source_exercise = source_workout.child(
                EntityKind.EXERCISE, exercise[IDENTITY_FIELD]
            )
            sets = await self._store.list_children(source_exercise, EntityKind.SET)
            for exercise_set in sets:
                new_set = new_exercise.child(EntityKind.SET)
                operations.append(
                    WriteOperation.create(
                        new_set, copy_set(exercise_set, new_set, timestamp)
                    )
                )
                exercise_map.sets.append(
                    SetMapping(
                        old_set_id=exercise_set[IDENTITY_FIELD],
                        new_set_id=new_set.id,
                    )
                )

            set_total += len(sets)
            workout_map.exercises.append(exercise_map)

        return len(exercises), set_total

    async def _record(self, source: DocumentRef, new_week: DocumentRef, user_id: str) -> None:
        if self._duplication_log is None:
            return
        try:
            await self._duplication_log.record(
                {
                    "type": DUPLICATION_LOG_TYPE,
                    "source_week_id": source.id,
                    "new_week_id": new_week.id,
                    "program_id": source.program_id,
                    OWNER_FIELD: user_id,
                    "created_at": _now(),
                }
            )
        except Exception as e:
            # Non-fatal: the copy is already committed
            logger.warning(f"Duplication log failed for {new_week}: {e}")
