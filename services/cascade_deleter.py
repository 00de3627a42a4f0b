"""
Cascade deleter.

Deletes a week, workout or exercise together with every descendant.

Deletion order is bottom-up: all Sets, then all Exercises, then all Workouts,
and the scope root last. A multi-batch cascade is not globally atomic, but if
batch k fails the store still holds a consistent, smaller subtree rooted at
the original scope (no child ever survives its parent). Re-running delete on
the same scope finishes the job; deleting a missing document is a no-op.
"""

import logging
from typing import List

from application.ports import HierarchyStore, WriteOperation
from core.constants import DEFAULT_BATCH_BUDGET
from models.cascade import CascadeDeleteCounts, CascadeDeleteResult
from models.hierarchy import DocumentRef, EntityKind
from services.descendant_counter import require_delete_scope
from services.ownership_guard import OwnershipGuard
from services.write_batching import BatchWriter

logger = logging.getLogger(__name__)


class CascadeDeleter:
    """
    Physically removes a subtree in bounded-size atomic batches.

    Usage:
        >>> deleter = CascadeDeleter(store)
        >>> result = await deleter.delete(DocumentRef.week("p1", "w1"), "user-1")
        >>> result.deleted
        33
    """

    def __init__(self, store: HierarchyStore, batch_budget: int = DEFAULT_BATCH_BUDGET):
        self._store = store
        self._guard = OwnershipGuard(store)
        self._writer = BatchWriter(store, batch_budget)

    async def delete(self, scope: DocumentRef, user_id: str) -> CascadeDeleteResult:
        """
        Delete ``scope`` and all of its descendants.

        Args:
            scope: Week, workout or exercise to delete
            user_id: Authenticated caller

        Returns:
            CascadeDeleteResult. If the scope no longer exists the result has
            ``already_deleted`` set and nothing is written.

        Raises:
            InvalidScopeError: If scope is not a week, workout or exercise
            PermissionDeniedError: If the caller does not own the scope
            BatchCommitError: If a batch fails; earlier batches stay committed
            StoreError: If enumerating descendants fails (nothing is written)
        """
        require_delete_scope(scope)

        root = await self._guard.verify(scope, user_id)
        if root is None:
            logger.info(f"Cascade delete of {scope}: already deleted")
            return CascadeDeleteResult(
                scope=scope,
                deleted=0,
                batches=0,
                counts=CascadeDeleteCounts(),
                already_deleted=True,
            )

        workouts, exercises, sets = await self._enumerate(scope)
        counts = CascadeDeleteCounts(
            workouts=len(workouts),
            exercises=len(exercises),
            sets=len(sets),
        )
        logger.info(f"Cascade delete of {scope}: {counts.summary() or 'no children'}")

        ordered = sets + exercises + workouts + [scope]
        summary = await self._writer.commit(
            [WriteOperation.delete(ref) for ref in ordered]
        )

        logger.info(
            f"Cascade delete of {scope} complete: "
            f"{summary.operations} documents in {summary.batches} batches"
        )
        return CascadeDeleteResult(
            scope=scope,
            deleted=summary.operations,
            batches=summary.batches,
            counts=counts,
        )

    async def _enumerate(self, scope: DocumentRef):
        """
        Collect descendant keys grouped by kind.

        Returns:
            (workouts, exercises, sets) key lists
        """
        workouts: List[DocumentRef] = []
        exercises: List[DocumentRef] = []
        sets: List[DocumentRef] = []

        if scope.kind is EntityKind.WEEK:
            workouts = await self._store.list_child_refs(scope, EntityKind.WORKOUT)
        elif scope.kind is EntityKind.WORKOUT:
            exercises = await self._store.list_child_refs(scope, EntityKind.EXERCISE)

        for workout in workouts:
            exercises.extend(
                await self._store.list_child_refs(workout, EntityKind.EXERCISE)
            )

        if scope.kind is EntityKind.EXERCISE:
            sets = await self._store.list_child_refs(scope, EntityKind.SET)
        else:
            for exercise in exercises:
                sets.extend(await self._store.list_child_refs(exercise, EntityKind.SET))

        return workouts, exercises, sets
