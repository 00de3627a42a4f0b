"""
Descendant counter for cascade delete previews.

Counts are advisory: they populate a confirmation prompt and must never block
the delete that follows. Any failure yields zero counts instead of an error.
A count may also be stale by the time the delete runs; no isolation is
provided between the preview and the delete.
"""

import asyncio
import logging
from typing import List

from application.exceptions import InvalidScopeError
from application.ports import HierarchyStore
from models.cascade import CascadeDeleteCounts
from models.hierarchy import DELETE_SCOPE_KINDS, DocumentRef, EntityKind
from services.ownership_guard import OwnershipGuard

logger = logging.getLogger(__name__)


def require_delete_scope(scope: DocumentRef) -> None:
    """Raise InvalidScopeError unless scope is a week, workout or exercise."""
    if scope.kind not in DELETE_SCOPE_KINDS:
        raise InvalidScopeError(
            f"Cascade scope must be a week, workout or exercise, got {scope.kind.value}"
        )


class DescendantCounter:
    """
    Read-only walk of a subtree producing counts per child kind.

    Leaf levels use server-side count aggregation; intermediate levels fetch
    ids only. Sibling branches are queried concurrently.
    """

    def __init__(self, store: HierarchyStore):
        self._store = store
        self._guard = OwnershipGuard(store)

    async def count(self, scope: DocumentRef, user_id: str) -> CascadeDeleteCounts:
        """
        Count the descendants a cascade delete of ``scope`` would remove.

        Args:
            scope: Week, workout or exercise to be deleted
            user_id: Authenticated caller

        Returns:
            CascadeDeleteCounts; zero-valued if anything goes wrong

        Raises:
            InvalidScopeError: If scope is not a week, workout or exercise
        """
        require_delete_scope(scope)

        try:
            root = await self._guard.verify(scope, user_id)
            if root is None:
                logger.info(f"Count requested for missing {scope}")
                return CascadeDeleteCounts()
            return await self._count_subtree(scope)
        except Exception as e:
            logger.warning(f"Cascade count unavailable for {scope}: {e}")
            return CascadeDeleteCounts()

    async def _count_subtree(self, scope: DocumentRef) -> CascadeDeleteCounts:
        if scope.kind is EntityKind.EXERCISE:
            sets = await self._store.count_children(scope, EntityKind.SET)
            return CascadeDeleteCounts(sets=sets)

        if scope.kind is EntityKind.WORKOUT:
            exercises = await self._store.list_child_refs(scope, EntityKind.EXERCISE)
            sets = await self._count_sets(exercises)
            return CascadeDeleteCounts(exercises=len(exercises), sets=sets)

        workouts = await self._store.list_child_refs(scope, EntityKind.WORKOUT)
        exercise_lists = await asyncio.gather(
            *(
                self._store.list_child_refs(workout, EntityKind.EXERCISE)
                for workout in workouts
            )
        )
        exercises = [exercise for group in exercise_lists for exercise in group]
        sets = await self._count_sets(exercises)
        return CascadeDeleteCounts(
            workouts=len(workouts),
            exercises=len(exercises),
            sets=sets,
        )

    async def _count_sets(self, exercises: List[DocumentRef]) -> int:
        counts = await asyncio.gather(
            *(
                self._store.count_children(exercise, EntityKind.SET)
                for exercise in exercises
            )
        )
        return sum(counts)
