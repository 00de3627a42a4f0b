"""
Entry point of the cascade engine for application collaborators.

Wires the descendant counter, cascade deleter and week duplicator to one
store and one batch budget.
"""

from typing import Iterable, Optional

from application.ports import DuplicationLogRepository, HierarchyStore
from core.constants import DEFAULT_BATCH_BUDGET
from models.cascade import CascadeDeleteCounts, CascadeDeleteResult, DuplicateWeekResult
from models.hierarchy import DocumentRef
from services.cascade_deleter import CascadeDeleter
from services.copy_naming import generate_copy_name
from services.descendant_counter import DescendantCounter
from services.week_duplicator import WeekDuplicator


class HierarchyCascadeService:
    """
    Counts, cascade deletes and duplicates subtrees of the program hierarchy.

    Usage:
        >>> service = HierarchyCascadeService(store)
        >>> scope = DocumentRef.week("program-1", "week-1")
        >>> counts = await service.get_cascade_delete_counts(scope, user_id)
        >>> print(f"This will delete {counts.summary()}")
        >>> await service.delete_cascade(scope, user_id)
    """

    def __init__(
        self,
        store: HierarchyStore,
        batch_budget: int = DEFAULT_BATCH_BUDGET,
        duplication_log: Optional[DuplicationLogRepository] = None,
    ):
        self._counter = DescendantCounter(store)
        self._deleter = CascadeDeleter(store, batch_budget)
        self._duplicator = WeekDuplicator(store, batch_budget, duplication_log)

    async def get_cascade_delete_counts(
        self, scope: DocumentRef, user_id: str
    ) -> CascadeDeleteCounts:
        """Preview what deleting ``scope`` removes. Zero-filled on error."""
        return await self._counter.count(scope, user_id)

    async def delete_cascade(self, scope: DocumentRef, user_id: str) -> CascadeDeleteResult:
        """Delete ``scope`` and its descendants. Safe to re-run after a failure."""
        return await self._deleter.delete(scope, user_id)

    async def duplicate_week(self, week_ref: DocumentRef, user_id: str) -> DuplicateWeekResult:
        """Deep-copy a week. Not safe to re-run blindly after a failure."""
        return await self._duplicator.duplicate(week_ref, user_id)

    @staticmethod
    def generate_copy_name(source_name: str, sibling_names: Iterable[str]) -> str:
        return generate_copy_name(source_name, sibling_names)
