"""
Write batching shared by the cascade deleter and the week duplicator.

A logical operation larger than one atomic batch is split into consecutive
groups, each no larger than the batch budget, and committed strictly in
order. Batch k+1 is not staged until batch k has been acknowledged.
"""

import logging
import math
from typing import List, Sequence

from application.exceptions import BatchCommitError, StoreError
from application.ports import HierarchyStore, WriteOperation
from core.constants import DEFAULT_BATCH_BUDGET
from models.cascade import BatchCommitSummary

logger = logging.getLogger(__name__)


def batch_count(operations: int, budget: int) -> int:
    """Number of batches needed for ``operations`` writes: ceil(N / B)."""
    if budget < 1:
        raise ValueError(f"Batch budget must be positive, got {budget}")
    return math.ceil(operations / budget)


def partition_operations(
    operations: Sequence[WriteOperation],
    budget: int,
) -> List[List[WriteOperation]]:
    """
    Split operations into order-preserving groups of at most ``budget``.

    Args:
        operations: Operations in commit order
        budget: Maximum operations per group

    Returns:
        ceil(len(operations) / budget) groups; empty for no operations

    Raises:
        ValueError: If budget is less than 1
    """
    total = batch_count(len(operations), budget)
    return [
        list(operations[index * budget : (index + 1) * budget])
        for index in range(total)
    ]


class BatchWriter:
    """
    Commits a list of write operations as a sequence of atomic batches.

    Usage:
        >>> writer = BatchWriter(store, budget=450)
        >>> summary = await writer.commit(operations)
        >>> print(f"{summary.operations} writes in {summary.batches} batches")
    """

    def __init__(self, store: HierarchyStore, budget: int = DEFAULT_BATCH_BUDGET):
        """
        Args:
            store: Store providing write batches
            budget: Operations per batch; must be below the store's hard limit

        Raises:
            ValueError: If the budget is not in [1, store.max_batch_operations)
        """
        if budget < 1 or budget >= store.max_batch_operations:
            raise ValueError(
                f"Batch budget {budget} must be between 1 and "
                f"{store.max_batch_operations - 1}"
            )
        self._store = store
        self._budget = budget

    @property
    def budget(self) -> int:
        return self._budget

    async def commit(self, operations: Sequence[WriteOperation]) -> BatchCommitSummary:
        """
        Commit operations in order, one batch at a time.

        Args:
            operations: Operations in the order they must land

        Returns:
            BatchCommitSummary with totals

        Raises:
            BatchCommitError: If any batch fails. Earlier batches stay committed.
        """
        groups = partition_operations(operations, self._budget)
        committed = 0

        for index, group in enumerate(groups):
            batch = self._store.new_batch()
            for operation in group:
                batch.stage(operation)

            try:
                await batch.commit()
            except StoreError as e:
                logger.error(
                    f"Batch {index + 1}/{len(groups)} failed after "
                    f"{committed} committed operations: {e}"
                )
                raise BatchCommitError(
                    f"Batch {index + 1} of {len(groups)} failed: {e}",
                    batch_index=index,
                    total_batches=len(groups),
                    committed_operations=committed,
                ) from e

            committed += len(group)
            logger.debug(f"Committed batch {index + 1}/{len(groups)} ({len(group)} ops)")

        return BatchCommitSummary(operations=committed, batches=len(groups))
