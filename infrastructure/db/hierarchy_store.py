"""
Supabase implementation of HierarchyStore.

Each entity kind lives in its own table (training_programs, program_weeks,
program_workouts, workout_exercises, exercise_sets). Every row stores its
ancestor ids, so a key is resolved with equality filters on the id chain.

The Supabase client is synchronous; calls run in the default executor so the
cascade engine can await them without blocking the event loop.

Write batches are committed through the ``apply_hierarchy_batch`` Postgres
function, which applies every operation of the batch in one transaction.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from supabase import Client

from application.exceptions import StoreError
from application.ports import WriteOperation
from core.constants import STORE_BATCH_HARD_LIMIT
from models.hierarchy import IDENTITY_FIELD, DocumentRef, EntityKind

logger = logging.getLogger(__name__)

APPLY_BATCH_RPC = "apply_hierarchy_batch"


async def _run(description: str, call: Callable[[], Any]) -> Any:
    """Run a blocking client call off the event loop, wrapping failures."""
    try:
        return await asyncio.get_event_loop().run_in_executor(None, call)
    except Exception as e:
        logger.error(f"Supabase {description} failed: {e}")
        raise StoreError(f"{description} failed: {e}") from e


class SupabaseWriteBatch:
    """
    Write batch committed atomically by a single RPC call.
    """

    def __init__(self, client: Client, max_operations: int):
        self._client = client
        self._max_operations = max_operations
        self._operations: List[Dict] = []

    def stage(self, operation: WriteOperation) -> None:
        if len(self._operations) >= self._max_operations:
            raise StoreError(
                f"Write batch is full ({self._max_operations} operations)"
            )
        self._operations.append(
            {
                "op": operation.op.value,
                "table": operation.ref.kind.table,
                "id": operation.ref.id,
                "data": operation.data or None,
            }
        )

    def __len__(self) -> int:
        return len(self._operations)

    async def commit(self) -> None:
        if not self._operations:
            return
        await _run(
            f"commit of {len(self._operations)} operations",
            lambda: self._client.rpc(
                APPLY_BATCH_RPC,
                {"p_operations": self._operations},
            ).execute(),
        )


class SupabaseHierarchyStore:
    """
    Supabase-backed hierarchy store.

    Queries against:
    - training_programs: Program roots
    - program_weeks: Weeks within programs
    - program_workouts: Workouts within weeks
    - workout_exercises: Exercises within workouts
    - exercise_sets: Sets within exercises
    """

    max_batch_operations = STORE_BATCH_HARD_LIMIT

    def __init__(self, client: Client):
        """
        Initialize store with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def _filtered(self, table: str, columns: str, filters: Dict[str, str], **kwargs):
        query = self._client.table(table).select(columns, **kwargs)
        for column, value in filters.items():
            query = query.eq(column, value)
        return query

    async def get(self, ref: DocumentRef) -> Optional[Dict]:
        """
        Get a document by its composite key.

        Args:
            ref: Composite key

        Returns:
            Document dictionary if found, None otherwise
        """
        query = self._filtered(ref.kind.table, "*", ref.key_fields()).limit(1)
        response = await _run(f"get {ref}", query.execute)
        return response.data[0] if response.data else None

    async def list_children(self, parent: DocumentRef, kind: EntityKind) -> List[Dict]:
        """
        List child documents ordered by the kind's order field.

        Args:
            parent: Composite key of the parent
            kind: Child kind

        Returns:
            List of child documents
        """
        query = self._filtered(
            kind.table, "*", self._child_filters(parent, kind)
        ).order(kind.order_field)
        response = await _run(f"list {kind.value}s of {parent}", query.execute)
        return response.data or []

    async def list_child_refs(
        self, parent: DocumentRef, kind: EntityKind
    ) -> List[DocumentRef]:
        """
        List child keys, selecting only the id column.

        Args:
            parent: Composite key of the parent
            kind: Child kind

        Returns:
            List of child keys
        """
        query = self._filtered(
            kind.table, IDENTITY_FIELD, self._child_filters(parent, kind)
        ).order(kind.order_field)
        response = await _run(f"list {kind.value} ids of {parent}", query.execute)
        return [parent.child(kind, row[IDENTITY_FIELD]) for row in response.data or []]

    async def count_children(self, parent: DocumentRef, kind: EntityKind) -> int:
        """
        Count children with an exact server-side count (no rows returned).

        Args:
            parent: Composite key of the parent
            kind: Child kind

        Returns:
            Number of children
        """
        query = self._filtered(
            kind.table,
            IDENTITY_FIELD,
            self._child_filters(parent, kind),
            count="exact",
            head=True,
        )
        response = await _run(f"count {kind.value}s of {parent}", query.execute)
        return response.count or 0

    def new_batch(self) -> SupabaseWriteBatch:
        return SupabaseWriteBatch(self._client, self.max_batch_operations)

    @staticmethod
    def _child_filters(parent: DocumentRef, kind: EntityKind) -> Dict[str, str]:
        if kind is not parent.kind.child_kind:
            raise ValueError(f"A {parent.kind.value} cannot contain a {kind.value}")
        return {**parent.ancestor_fields(), parent.kind.id_field: parent.id}
