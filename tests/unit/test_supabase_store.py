"""
Tests for the Supabase hierarchy store adapter.

The Supabase client is replaced by a MagicMock whose query builder methods
return the builder itself, so filters can be inspected after the call.
"""

from unittest.mock import MagicMock

import pytest

from application.exceptions import StoreError
from application.ports import WriteOperation
from infrastructure.db import SupabaseDuplicationLogRepository, SupabaseHierarchyStore
from infrastructure.db.hierarchy_store import APPLY_BATCH_RPC
from models.hierarchy import DocumentRef, EntityKind


def _mock_client(data=None, count=None):
    query = MagicMock()
    for method in ("select", "eq", "order", "limit", "insert"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data, count=count)

    client = MagicMock()
    client.table.return_value = query
    return client, query


def _eq_filters(query):
    return {call.args[0]: call.args[1] for call in query.eq.call_args_list}


@pytest.mark.unit
class TestSupabaseHierarchyStoreReads:
    """Tests for keyed reads and child listings."""

    @pytest.mark.asyncio
    async def test_get_filters_on_full_key(self):
        client, query = _mock_client(data=[{"id": "wo", "user_id": "u"}])
        store = SupabaseHierarchyStore(client)

        document = await store.get(DocumentRef.workout("p", "w", "wo"))

        assert document == {"id": "wo", "user_id": "u"}
        client.table.assert_called_with("program_workouts")
        assert _eq_filters(query) == {"program_id": "p", "week_id": "w", "id": "wo"}
        query.limit.assert_called_with(1)

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self):
        client, _ = _mock_client(data=[])

        assert await SupabaseHierarchyStore(client).get(DocumentRef.week("p", "w")) is None

    @pytest.mark.asyncio
    async def test_list_children_orders_by_kind(self):
        client, query = _mock_client(data=[{"id": "s1"}, {"id": "s2"}])
        exercise = DocumentRef.exercise("p", "w", "wo", "e")

        rows = await SupabaseHierarchyStore(client).list_children(exercise, EntityKind.SET)

        assert [row["id"] for row in rows] == ["s1", "s2"]
        client.table.assert_called_with("exercise_sets")
        query.order.assert_called_with("set_number")
        assert _eq_filters(query) == {
            "program_id": "p",
            "week_id": "w",
            "workout_id": "wo",
            "exercise_id": "e",
        }

    @pytest.mark.asyncio
    async def test_list_child_refs_selects_ids_only(self):
        client, query = _mock_client(data=[{"id": "wo1"}, {"id": "wo2"}])
        week = DocumentRef.week("p", "w")

        refs = await SupabaseHierarchyStore(client).list_child_refs(week, EntityKind.WORKOUT)

        assert refs == [week.child(EntityKind.WORKOUT, "wo1"), week.child(EntityKind.WORKOUT, "wo2")]
        query.select.assert_called_with("id")

    @pytest.mark.asyncio
    async def test_count_children_uses_exact_head_count(self):
        client, query = _mock_client(data=None, count=7)
        exercise = DocumentRef.exercise("p", "w", "wo", "e")

        count = await SupabaseHierarchyStore(client).count_children(exercise, EntityKind.SET)

        assert count == 7
        query.select.assert_called_with("id", count="exact", head=True)

    @pytest.mark.asyncio
    async def test_count_none_is_zero(self):
        client, _ = _mock_client(data=None, count=None)
        week = DocumentRef.week("p", "w")

        assert await SupabaseHierarchyStore(client).count_children(week, EntityKind.WORKOUT) == 0

    @pytest.mark.asyncio
    async def test_rejects_wrong_child_kind(self):
        client, _ = _mock_client()
        week = DocumentRef.week("p", "w")

        with pytest.raises(ValueError):
            await SupabaseHierarchyStore(client).list_children(week, EntityKind.SET)

    @pytest.mark.asyncio
    async def test_client_errors_become_store_errors(self):
        client, query = _mock_client()
        query.execute.side_effect = ConnectionError("connection reset")

        with pytest.raises(StoreError) as exc_info:
            await SupabaseHierarchyStore(client).get(DocumentRef.week("p", "w"))

        assert "connection reset" in str(exc_info.value)


@pytest.mark.unit
class TestSupabaseWriteBatch:
    """Tests for RPC-backed write batches."""

    @pytest.mark.asyncio
    async def test_commit_sends_operations_in_order(self):
        client, _ = _mock_client()
        store = SupabaseHierarchyStore(client)
        week = DocumentRef.week("p", "w")
        workout = week.child(EntityKind.WORKOUT, "wo")

        batch = store.new_batch()
        batch.stage(WriteOperation.create(workout, {"id": "wo", "name": "Push"}))
        batch.stage(WriteOperation.delete(week))
        await batch.commit()

        assert len(batch) == 2
        name, params = client.rpc.call_args.args
        assert name == APPLY_BATCH_RPC
        assert params["p_operations"] == [
            {
                "op": "create",
                "table": "program_workouts",
                "id": "wo",
                "data": {"id": "wo", "name": "Push"},
            },
            {"op": "delete", "table": "program_weeks", "id": "w", "data": None},
        ]

    @pytest.mark.asyncio
    async def test_empty_commit_skips_rpc(self):
        client, _ = _mock_client()

        await SupabaseHierarchyStore(client).new_batch().commit()

        client.rpc.assert_not_called()

    def test_stage_beyond_limit_raises(self):
        client, _ = _mock_client()
        store = SupabaseHierarchyStore(client)
        week = DocumentRef.week("p", "w")
        batch = store.new_batch()
        for _ in range(store.max_batch_operations):
            batch.stage(WriteOperation.delete(week))

        with pytest.raises(StoreError):
            batch.stage(WriteOperation.delete(week))

    @pytest.mark.asyncio
    async def test_rpc_failure_becomes_store_error(self):
        client, _ = _mock_client()
        client.rpc.return_value.execute.side_effect = RuntimeError("quota exceeded")
        batch = SupabaseHierarchyStore(client).new_batch()
        batch.stage(WriteOperation.delete(DocumentRef.week("p", "w")))

        with pytest.raises(StoreError):
            await batch.commit()


@pytest.mark.unit
class TestSupabaseDuplicationLogRepository:
    """Tests for the duplication audit log adapter."""

    @pytest.mark.asyncio
    async def test_inserts_entry(self):
        client, query = _mock_client()

        await SupabaseDuplicationLogRepository(client).record({"type": "duplicate_week"})

        client.table.assert_called_with("duplication_logs")
        query.insert.assert_called_with({"type": "duplicate_week"})

    @pytest.mark.asyncio
    async def test_failure_becomes_store_error(self):
        client, query = _mock_client()
        query.execute.side_effect = RuntimeError("table missing")

        with pytest.raises(StoreError):
            await SupabaseDuplicationLogRepository(client).record({})
