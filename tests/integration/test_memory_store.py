"""In-memory store behaviour the rest of the suite relies on."""

from datetime import datetime, timezone

import pytest

from tadmin.errors import StoreOperationError
from tadmin.store.base import DeleteOp, SetOp


class TestInMemoryStore:
    """CRUD, queries, batches and failure injection."""

    async def test_values_are_copied(self, store):
        fields = {"tags": ["a"]}
        doc_id = await store.add("things", fields)
        fields["tags"].append("b")

        doc = await store.get("things", doc_id)
        doc.data["tags"].append("c")

        assert (await store.get("things", doc_id)).data == {"tags": ["a"]}

    async def test_set_merge_keeps_other_fields(self, store):
        store.seed("things", "x", {"a": 1, "b": 2})
        await store.set_merge("things", "x", {"b": 3})
        assert store.documents("things")["x"] == {"a": 1, "b": 3}

    async def test_query_where_and_order(self, store):
        store.seed("things", "x", {"owner": "u1", "n": 2})
        store.seed("things", "y", {"owner": "u1", "n": 5})
        store.seed("things", "z", {"owner": "u2", "n": 9})
        store.seed("things", "w", {"owner": "u1"})

        docs = await store.query("things", where=("owner", "u1"), order_by=("n", True))

        assert [d.id for d in docs] == ["y", "x"]

    async def test_order_by_mixed_types(self, store):
        store.seed("things", "none", {"at": None})
        store.seed("things", "num", {"at": 7})
        store.seed("things", "aware", {"at": datetime(2026, 1, 2, tzinfo=timezone.utc)})
        store.seed("things", "naive", {"at": datetime(2026, 1, 1)})
        store.seed("things", "text", {"at": "2025-12-01T08:00:00Z"})

        ascending = await store.query("things", order_by=("at", False))
        descending = await store.query("things", order_by=("at", True))

        assert [d.id for d in ascending] == ["none", "num", "naive", "aware", "text"]
        assert [d.id for d in descending] == ["text", "aware", "naive", "num", "none"]

    async def test_batch_is_all_or_nothing(self, store):
        store.seed("things", "keep", {"v": 1})
        store.fail("delete", "things", "keep")

        with pytest.raises(StoreOperationError):
            await store.batch([SetOp("things", "new", {"v": 2}), DeleteOp("things", "keep")])

        assert store.documents("things") == {"keep": {"v": 1}}

    async def test_batch_set_without_merge_replaces(self, store):
        store.seed("things", "x", {"a": 1})
        await store.batch([SetOp("things", "x", {"b": 2}, merge=False)])
        assert store.documents("things")["x"] == {"b": 2}

    async def test_failure_rule_expires(self, store):
        store.fail("get", "things", times=1)
        with pytest.raises(StoreOperationError) as exc_info:
            await store.get("things", "x")
        assert exc_info.value.operation == "get"
        assert exc_info.value.path == "things/x"
        assert await store.get("things", "x") is None

    def test_unknown_operation_rejected(self, store):
        with pytest.raises(ValueError, match="Unknown operation"):
            store.fail("upsert", "things")
