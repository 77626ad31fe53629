"""In-memory document store.

Implements the full store contract over plain dicts. Used by the test suite
and for local runs (``TADMIN_STORE_BACKEND=memory``). Values are deep-copied
on the way in and out, so callers never share state with the store.

Failures can be injected per operation and path to exercise the partial
failure paths of the maintenance workflows.
"""

from __future__ import annotations

import copy
import uuid
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import structlog

from tadmin.errors import StoreOperationError
from tadmin.store.base import (
    BatchOp,
    DeleteOp,
    Document,
    DocumentStore,
    SetOp,
    SnapshotCallback,
    Subscription,
)

logger = structlog.get_logger()

OPERATIONS = {"get", "query", "add", "set", "delete", "batch"}


def _order_key(value: Any) -> tuple[int, Any]:
    """Sort key ranking values by type first, in Firestore's cross-type order."""
    if value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (1, value)
    if isinstance(value, (int, float, Decimal)):
        return (2, value)
    if isinstance(value, datetime):
        return (3, value if value.tzinfo else value.replace(tzinfo=timezone.utc))
    if isinstance(value, str):
        return (4, value)
    if isinstance(value, bytes):
        return (5, value)
    # Arrays and maps: ordered among themselves by their repr only
    return (6, repr(value))


@dataclass
class _FailureRule:
    operation: str
    collection: str
    doc_id: str | None
    remaining: int | None
    message: str

    def matches(self, operation: str, collection: str, doc_id: str | None) -> bool:
        if self.remaining is not None and self.remaining <= 0:
            return False
        if self.operation != operation or self.collection != collection:
            return False
        return self.doc_id is None or self.doc_id == doc_id


class MemorySubscription(Subscription):
    """Listener handle returned by :meth:`InMemoryStore.subscribe`."""

    def __init__(self, store: InMemoryStore, collection: str, callback: SnapshotCallback) -> None:
        self._store = store
        self.collection = collection
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._store._unsubscribe(self)


class InMemoryStore(DocumentStore):
    """Dict-backed implementation of :class:`DocumentStore`."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)
        self._listeners: dict[str, set[MemorySubscription]] = defaultdict(set)
        self._failures: list[_FailureRule] = []
        self.calls: list[tuple[str, str, str | None]] = []

    # --- Test helpers ---

    def fail(
        self,
        operation: str,
        collection: str,
        doc_id: str | None = None,
        *,
        times: int | None = None,
        message: str = "Simulated store failure",
    ) -> None:
        """Make ``operation`` on ``collection`` (and optionally ``doc_id``) fail.

        ``times=None`` fails forever; otherwise the rule expires after that
        many failures. For batches, ``set``/``delete`` rules are checked
        against every op before anything is applied.
        """
        if operation not in OPERATIONS:
            msg = f"Unknown operation: {operation}"
            raise ValueError(msg)
        self._failures.append(_FailureRule(operation, collection, doc_id, times, message))

    def clear_failures(self) -> None:
        self._failures.clear()

    def documents(self, collection: str) -> dict[str, dict[str, Any]]:
        """Deep copy of every document in ``collection`` keyed by ID."""
        return copy.deepcopy(dict(self._collections.get(collection, {})))

    def seed(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        """Write a document directly, bypassing failure rules and the call log."""
        self._collections[collection][doc_id] = copy.deepcopy(fields)
        self._notify(collection)

    # --- Internals ---

    def _check(self, operation: str, collection: str, doc_id: str | None = None) -> None:
        for rule in self._failures:
            if rule.matches(operation, collection, doc_id):
                if rule.remaining is not None:
                    rule.remaining -= 1
                path = f"{collection}/{doc_id}" if doc_id else collection
                raise StoreOperationError(rule.message, operation=operation, path=path)

    def _snapshot(self, collection: str) -> list[Document]:
        docs = self._collections.get(collection, {})
        return [Document(id=doc_id, data=copy.deepcopy(data)) for doc_id, data in docs.items()]

    def _notify(self, collection: str) -> None:
        listeners = list(self._listeners.get(collection, ()))
        if not listeners:
            return
        for sub in listeners:
            if sub.active:
                sub.callback(self._snapshot(collection))

    # --- DocumentStore ---

    async def get(self, collection: str, doc_id: str) -> Document | None:
        self.calls.append(("get", collection, doc_id))
        self._check("get", collection, doc_id)
        data = self._collections.get(collection, {}).get(doc_id)
        if data is None:
            return None
        return Document(id=doc_id, data=copy.deepcopy(data))

    async def query(
        self,
        collection: str,
        where: tuple[str, Any] | None = None,
        order_by: tuple[str, bool] | None = None,
    ) -> list[Document]:
        self.calls.append(("query", collection, None))
        self._check("query", collection)
        docs = self._snapshot(collection)
        if where is not None:
            field, value = where
            docs = [d for d in docs if field in d.data and d.data[field] == value]
        if order_by is not None:
            field, descending = order_by
            # Documents lacking the ordering field are excluded, as Firestore does
            docs = [d for d in docs if field in d.data]
            docs.sort(key=lambda d: _order_key(d.data[field]), reverse=descending)
        return docs

    async def add(self, collection: str, fields: dict[str, Any]) -> str:
        self.calls.append(("add", collection, None))
        self._check("add", collection)
        doc_id = uuid.uuid4().hex[:20]
        self._collections[collection][doc_id] = copy.deepcopy(fields)
        self._notify(collection)
        return doc_id

    async def set_merge(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        self.calls.append(("set", collection, doc_id))
        self._check("set", collection, doc_id)
        self._apply_set(SetOp(collection, doc_id, fields, merge=True))
        self._notify(collection)

    async def delete(self, collection: str, doc_id: str) -> None:
        self.calls.append(("delete", collection, doc_id))
        self._check("delete", collection, doc_id)
        if self._collections.get(collection, {}).pop(doc_id, None) is not None:
            self._notify(collection)

    async def batch(self, ops: list[BatchOp]) -> None:
        self.calls.append(("batch", "", None))
        self._check("batch", "")
        # Validate every op before applying any of them
        for op in ops:
            kind = "set" if isinstance(op, SetOp) else "delete"
            self._check(kind, op.collection, op.doc_id)

        touched: set[str] = set()
        for op in ops:
            if isinstance(op, SetOp):
                self._apply_set(op)
            elif isinstance(op, DeleteOp):
                self._collections.get(op.collection, {}).pop(op.doc_id, None)
            touched.add(op.collection)
        for collection in touched:
            self._notify(collection)

    def subscribe(self, collection: str, callback: SnapshotCallback) -> Subscription:
        sub = MemorySubscription(self, collection, callback)
        self._listeners[collection].add(sub)
        logger.debug("memory_store_subscribed", collection=collection)
        # Listeners receive the current state immediately
        callback(self._snapshot(collection))
        return sub

    def _apply_set(self, op: SetOp) -> None:
        fields = copy.deepcopy(op.fields)
        existing = self._collections[op.collection].get(op.doc_id)
        if op.merge and existing is not None:
            existing.update(fields)
        else:
            self._collections[op.collection][op.doc_id] = fields

    def _unsubscribe(self, sub: MemorySubscription) -> None:
        self._listeners[sub.collection].discard(sub)
