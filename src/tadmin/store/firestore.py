"""Firestore-backed document store.

CRUD goes through the async Firestore client. Snapshot listeners are only
offered by the synchronous client, so a sync client shares the same
firebase-admin app for :meth:`FirestoreStore.subscribe`; its callbacks run
on the SDK's watch thread and are handed back to the subscribing event loop.

The server SDK keeps no local cache, so every read is authoritative.
"""

from __future__ import annotations

import asyncio
import contextlib
import threading
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

import firebase_admin
import structlog
from firebase_admin import credentials, firestore, firestore_async
from google.api_core import exceptions as gexc
from google.cloud.firestore_v1 import FieldFilter

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

if TYPE_CHECKING:
    from tadmin.config import Settings

logger = structlog.get_logger()


@contextlib.contextmanager
def _translate_errors(operation: str, path: str) -> Iterator[None]:
    """Re-raise Google API failures as StoreOperationError."""
    try:
        yield
    except gexc.GoogleAPIError as e:
        logger.warning("firestore_call_failed", operation=operation, path=path, error=str(e))
        msg = getattr(e, "message", None) or str(e) or f"Firestore {operation} failed"
        raise StoreOperationError(msg, operation=operation, path=path) from e


class FirestoreSubscription(Subscription):
    """Wraps a Firestore ``Watch`` handle."""

    def __init__(self, watch: Any, collection: str) -> None:
        self._watch = watch
        self.collection = collection
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self._watch is not None

    def cancel(self) -> None:
        with self._lock:
            watch, self._watch = self._watch, None
        if watch is None:
            return
        watch.unsubscribe()
        logger.debug("firestore_unsubscribed", collection=self.collection)


class FirestoreStore(DocumentStore):
    """:class:`DocumentStore` over an initialized firebase-admin app.

    ``close()`` deletes ``app`` only when ``owns_app`` is set, i.e. when the
    app was initialized for this store rather than found already registered.
    """

    def __init__(
        self,
        async_client: Any,
        sync_client: Any,
        app: firebase_admin.App | None = None,
        owns_app: bool = True,
    ) -> None:
        self._db = async_client
        self._sync_db = sync_client
        self._app = app
        self._owns_app = owns_app

    def _doc(self, collection: str, doc_id: str) -> Any:
        return self._db.collection(collection).document(doc_id)

    async def get(self, collection: str, doc_id: str) -> Document | None:
        with _translate_errors("get", f"{collection}/{doc_id}"):
            snap = await self._doc(collection, doc_id).get()
        if not snap.exists:
            return None
        return Document(id=snap.id, data=snap.to_dict() or {})

    async def query(
        self,
        collection: str,
        where: tuple[str, Any] | None = None,
        order_by: tuple[str, bool] | None = None,
    ) -> list[Document]:
        q = self._db.collection(collection)
        if where is not None:
            field, value = where
            q = q.where(filter=FieldFilter(field, "==", value))
        if order_by is not None:
            field, descending = order_by
            q = q.order_by(field, direction="DESCENDING" if descending else "ASCENDING")

        with _translate_errors("query", collection):
            snaps = await q.get()
        return [Document(id=s.id, data=s.to_dict() or {}) for s in snaps]

    async def add(self, collection: str, fields: dict[str, Any]) -> str:
        with _translate_errors("add", collection):
            _update_time, ref = await self._db.collection(collection).add(fields)
        return ref.id

    async def set_merge(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        with _translate_errors("set", f"{collection}/{doc_id}"):
            await self._doc(collection, doc_id).set(fields, merge=True)

    async def delete(self, collection: str, doc_id: str) -> None:
        with _translate_errors("delete", f"{collection}/{doc_id}"):
            await self._doc(collection, doc_id).delete()

    async def batch(self, ops: list[BatchOp]) -> None:
        batch = self._db.batch()
        for op in ops:
            if isinstance(op, SetOp):
                batch.set(self._doc(op.collection, op.doc_id), op.fields, merge=op.merge)
            elif isinstance(op, DeleteOp):
                batch.delete(self._doc(op.collection, op.doc_id))
        with _translate_errors("batch", f"{len(ops)} ops"):
            await batch.commit()

    def subscribe(self, collection: str, callback: SnapshotCallback) -> Subscription:
        try:
            loop: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        def on_snapshot(col_snapshot: list[Any], _changes: Any, _read_time: Any) -> None:
            docs = [Document(id=s.id, data=s.to_dict() or {}) for s in col_snapshot]
            if loop is not None and not loop.is_closed():
                loop.call_soon_threadsafe(callback, docs)
            else:
                callback(docs)

        with _translate_errors("subscribe", collection):
            watch = self._sync_db.collection(collection).on_snapshot(on_snapshot)
        logger.debug("firestore_subscribed", collection=collection)
        return FirestoreSubscription(watch, collection)

    async def close(self) -> None:
        app, self._app = self._app, None
        if app is not None and self._owns_app:
            firebase_admin.delete_app(app)


def create_firestore_store(settings: Settings) -> FirestoreStore:
    """Initialize (or reuse) the firebase-admin app and wrap its clients."""
    owns_app = False
    try:
        app = firebase_admin.get_app(settings.firebase_app_name)
    except ValueError:
        owns_app = True
        cred = (
            credentials.Certificate(settings.firebase_credentials_path)
            if settings.firebase_credentials_path
            else credentials.ApplicationDefault()
        )
        options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
        app = firebase_admin.initialize_app(cred, options, name=settings.firebase_app_name)

    return FirestoreStore(
        async_client=firestore_async.client(app=app),
        sync_client=firestore.client(app=app),
        app=app,
        owns_app=owns_app,
    )
