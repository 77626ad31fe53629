"""Document store contract.

The admin core only ever talks to the store through this interface, so the
Firestore adapter and the in-memory store are interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Document:
    """A document as returned by the store: its ID and raw field map."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SetOp:
    """Batch write of ``fields`` into ``collection/doc_id`` (merge by default)."""

    collection: str
    doc_id: str
    fields: dict[str, Any]
    merge: bool = True


@dataclass(frozen=True)
class DeleteOp:
    """Batch delete of ``collection/doc_id``."""

    collection: str
    doc_id: str


BatchOp = SetOp | DeleteOp
SnapshotCallback = Callable[[list[Document]], None]


class Subscription(ABC):
    """Handle for a standing collection listener.

    ``cancel()`` is idempotent: cancelling twice, or cancelling a handle whose
    listener never started, is a no-op.
    """

    @property
    @abstractmethod
    def active(self) -> bool:
        ...

    @abstractmethod
    def cancel(self) -> None:
        ...


class DocumentStore(ABC):
    """Abstract document store: collections of ID-addressed field maps.

    Subcollections are addressed by slash paths
    (``"activities/<id>/routePoints"``).
    """

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Document | None:
        """Fetch one document, or None when it does not exist."""

    @abstractmethod
    async def query(
        self,
        collection: str,
        where: tuple[str, Any] | None = None,
        order_by: tuple[str, bool] | None = None,
    ) -> list[Document]:
        """List documents, optionally filtered by field equality.

        ``order_by`` is ``(field, descending)``.
        """

    @abstractmethod
    async def add(self, collection: str, fields: dict[str, Any]) -> str:
        """Create a document with a store-assigned ID and return the ID."""

    @abstractmethod
    async def set_merge(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        """Write ``fields`` into the document, preserving fields not listed."""

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Succeeds when the document does not exist."""

    @abstractmethod
    async def batch(self, ops: list[BatchOp]) -> None:
        """Apply all ``ops`` atomically: either every op lands or none does."""

    @abstractmethod
    def subscribe(self, collection: str, callback: SnapshotCallback) -> Subscription:
        """Listen to a collection; ``callback`` receives every full snapshot."""

    async def close(self) -> None:  # noqa: B027
        """Release client resources."""
