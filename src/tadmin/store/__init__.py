"""Document store access."""

from tadmin.store.base import DeleteOp, Document, DocumentStore, SetOp, Subscription
from tadmin.store.client import close_store, get_store, init_store
from tadmin.store.memory import InMemoryStore

__all__ = [
    "DeleteOp",
    "Document",
    "DocumentStore",
    "InMemoryStore",
    "SetOp",
    "Subscription",
    "close_store",
    "get_store",
    "init_store",
]
