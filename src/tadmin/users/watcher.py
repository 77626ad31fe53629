"""Live subscription to the ``users`` collection.

This is the only long-lived listener in the admin core. Each snapshot
replaces the whole user list; nothing is patched incrementally. The owner of
a :class:`UserWatcher` must call :meth:`UserWatcher.stop` on teardown.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from tadmin import collections
from tadmin.users.decoding import decode_user
from tadmin.users.schemas import User

if TYPE_CHECKING:
    from tadmin.store.base import Document, DocumentStore, Subscription

logger = structlog.get_logger()

UsersCallback = Callable[[list[User]], None]


def watch_users(store: DocumentStore, on_change: UsersCallback) -> Subscription:
    """Subscribe to ``users``; ``on_change`` receives every decoded full list."""

    def handle(docs: list[Document]) -> None:
        on_change([decode_user(doc.id, doc.data) for doc in docs])

    return store.subscribe(collections.USERS, handle)


class UserWatcher:
    """Owns one user subscription and the latest snapshot it delivered."""

    def __init__(self, store: DocumentStore, on_change: UsersCallback | None = None) -> None:
        self._store = store
        self._on_change = on_change
        self._subscription: Subscription | None = None
        self._generation = 0
        self._snapshot_ready = asyncio.Event()
        self.users: list[User] = []
        self.snapshot_count = 0

    @property
    def running(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def start(self) -> None:
        """Subscribe. A no-op when already running."""
        if self.running:
            return
        self._generation += 1
        generation = self._generation
        self._snapshot_ready.clear()

        def deliver(users: list[User]) -> None:
            # Drop deliveries from a listener that has since been replaced
            if generation != self._generation:
                return
            self.users = users
            self.snapshot_count += 1
            self._snapshot_ready.set()
            if self._on_change is not None:
                self._on_change(users)

        self._subscription = watch_users(self._store, deliver)
        logger.debug("user_watch_started", generation=generation)

    def stop(self) -> None:
        """Cancel the subscription. Safe to call repeatedly or before start()."""
        subscription, self._subscription = self._subscription, None
        if subscription is None:
            return
        self._generation += 1
        subscription.cancel()
        logger.debug("user_watch_stopped")

    def reload(self) -> None:
        """Force fresh data: cancel the current listener and subscribe again."""
        self.stop()
        self.start()

    async def wait_for_snapshot(self) -> list[User]:
        """Wait until the current subscription has delivered at least once."""
        await self._snapshot_ready.wait()
        return self.users

    def __enter__(self) -> UserWatcher:
        self.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()
