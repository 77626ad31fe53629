"""User repository operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tadmin import collections
from tadmin.coercion import utcnow
from tadmin.store import documents
from tadmin.users.decoding import decode_user, encode_user
from tadmin.users.schemas import User
from tadmin.users.validation import validate_user

if TYPE_CHECKING:
    from tadmin.store.base import DocumentStore

logger = logging.getLogger(__name__)

KIND = "User"


async def fetch_users(store: DocumentStore) -> list[User]:
    """Fetch every user. Order is unspecified."""
    return await documents.fetch_all(store, collections.USERS, decode_user)


async def fetch_user(store: DocumentStore, user_id: str) -> User | None:
    return await documents.fetch_one(store, collections.USERS, user_id, decode_user)


async def create_user(store: DocumentStore, user: User) -> str:
    """Validate and create a user stamped with ``lastUpdated``. Returns the store-assigned ID."""
    validate_user(user)
    user = user.model_copy(update={"last_updated": utcnow()})
    user_id = await store.add(collections.USERS, encode_user(user))
    logger.info("Created user %s (%s)", user_id, user.display_name)
    return user_id


async def update_user(store: DocumentStore, user: User) -> None:
    """Merge the full user record into its document and stamp ``lastUpdated``.

    Raises:
        MissingIdentifierError: If ``user.id`` is not set.
    """
    user_id = documents.require_id(user.id, KIND)
    stamped = user.model_copy(update={"last_updated": utcnow()})
    await store.set_merge(collections.USERS, user_id, encode_user(stamped))


async def delete_user(store: DocumentStore, user_id: str | None) -> None:
    """Delete the account document only; owned data is left in place."""
    await documents.delete(store, collections.USERS, user_id, KIND)
    logger.info("Deleted user %s", user_id)


async def delete_users(store: DocumentStore, user_ids: list[str | None]) -> list[str]:
    """Delete accounts one at a time. Returns the IDs deleted.

    Every ID is checked before the first delete.

    Raises:
        MissingIdentifierError: If any ID is empty (nothing is deleted).
        PartialCascadeError: If a delete fails; earlier deletes stand.
    """
    ids = [documents.require_id(user_id, KIND) for user_id in user_ids]
    return await documents.for_each(store, ids, delete_user, "user")
