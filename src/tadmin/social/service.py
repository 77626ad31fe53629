"""Follow edges.

Each edge is stored twice: ``users/{a}/following/{b}`` and
``users/{b}/followers/{a}``. Every write here touches both sides in one
atomic batch, so a failure leaves neither side written.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import structlog

from tadmin import collections
from tadmin.coercion import utcnow
from tadmin.errors import FollowEdgeError, StoreOperationError
from tadmin.social.decoding import decode_follow, encode_follow
from tadmin.social.schemas import EdgeState, FollowRelationship
from tadmin.store.base import BatchOp, DeleteOp, SetOp
from tadmin.store.documents import require_id

if TYPE_CHECKING:
    from tadmin.store.base import DocumentStore
    from tadmin.users.schemas import User

logger = structlog.get_logger()


async def fetch_followers(store: DocumentStore, user_id: str) -> list[FollowRelationship]:
    docs = await store.query(collections.followers_of(user_id))
    return [decode_follow(doc.id, doc.data) for doc in docs]


async def fetch_following(store: DocumentStore, user_id: str) -> list[FollowRelationship]:
    docs = await store.query(collections.following_of(user_id))
    return [decode_follow(doc.id, doc.data) for doc in docs]


def _snapshot_of(user: User, followed_at: datetime) -> dict:
    return encode_follow(FollowRelationship(
        display_name=user.display_name,
        avatar_url=user.avatar_url,
        followed_at=followed_at,
    ))


async def _commit_edge(store: DocumentStore, action: str, ops: list[BatchOp], follower_id: str, followee_id: str) -> None:
    try:
        await store.batch(ops)
    except StoreOperationError as e:
        logger.warning("follow_edge_failed", action=action, follower=follower_id, followee=followee_id, error=str(e))
        raise FollowEdgeError(str(e), operation="batch", path=collections.following_of(follower_id)) from e
    logger.info("follow_edge_updated", action=action, follower=follower_id, followee=followee_id)


async def follow(store: DocumentStore, user: User, target: User, now: datetime | None = None) -> None:
    """Make ``user`` follow ``target``, snapshotting both display names.

    Raises:
        MissingIdentifierError: If either user has no ID.
        FollowEdgeError: If the batch fails (neither side is written).
    """
    user_id = require_id(user.id, "User")
    target_id = require_id(target.id, "User")
    followed_at = now or utcnow()
    ops: list[BatchOp] = [
        SetOp(collections.following_of(user_id), target_id, _snapshot_of(target, followed_at), merge=False),
        SetOp(collections.followers_of(target_id), user_id, _snapshot_of(user, followed_at), merge=False),
    ]
    await _commit_edge(store, "follow", ops, user_id, target_id)


async def unfollow(store: DocumentStore, user_id: str | None, target_id: str | None) -> None:
    """Remove the edge ``user_id -> target_id`` from both sides."""
    user_id = require_id(user_id, "User")
    target_id = require_id(target_id, "User")
    ops: list[BatchOp] = [
        DeleteOp(collections.following_of(user_id), target_id),
        DeleteOp(collections.followers_of(target_id), user_id),
    ]
    await _commit_edge(store, "unfollow", ops, user_id, target_id)


async def remove_follower(store: DocumentStore, user_id: str | None, follower_id: str | None) -> None:
    """Remove the edge ``follower_id -> user_id`` from both sides."""
    user_id = require_id(user_id, "User")
    follower_id = require_id(follower_id, "User")
    ops: list[BatchOp] = [
        DeleteOp(collections.followers_of(user_id), follower_id),
        DeleteOp(collections.following_of(follower_id), user_id),
    ]
    await _commit_edge(store, "remove_follower", ops, follower_id, user_id)


async def edge_state(store: DocumentStore, follower_id: str, followee_id: str) -> EdgeState:
    """Report whether both stored sides of ``follower_id -> followee_id`` agree.

    One-sided edges cannot be produced by this module but exist in data
    written by older clients.
    """
    following = await store.get(collections.following_of(follower_id), followee_id)
    follower = await store.get(collections.followers_of(followee_id), follower_id)
    if following is not None and follower is not None:
        return EdgeState.CONSISTENT
    if following is not None:
        return EdgeState.FOLLOWING_ONLY
    if follower is not None:
        return EdgeState.FOLLOWER_ONLY
    return EdgeState.ABSENT
