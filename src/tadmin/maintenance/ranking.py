"""Weekly ranking close-out.

Users are ranked by XP descending. Ties keep the order the users were listed
in: the first listed gets the better rank. There is no other tiebreaker.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from tadmin import collections
from tadmin.store.base import BatchOp, SetOp
from tadmin.store.documents import require_id
from tadmin.users.service import fetch_users

if TYPE_CHECKING:
    from tadmin.store.base import DocumentStore
    from tadmin.users.schemas import User

logger = structlog.get_logger()


def rank_users(users: list[User]) -> list[User]:
    """Return copies of ``users`` in rank order with ``previous_rank`` set (1-indexed)."""
    # sorted() is stable, which is what gives equal XP the listed order
    ordered = sorted(users, key=lambda u: u.xp, reverse=True)
    return [u.model_copy(update={"previous_rank": rank}) for rank, u in enumerate(ordered, start=1)]


async def close_weekly_ranking(store: DocumentStore, users: list[User] | None = None) -> list[User]:
    """Snapshot the current standings into ``previousRank`` for every user.

    ``users`` is the list currently loaded by the caller; when omitted it is
    fetched. Only ``previousRank`` is written, for every user in a single
    atomic batch. A user without an ID fails the whole close-out before
    anything is sent.
    """
    if users is None:
        users = await fetch_users(store)

    ranked = rank_users(users)
    ops: list[BatchOp] = [
        SetOp(collections.USERS, require_id(u.id, "User"), {"previousRank": u.previous_rank}) for u in ranked
    ]
    if ops:
        await store.batch(ops)

    logger.info("weekly_ranking_closed", users=len(ranked))
    return ranked
