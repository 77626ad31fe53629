"""Territory repository operations, including the ownership audit log."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tadmin import collections
from tadmin.store import documents
from tadmin.territories.boundary import validate_territory
from tadmin.territories.decoding import (
    decode_territory,
    decode_territory_change,
    encode_territory,
    encode_territory_change,
)
from tadmin.territories.schemas import RemoteTerritory, TerritoryChange

if TYPE_CHECKING:
    from tadmin.store.base import DocumentStore

logger = logging.getLogger(__name__)

KIND = "Territory"


async def fetch_territories(store: DocumentStore, user_id: str | None = None) -> list[RemoteTerritory]:
    return await documents.fetch_all(store, collections.TERRITORIES, decode_territory, user_id=user_id)


async def fetch_territory(store: DocumentStore, territory_id: str) -> RemoteTerritory | None:
    return await documents.fetch_one(store, collections.TERRITORIES, territory_id, decode_territory)


async def create_territory(store: DocumentStore, territory: RemoteTerritory) -> str:
    """
    Create a territory after validating its owner and boundary.

    Raises:
        InvalidEntityError: If the owner is missing or the boundary has fewer than 3 points.
    """
    validate_territory(territory)
    territory_id = await store.add(collections.TERRITORIES, encode_territory(territory))
    logger.info("Created territory %s for user %s", territory_id, territory.user_id)
    return territory_id


async def update_territory(store: DocumentStore, territory: RemoteTerritory) -> None:
    await documents.update(store, collections.TERRITORIES, territory.id, encode_territory(territory), KIND)


async def delete_territory(store: DocumentStore, territory_id: str | None) -> None:
    """Delete the territory document alone (its history is left behind)."""
    await documents.delete(store, collections.TERRITORIES, territory_id, KIND)


async def fetch_territory_history(store: DocumentStore, territory_id: str) -> list[TerritoryChange]:
    """Ownership changes of a territory, newest first."""
    docs = await store.query(
        collections.territory_owners(territory_id),
        order_by=("changedAt", True),
    )
    return [decode_territory_change(doc.id, doc.data) for doc in docs]


async def record_territory_change(store: DocumentStore, territory_id: str, change: TerritoryChange) -> str:
    """Append an entry to the territory's ownership log."""
    documents.require_id(territory_id, KIND)
    fields = encode_territory_change(change.model_copy(update={"territory_id": territory_id}))
    return await store.add(collections.territory_owners(territory_id), fields)
