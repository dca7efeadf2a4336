"""
Collection patching.

addBook/removeBook are single atomic update_one calls against the collection
document (no read-modify-write in the app tier), so two concurrent patches on
the same collection cannot lose each other's books.
"""

import logging
from datetime import datetime

from beanie import PydanticObjectId

from app.errors import NotFound
from app.models.collection import Collection
from app.schemas.collection import CollectionPatch

logger = logging.getLogger(__name__)


async def add_book(collection_id: PydanticObjectId, volume_id: str) -> bool:
    """Append volume_id unless already present. Returns True if the list changed."""
    now = datetime.utcnow()
    result = await Collection.find_one(
        {"_id": collection_id, "books.volume_id": {"$ne": volume_id}}
    ).update(
        {
            "$push": {"books": {"volume_id": volume_id, "added_at": now}},
            "$set": {"updated_at": now},
        }
    )
    changed = bool(result and result.modified_count)
    logger.debug("add_book %s -> %s changed=%s", volume_id, collection_id, changed)
    return changed


async def remove_book(collection_id: PydanticObjectId, volume_id: str) -> bool:
    """Pull volume_id. Removing an absent id is a no-op. Returns True if the list changed."""
    result = await Collection.find_one(
        {"_id": collection_id, "books.volume_id": volume_id}
    ).update(
        {
            "$pull": {"books": {"volume_id": volume_id}},
            "$set": {"updated_at": datetime.utcnow()},
        }
    )
    changed = bool(result and result.modified_count)
    logger.debug("remove_book %s <- %s changed=%s", volume_id, collection_id, changed)
    return changed


async def apply_collection_patch(collection: Collection, patch: CollectionPatch) -> Collection:
    """Apply structural changes, then metadata, and return the stored document."""
    if patch.add_book:
        await add_book(collection.id, patch.add_book)
    if patch.remove_book:
        await remove_book(collection.id, patch.remove_book)

    metadata = patch.metadata_changes()
    if metadata:
        await Collection.find_one({"_id": collection.id}).update(
            {"$set": {**metadata, "updated_at": datetime.utcnow()}}
        )

    refreshed = await Collection.get(collection.id)
    if refreshed is None:
        raise NotFound("Collection not found")
    return refreshed
