"""
Wardrobe Module (v1.0.0)
Read access to a user's cataloged clothing items.

Items (and their tag vectors) are written at creation time by the cataloging
flow; this service only reads them.
"""
import logging
from typing import Optional, List, Dict, Iterable

from pymongo.errors import PyMongoError

from outfit_service.core.errors import StorageError
from outfit_service.core.models import ClothingItem, Classification
from outfit_service.db import mongo

logger = logging.getLogger(__name__)


def get_clothing_items(
    user_id: str,
    classification: Optional[Classification] = None,
    limit: int = 0,
    offset: int = 0
) -> List[ClothingItem]:
    """
    Get a user's clothing items in insertion order.

    Args:
        user_id: Owner's user ID
        classification: Optional category filter
        limit: Max results (0 = no limit)
        offset: Skip for pagination

    Returns:
        List of ClothingItem
    """
    query = {"owner_user_id": user_id}
    if classification is not None:
        query["classification"] = classification.value

    try:
        collection = mongo.get_collection(mongo.CLOTHING_ITEMS)
        cursor = collection.find(query, {"_id": 0}).sort("_id", 1).skip(offset)
        if limit:
            cursor = cursor.limit(limit)
        docs = list(cursor)
    except PyMongoError as e:
        logger.error(f"Failed to get clothing items for {user_id}: {e}")
        raise StorageError("Failed to read wardrobe")

    items = []
    for doc in docs:
        try:
            items.append(ClothingItem.from_document(doc))
        except (KeyError, ValueError) as e:
            logger.warning(f"Skipping malformed clothing item {doc.get('item_id')}: {e}")

    return items


def get_clothing_item(user_id: str, item_id: str) -> Optional[ClothingItem]:
    """Get a specific clothing item owned by the user."""
    try:
        doc = mongo.get_collection(mongo.CLOTHING_ITEMS).find_one(
            {"item_id": item_id, "owner_user_id": user_id},
            {"_id": 0}
        )
    except PyMongoError as e:
        logger.error(f"Failed to get clothing item {item_id}: {e}")
        raise StorageError("Failed to read wardrobe")

    return ClothingItem.from_document(doc) if doc else None


def get_items_by_ids(user_id: str, item_ids: Iterable[str]) -> Dict[str, ClothingItem]:
    """Resolve item ids to items owned by the user, keyed by item_id."""
    ids = list(item_ids)
    if not ids:
        return {}

    try:
        docs = list(mongo.get_collection(mongo.CLOTHING_ITEMS).find(
            {"item_id": {"$in": ids}, "owner_user_id": user_id},
            {"_id": 0}
        ))
    except PyMongoError as e:
        logger.error(f"Failed to resolve clothing items: {e}")
        raise StorageError("Failed to read wardrobe")

    by_id = {}
    for doc in docs:
        try:
            item = ClothingItem.from_document(doc)
        except (KeyError, ValueError) as e:
            logger.warning(f"Skipping malformed clothing item {doc.get('item_id')}: {e}")
            continue
        by_id[item.item_id] = item

    return by_id


def get_wardrobe_count(user_id: str, classification: Optional[Classification] = None) -> int:
    """Get total clothing item count."""
    query = {"owner_user_id": user_id}
    if classification is not None:
        query["classification"] = classification.value

    try:
        return mongo.get_collection(mongo.CLOTHING_ITEMS).count_documents(query)
    except PyMongoError as e:
        logger.error(f"Failed to count clothing items: {e}")
        raise StorageError("Failed to read wardrobe")
