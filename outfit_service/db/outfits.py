"""
Outfits Module (v1.0.0)
Persisted outfit records and per-user outfit history.
"""
import logging
from typing import Optional, List

from pymongo.errors import PyMongoError

from outfit_service.core.errors import StorageError
from outfit_service.core.models import Outfit
from outfit_service.db import mongo

logger = logging.getLogger(__name__)


def insert_outfit(outfit: Outfit) -> Outfit:
    """
    Insert a new outfit record.

    Raises:
        StorageError: If the write fails
    """
    try:
        mongo.get_collection(mongo.OUTFITS).insert_one(outfit.to_document())
    except PyMongoError as e:
        logger.error(f"Failed to insert outfit {outfit.outfit_id}: {e}")
        raise StorageError("Failed to save outfit")

    logger.info(f"Outfit inserted: {outfit.outfit_id}")
    return outfit


def get_outfit(outfit_id: str) -> Optional[Outfit]:
    """Get an outfit by ID regardless of owner."""
    try:
        doc = mongo.get_collection(mongo.OUTFITS).find_one({"outfit_id": outfit_id}, {"_id": 0})
    except PyMongoError as e:
        logger.error(f"Failed to get outfit {outfit_id}: {e}")
        raise StorageError("Failed to read outfit")

    return Outfit.from_document(doc) if doc else None


def get_user_outfits(user_id: str, limit: int = 20, offset: int = 0) -> List[Outfit]:
    """
    Get a user's outfits, newest first.

    Args:
        user_id: Owner user ID
        limit: Max results (default 20)
        offset: Skip results for pagination
    """
    try:
        cursor = mongo.get_collection(mongo.OUTFITS).find(
            {"owner_user_id": user_id},
            {"_id": 0}
        ).sort([("created_at", -1), ("_id", -1)]).skip(offset).limit(limit)
        return [Outfit.from_document(doc) for doc in cursor]
    except PyMongoError as e:
        logger.error(f"Failed to get outfits for {user_id}: {e}")
        raise StorageError("Failed to read outfits")


def get_outfit_count(user_id: str) -> int:
    """Get total outfit count for pagination."""
    try:
        return mongo.get_collection(mongo.OUTFITS).count_documents({"owner_user_id": user_id})
    except PyMongoError as e:
        logger.error(f"Failed to count outfits: {e}")
        raise StorageError("Failed to read outfits")
