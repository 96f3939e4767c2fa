"""
Feedback Module (v1.0.0)
Append-only outfit ratings.
"""
import logging
from typing import List

from pymongo.errors import PyMongoError

from outfit_service.core.errors import StorageError
from outfit_service.core.models import OutfitFeedback
from outfit_service.db import mongo

logger = logging.getLogger(__name__)


def insert_feedback(feedback: OutfitFeedback) -> OutfitFeedback:
    """
    Append a feedback record. Existing feedback is never updated.

    Raises:
        StorageError: If the write fails
    """
    try:
        mongo.get_collection(mongo.OUTFIT_FEEDBACK).insert_one(feedback.to_document())
    except PyMongoError as e:
        logger.error(f"Failed to insert feedback for {feedback.outfit_id}: {e}")
        raise StorageError("Failed to save feedback")

    logger.info(f"Feedback added: {feedback.outfit_id} - {feedback.rating}")
    return feedback


def get_feedback(outfit_id: str) -> List[OutfitFeedback]:
    """Get all feedback for an outfit, most recent first."""
    try:
        cursor = mongo.get_collection(mongo.OUTFIT_FEEDBACK).find(
            {"outfit_id": outfit_id},
            {"_id": 0}
        ).sort([("created_at", -1), ("_id", -1)])
        return [OutfitFeedback.from_document(doc) for doc in cursor]
    except PyMongoError as e:
        logger.error(f"Failed to get feedback for {outfit_id}: {e}")
        raise StorageError("Failed to read feedback")
