"""
History & Feedback (v1.0.0)
Caller-facing reads of past outfits and the append-only rating log.
"""
import logging
from typing import Optional, List, Any, Tuple

from outfit_service.core.auth import check_outfit_ownership
from outfit_service.core.errors import NotFoundError
from outfit_service.core.models import Outfit, OutfitFeedback, new_id
from outfit_service.core.validation import require_user_id, validate_feedback_input
from outfit_service.db import wardrobe, outfits as outfits_db, feedback as feedback_db
from outfit_service.observability import record_feedback

logger = logging.getLogger(__name__)


def _get_owned_outfit(outfit_id: str, user_id: str) -> Outfit:
    """Load an outfit the user owns; other users' outfits look missing."""
    outfit = outfits_db.get_outfit(outfit_id)
    if outfit is None or not check_outfit_ownership(outfit.owner_user_id, user_id):
        raise NotFoundError(f"Outfit {outfit_id} not found")
    return outfit


def resolve_items(outfit: Outfit) -> Outfit:
    """Attach the referenced clothing items to an outfit loaded from the store."""
    ids = [outfit.top_id, outfit.bottom_id, outfit.shoes_id] + list(outfit.misc_ids)
    by_id = wardrobe.get_items_by_ids(outfit.owner_user_id, ids)

    outfit.top = by_id.get(outfit.top_id)
    outfit.bottom = by_id.get(outfit.bottom_id)
    outfit.shoes = by_id.get(outfit.shoes_id)
    outfit.misc = [by_id[item_id] for item_id in outfit.misc_ids if item_id in by_id]
    return outfit


# ==================== OUTFIT HISTORY ====================

def list_outfits(user_id: Optional[str], limit: int = 20, offset: int = 0) -> Tuple[List[Outfit], int]:
    """
    Get the user's outfits, newest first.

    Returns:
        (outfits, total count)
    """
    user_id = require_user_id(user_id)
    outfits = outfits_db.get_user_outfits(user_id, limit=limit, offset=offset)
    total = outfits_db.get_outfit_count(user_id)
    return outfits, total


def get_outfit_details(outfit_id: str, user_id: Optional[str]) -> Outfit:
    """Get one of the user's outfits with its pieces resolved."""
    user_id = require_user_id(user_id)
    return resolve_items(_get_owned_outfit(outfit_id, user_id))


# ==================== FEEDBACK ====================

def add_feedback(
    outfit_id: str,
    user_id: Optional[str],
    rating: Any,
    comment: Optional[str] = None
) -> OutfitFeedback:
    """
    Rate an outfit.

    Args:
        outfit_id: Outfit being rated
        user_id: Authenticated user
        rating: Integer 1-5 inclusive
        comment: Optional free text

    Raises:
        AuthenticationError, ValidationError, NotFoundError, StorageError
    """
    user_id = require_user_id(user_id)
    validated = validate_feedback_input(rating, comment)
    _get_owned_outfit(outfit_id, user_id)

    feedback = OutfitFeedback(
        feedback_id=new_id(),
        outfit_id=outfit_id,
        user_id=user_id,
        rating=validated["rating"],
        comment=validated["comment"],
    )
    feedback_db.insert_feedback(feedback)
    record_feedback()
    return feedback


def get_feedback(outfit_id: str, user_id: Optional[str]) -> List[OutfitFeedback]:
    """Get an outfit's feedback, most recent first."""
    user_id = require_user_id(user_id)
    _get_owned_outfit(outfit_id, user_id)
    return feedback_db.get_feedback(outfit_id)
