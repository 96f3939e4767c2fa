"""
API Routes for Outfit Service v1.0.0
Outfit generation, regeneration from feedback, ratings and wardrobe listing.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, StrictInt

from outfit_service.config import get_settings, get_all_configs_dict
from outfit_service.core.auth import User, get_current_user, create_user
from outfit_service.core.errors import NotFoundError, ValidationError
from outfit_service.core.models import Classification
from outfit_service.core.orchestrator import generate_outfit, regenerate_outfit, regenerate_from_outfit
from outfit_service.core.history import list_outfits, get_outfit_details, add_feedback, get_feedback
from outfit_service.db import mongo
from outfit_service.db.wardrobe import get_clothing_items, get_clothing_item, get_wardrobe_count
from outfit_service.observability import get_metrics, is_logging_enabled

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_VERSION = "1.0.0"


# ==================== REQUEST BODIES ====================

class CreateUserRequest(BaseModel):
    """Request body for user creation."""
    name: str = Field(..., min_length=1, description="User display name")


class OutfitRequest(BaseModel):
    """Request body for outfit generation."""
    prompt: str = Field(..., description="Describe the desired outfit")


class RegenerateRequest(BaseModel):
    """Request body for regeneration from a prompt plus feedback."""
    prompt: str = Field(..., description="The original outfit prompt")
    feedback: str = Field(..., description="What to change about the outfit")


class OutfitFeedbackRequest(BaseModel):
    """Request body for modifying a stored outfit."""
    feedback: str = Field(..., description="What to change about the outfit")


class RatingRequest(BaseModel):
    """Request body for rating an outfit."""
    rating: StrictInt = Field(..., description="Rating from 1 to 5")
    comment: Optional[str] = Field(None, description="Optional comment")


# ==================== PUBLIC ENDPOINTS ====================

@router.get("/health")
async def health_check():
    """Health check with observability info."""
    settings = get_settings()
    metrics = get_metrics()

    return {
        "status": "ok",
        "version": SERVICE_VERSION,
        "settings": settings.to_dict(),
        "llm_config": get_all_configs_dict(),
        "mongo": mongo.health_check(),
        "observability": {
            "logging_enabled": is_logging_enabled(),
            "total_generations": metrics["total_generations"],
            "success_ratio": metrics["success_ratio"],
            "total_cost_usd": metrics["total_cost_usd"]
        },
    }


@router.get("/metrics")
async def get_metrics_endpoint():
    """Get detailed metrics for monitoring."""
    return JSONResponse(content=get_metrics())


# ==================== USER MANAGEMENT ====================

@router.post("/api/users")
async def create_new_user(request: CreateUserRequest):
    """
    Create a new user and get API key.

    WARNING: The API key is only shown once!
    """
    user = create_user(request.name)
    return JSONResponse(content=user, status_code=201)


# ==================== OUTFITS ====================

@router.post("/api/outfits")
async def create_outfit(
    request: OutfitRequest,
    user: User = Depends(get_current_user)
):
    """
    Generate an outfit from the user's wardrobe for a free-text prompt.
    """
    outfit = await generate_outfit(request.prompt, user.user_id)
    return JSONResponse(content=outfit.to_dict(), status_code=201)


@router.post("/api/outfits/regenerate")
async def regenerate_outfit_from_prompt(
    request: RegenerateRequest,
    user: User = Depends(get_current_user)
):
    """
    Generate a new outfit from the original prompt modified by feedback.
    """
    outfit = await regenerate_outfit(request.prompt, request.feedback, user.user_id)
    return JSONResponse(content=outfit.to_dict(), status_code=201)


@router.get("/api/outfits")
async def list_user_outfits(
    limit: int = Query(20, ge=1, le=100, description="Max results"),
    offset: int = Query(0, ge=0, description="Skip for pagination"),
    user: User = Depends(get_current_user)
):
    """
    Get the user's generated outfits, newest first.
    """
    outfits, total = list_outfits(user.user_id, limit=limit, offset=offset)

    return JSONResponse(content={
        "outfits": [outfit.to_dict() for outfit in outfits],
        "total": total,
        "limit": limit,
        "offset": offset,
        "has_more": offset + len(outfits) < total
    })


@router.get("/api/outfits/{outfit_id}")
async def get_single_outfit(
    outfit_id: str,
    user: User = Depends(get_current_user)
):
    """
    Get one outfit with its pieces.
    """
    outfit = get_outfit_details(outfit_id, user.user_id)
    return JSONResponse(content=outfit.to_dict())


@router.post("/api/outfits/{outfit_id}/regenerate")
async def regenerate_stored_outfit(
    outfit_id: str,
    request: OutfitFeedbackRequest,
    user: User = Depends(get_current_user)
):
    """
    Generate a new outfit from a stored outfit's prompt modified by feedback.

    The stored outfit is left unchanged.
    """
    outfit = await regenerate_from_outfit(outfit_id, request.feedback, user.user_id)
    return JSONResponse(content=outfit.to_dict(), status_code=201)


# ==================== FEEDBACK ====================

@router.post("/api/outfits/{outfit_id}/feedback")
async def add_outfit_feedback(
    outfit_id: str,
    request: RatingRequest,
    user: User = Depends(get_current_user)
):
    """
    Rate an outfit from 1 to 5 with an optional comment.
    """
    feedback = add_feedback(outfit_id, user.user_id, request.rating, request.comment)
    return JSONResponse(content=feedback.to_dict(), status_code=201)


@router.get("/api/outfits/{outfit_id}/feedback")
async def get_outfit_feedback(
    outfit_id: str,
    user: User = Depends(get_current_user)
):
    """
    Get an outfit's feedback, most recent first.
    """
    feedback = get_feedback(outfit_id, user.user_id)

    return JSONResponse(content={
        "feedback": [entry.to_dict() for entry in feedback],
        "count": len(feedback)
    })


# ==================== WARDROBE ====================

@router.get("/api/wardrobe/items")
async def list_wardrobe_items(
    classification: Optional[str] = Query(None, description="Filter: top, bottom, shoes, misc"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user: User = Depends(get_current_user)
):
    """
    List the user's clothing items.
    """
    category = None
    if classification:
        try:
            category = Classification(classification.lower())
        except ValueError:
            allowed = ", ".join(c.value for c in Classification)
            raise ValidationError(f"classification must be one of: {allowed}")

    items = get_clothing_items(user.user_id, classification=category, limit=limit, offset=offset)
    total = get_wardrobe_count(user.user_id, classification=category)

    return JSONResponse(content={
        "items": [item.to_dict() for item in items],
        "total": total,
        "limit": limit,
        "offset": offset,
        "has_more": offset + len(items) < total
    })


@router.get("/api/wardrobe/items/{item_id}")
async def get_wardrobe_item(
    item_id: str,
    user: User = Depends(get_current_user)
):
    """
    Get one of the user's clothing items.
    """
    item = get_clothing_item(user.user_id, item_id)
    if item is None:
        raise NotFoundError(f"Clothing item {item_id} not found")

    return JSONResponse(content=item.to_dict())
