"""
Pipeline Orchestrator (v1.0.0)
prompt -> tags -> embedding -> ranked wardrobe -> selection -> description -> outfit.

Each generation is one sequential chain of awaited calls. Nothing is written
to the store until every external call has succeeded; a failure at any stage
is logged with the stage name and surfaced to the caller unchanged.
"""
import time
import logging
from typing import Optional

from outfit_service.core.auth import check_outfit_ownership
from outfit_service.core.errors import NotFoundError, OutfitServiceError
from outfit_service.core.models import Outfit, new_id
from outfit_service.core.ranking import rank_items
from outfit_service.core.selection import select_outfit_items
from outfit_service.core.validation import require_user_id, validate_prompt, validate_feedback_text
from outfit_service.db import wardrobe, outfits as outfits_db
from outfit_service.llm.llm_adapter import LLMClient, get_llm_client
from outfit_service.llm.tag_extractor import extract_tags
from outfit_service.llm.outfit_describer import describe_outfit
from outfit_service.observability import log_request, record_generation

logger = logging.getLogger(__name__)

FEEDBACK_PROMPT_TEMPLATE = "{prompt}. Please modify the outfit based on this feedback: {feedback}"


def build_feedback_prompt(prompt: str, feedback: str) -> str:
    """Combine the original prompt with modification feedback."""
    return FEEDBACK_PROMPT_TEMPLATE.format(prompt=prompt, feedback=feedback)


async def _run_pipeline(
    prompt: str,
    user_id: str,
    client: LLMClient,
    operation: str,
    base_prompt: Optional[str] = None
) -> Outfit:
    """
    Run the generation chain and persist the outfit.

    `base_prompt` is the user prompt without feedback; defaults to `prompt`.
    """
    start_time = time.time()
    stage = "tags"

    try:
        tags = await extract_tags(client, prompt)

        stage = "embedding"
        vector = await client.embed(tags.joined())

        stage = "inventory"
        items = wardrobe.get_clothing_items(user_id)
        logger.info(f"[{user_id}] Ranking {len(items)} wardrobe items")

        stage = "selection"
        ranked = rank_items(items, vector)
        selection = select_outfit_items(ranked)

        stage = "description"
        description = await describe_outfit(client, prompt, selection)

        stage = "persistence"
        outfit = Outfit(
            outfit_id=new_id(),
            owner_user_id=user_id,
            name=description.name,
            description=description.description,
            top_id=selection.top.item_id,
            bottom_id=selection.bottom.item_id,
            shoes_id=selection.shoes.item_id,
            misc_ids=[item.item_id for item in selection.misc],
            prompt=prompt,
            base_prompt=base_prompt or prompt,
            top=selection.top,
            bottom=selection.bottom,
            shoes=selection.shoes,
            misc=list(selection.misc),
        )
        outfits_db.insert_outfit(outfit)

    except OutfitServiceError as e:
        latency_ms = int((time.time() - start_time) * 1000)
        logger.warning(f"[{user_id}] {operation} failed at {stage}: {e.kind}: {e.message}")
        record_generation(success=False, error_kind=e.kind, regeneration=operation == "regenerate")
        log_request(
            user_id=user_id,
            operation=operation,
            latency_ms=latency_ms,
            status="fail",
            stage=stage,
            error_kind=e.kind,
            error=e.message
        )
        raise

    latency_ms = int((time.time() - start_time) * 1000)
    logger.info(f"[{user_id}] Outfit {outfit.outfit_id} generated in {latency_ms}ms")
    record_generation(success=True, regeneration=operation == "regenerate")
    log_request(
        user_id=user_id,
        operation=operation,
        latency_ms=latency_ms,
        status="success",
        outfit_id=outfit.outfit_id,
        item_count=len(selection.items())
    )
    return outfit


async def generate_outfit(prompt: str, user_id: Optional[str], client: Optional[LLMClient] = None) -> Outfit:
    """
    Generate and persist an outfit for a prompt.

    Args:
        prompt: Free-text outfit request
        user_id: Authenticated user
        client: LLM capability handle (process-wide client by default)

    Returns:
        The persisted Outfit with resolved items

    Raises:
        AuthenticationError, ValidationError, GenerationError, EmbeddingError,
        IncompleteOutfitError, StorageError
    """
    user_id = require_user_id(user_id)
    prompt = validate_prompt(prompt)
    return await _run_pipeline(prompt, user_id, client or get_llm_client(), "generate")


async def regenerate_outfit(
    prompt: str,
    feedback: str,
    user_id: Optional[str],
    client: Optional[LLMClient] = None
) -> Outfit:
    """
    Generate a new, independent outfit from a prompt modified by feedback.

    The previous outfit is not touched.
    """
    user_id = require_user_id(user_id)
    prompt = validate_prompt(prompt)
    feedback = validate_feedback_text(feedback)

    combined = build_feedback_prompt(prompt, feedback)
    logger.info(f"[{user_id}] Regenerating with feedback")
    return await _run_pipeline(combined, user_id, client or get_llm_client(), "regenerate", base_prompt=prompt)


async def regenerate_from_outfit(
    outfit_id: str,
    feedback: str,
    user_id: Optional[str],
    client: Optional[LLMClient] = None
) -> Outfit:
    """
    Regenerate from one of the user's outfits.

    Only the latest feedback is applied, to the outfit's base prompt.
    """
    user_id = require_user_id(user_id)
    feedback = validate_feedback_text(feedback)

    original = outfits_db.get_outfit(outfit_id)
    if original is None or not check_outfit_ownership(original.owner_user_id, user_id):
        raise NotFoundError(f"Outfit {outfit_id} not found")

    base_prompt = original.base_prompt or original.prompt
    combined = build_feedback_prompt(base_prompt, feedback)
    logger.info(f"[{user_id}] Regenerating outfit {outfit_id} with feedback")
    return await _run_pipeline(combined, user_id, client or get_llm_client(), "regenerate", base_prompt=base_prompt)
