"""
Tag Extractor (v1.0.0)
Turns a free-text outfit prompt into stylistic tags.
"""
import logging

from outfit_service.config import LLMRole
from outfit_service.core.errors import GenerationError
from outfit_service.core.models import TagResult
from outfit_service.llm.llm_adapter import LLMClient

logger = logging.getLogger(__name__)


TAGS_SYSTEM_PROMPT = """You are a fashion expert. I have a client that is trying to create an outfit for their specific prompt.
Please return a list of stylistic tags in JSON format that describe the outfit.

Respond in the following format:
{ "tags": ["tag", "tag", ...] }"""


def parse_tags(data: dict) -> TagResult:
    """
    Validate the tagger response shape.

    Raises:
        GenerationError: If tags are missing, not a list, or empty
    """
    tags = data.get("tags")
    if not isinstance(tags, list):
        raise GenerationError("No tags found in text generation response")

    cleaned = [str(tag).strip() for tag in tags if tag is not None and str(tag).strip()]
    if not cleaned:
        raise GenerationError("No tags found in text generation response")

    return TagResult(tags=cleaned)


async def extract_tags(client: LLMClient, prompt: str) -> TagResult:
    """Ask the text-generation service for the prompt's stylistic tags."""
    data = await client.generate_json(TAGS_SYSTEM_PROMPT, prompt, role=LLMRole.TAGGER)
    result = parse_tags(data)
    logger.info(f"Extracted {len(result.tags)} tags: {result.joined()}")
    return result
