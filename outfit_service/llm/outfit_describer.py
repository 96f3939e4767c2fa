"""
Outfit Describer (v1.0.0)
Names and describes a selected set of pieces.
"""
import logging

from outfit_service.config import LLMRole
from outfit_service.core.errors import GenerationError
from outfit_service.core.models import OutfitDescription, OutfitSelection
from outfit_service.llm.llm_adapter import LLMClient

logger = logging.getLogger(__name__)


DESCRIBE_SYSTEM_PROMPT = """You are a fashion expert. Given an outfit description and its pieces, create a name and detailed description for the outfit.

Respond in JSON format with:
{ "name": "...", "description": "..." }"""


def build_describe_prompt(prompt: str, selection: OutfitSelection) -> str:
    """User content for the describer: the prompt plus every piece description."""
    pieces = ", ".join(selection.piece_descriptions())
    return f"Create a name and description for this outfit. Prompt: {prompt}. Pieces: {pieces}"


def parse_description(data: dict) -> OutfitDescription:
    """
    Validate the describer response shape.

    Raises:
        GenerationError: If name or description is absent
    """
    name = data.get("name")
    description = data.get("description")

    missing = [
        key for key, value in (("name", name), ("description", description))
        if not isinstance(value, str) or not value.strip()
    ]
    if missing:
        raise GenerationError(f"Failed to generate outfit {' and '.join(missing)}")

    return OutfitDescription(name=name.strip(), description=description.strip())


async def describe_outfit(client: LLMClient, prompt: str, selection: OutfitSelection) -> OutfitDescription:
    """Ask the text-generation service to name and describe the outfit."""
    data = await client.generate_json(
        DESCRIBE_SYSTEM_PROMPT,
        build_describe_prompt(prompt, selection),
        role=LLMRole.DESCRIBER
    )
    result = parse_description(data)
    logger.info(f"Outfit described: {result.name}")
    return result
