# LLM module
from outfit_service.llm.llm_adapter import LLMClient, get_llm_client, reset_llm_client
from outfit_service.llm.tag_extractor import extract_tags, parse_tags, TAGS_SYSTEM_PROMPT
from outfit_service.llm.outfit_describer import (
    describe_outfit,
    parse_description,
    build_describe_prompt,
    DESCRIBE_SYSTEM_PROMPT,
)
