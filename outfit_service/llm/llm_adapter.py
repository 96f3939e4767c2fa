"""
LLM Adapter (v1.0.0)
Thin wrapper over the OpenAI async client for JSON chat completions and embeddings.

Failures are mapped to GenerationError / EmbeddingError; nothing is retried.
"""
import json
import logging
from typing import Optional, Any, Dict, List

from outfit_service.config import get_settings, get_llm_config, LLMRole
from outfit_service.core.errors import GenerationError, EmbeddingError
from outfit_service.observability.metrics import record_tokens

logger = logging.getLogger(__name__)


class LLMClient:
    """
    Capability handle for the text-generation and embedding services.

    Usage:
        client = LLMClient()
        data = await client.generate_json(system, user, role=LLMRole.TAGGER)
        vector = await client.embed("casual, summer, linen")
    """

    def __init__(self, openai_client=None):
        self._openai_client = openai_client
        self.tokens_used = 0

    @property
    def openai(self):
        """Get or create the AsyncOpenAI client."""
        if self._openai_client is None:
            from openai import AsyncOpenAI

            settings = get_settings()
            if not settings.has_openai():
                raise GenerationError("OPENAI_API_KEY not set", status_code=503)

            kwargs = {"api_key": settings.openai_api_key}
            if settings.openai_timeout_seconds:
                kwargs["timeout"] = settings.openai_timeout_seconds

            self._openai_client = AsyncOpenAI(**kwargs)
            logger.info("OpenAI client initialized")
        return self._openai_client

    def _record_usage(self, response: Any) -> None:
        usage = getattr(response, "usage", None)
        tokens = getattr(usage, "total_tokens", 0) if usage is not None else 0
        if isinstance(tokens, int) and tokens > 0:
            self.tokens_used += tokens
            record_tokens(tokens)

    @staticmethod
    def parse_json(text: Optional[str]) -> Dict[str, Any]:
        """
        Parse a JSON object from completion text, handling markdown code blocks.

        Raises:
            GenerationError: If the text is empty, not JSON, or not an object
        """
        if not text or not text.strip():
            raise GenerationError("Empty response from text generation")

        text = text.strip()

        # Remove markdown code blocks
        if "```json" in text:
            text = text.split("```json")[1].split("```")[0]
        elif "```" in text:
            text = text.split("```")[1].split("```")[0]

        try:
            data = json.loads(text.strip())
        except json.JSONDecodeError as e:
            raise GenerationError(f"Unparseable JSON from text generation: {e}")

        if not isinstance(data, dict):
            raise GenerationError("Text generation returned JSON that is not an object")

        return data

    async def generate_json(self, system_prompt: str, user_prompt: str, role: LLMRole = LLMRole.TAGGER) -> Dict[str, Any]:
        """Run one JSON-mode chat completion and return the parsed object."""
        config = get_llm_config(role)

        try:
            response = await self.openai.chat.completions.create(
                model=config.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt}
                ],
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                response_format={"type": "json_object"}
            )
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"OpenAI [{role.value}] call failed: {e}")
            raise GenerationError(f"Text generation failed: {e}")

        self._record_usage(response)

        content = None
        if response.choices:
            content = response.choices[0].message.content

        return self.parse_json(content)

    async def embed(self, text: str) -> List[float]:
        """
        Embed text into a fixed-length vector.

        Raises:
            EmbeddingError: If the call fails or returns no/empty vector
        """
        config = get_llm_config(LLMRole.EMBEDDER)

        try:
            response = await self.openai.embeddings.create(
                model=config.model,
                input=text
            )
        except GenerationError as e:
            raise EmbeddingError(e.message, status_code=e.status_code)
        except Exception as e:
            logger.error(f"OpenAI embedding call failed: {e}")
            raise EmbeddingError(f"Embedding failed: {e}")

        self._record_usage(response)

        data = getattr(response, "data", None) or []
        vector = list(data[0].embedding or []) if data else []

        if not vector:
            raise EmbeddingError("No embedding returned for tags")

        return [float(v) for v in vector]

    def get_status(self) -> dict:
        """Get current client status."""
        return {
            "initialized": self._openai_client is not None,
            "tokens_used": self.tokens_used,
        }


# ==================== SINGLETON INSTANCE ====================

_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get the process-wide LLM client."""
    global _client
    if _client is None:
        _client = LLMClient()
    return _client


def reset_llm_client():
    """Reset the client (for testing)."""
    global _client
    _client = None
