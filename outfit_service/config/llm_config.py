"""
LLM Configuration Layer (v1.0.0)
Per-role model config for tag extraction, outfit description and embeddings.

Environment Variables:
  - OUTFIT_CHAT_MODEL: Chat model for tagger/describer (default: gpt-4o-mini)
  - OUTFIT_EMBEDDING_MODEL: Embedding model (default: text-embedding-ada-002)
  - OUTFIT_LLM_TEMPERATURE: Sampling temperature for chat roles (default: 0.7)
  - OUTFIT_LLM_MAX_TOKENS: Max completion tokens for chat roles (default: 800)
"""
import os
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Dict, Optional

from outfit_service.config.settings import get_settings

logger = logging.getLogger(__name__)


# ==================== ENUMS ====================

class LLMRole(Enum):
    """LLM usage role."""
    TAGGER = "tagger"          # Prompt -> stylistic tags
    DESCRIBER = "describer"    # Selected pieces -> name/description
    EMBEDDER = "embedder"      # Tags -> vector


# ==================== PROVIDER CONFIG ====================

@dataclass
class OpenAIConfig:
    """OpenAI model defaults."""
    chat_model: str = "gpt-4o-mini"
    embedding_model: str = "text-embedding-ada-002"
    temperature: float = 0.7
    max_tokens: int = 800


# ==================== ACTIVE CONFIG ====================

@dataclass
class ActiveLLMConfig:
    """Active LLM configuration for a specific role."""
    role: LLMRole
    model: str
    temperature: float
    max_tokens: int

    @classmethod
    def from_env(cls, role: LLMRole = LLMRole.TAGGER) -> "ActiveLLMConfig":
        """Resolve configuration from settings and environment variables."""
        settings = get_settings()
        defaults = OpenAIConfig()

        if role == LLMRole.EMBEDDER:
            model = settings.embedding_model or defaults.embedding_model
        else:
            model = settings.chat_model or defaults.chat_model

        temperature = float(os.getenv("OUTFIT_LLM_TEMPERATURE", str(defaults.temperature)))
        max_tokens = int(os.getenv("OUTFIT_LLM_MAX_TOKENS", str(defaults.max_tokens)))

        config = cls(
            role=role,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens
        )

        logger.info(f"LLM Config [{role.value}]: model={model}")
        return config

    def is_embedding(self) -> bool:
        return self.role == LLMRole.EMBEDDER

    def to_dict(self) -> dict:
        data = {"role": self.role.value, "model": self.model}
        if not self.is_embedding():
            data["temperature"] = self.temperature
            data["max_tokens"] = self.max_tokens
        return data


# ==================== SINGLETON INSTANCES ====================

_configs: Dict[LLMRole, ActiveLLMConfig] = {}


def get_llm_config(role: LLMRole = LLMRole.TAGGER) -> ActiveLLMConfig:
    """Get active LLM configuration for a role."""
    config: Optional[ActiveLLMConfig] = _configs.get(role)
    if config is None:
        config = ActiveLLMConfig.from_env(role)
        _configs[role] = config
    return config


def reset_llm_config():
    """Reset all configs (for testing)."""
    _configs.clear()


def get_all_configs_dict() -> dict:
    """Get all configs as dict for /health endpoint."""
    return {role.value: get_llm_config(role).to_dict() for role in LLMRole}
