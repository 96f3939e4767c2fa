"""
Settings Module (v1.0.0)
Centralized configuration from environment variables.
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Application settings from environment variables."""

    # API Keys
    openai_api_key: Optional[str] = None
    openai_timeout_seconds: Optional[float] = None

    # Models
    chat_model: str = "gpt-4o-mini"
    embedding_model: str = "text-embedding-ada-002"

    # Persistence
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "outfit_service"

    # Feature Flags
    bypass_auth: bool = False
    logging_enabled: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        timeout = os.getenv("OPENAI_TIMEOUT_SECONDS")
        return cls(
            # API Keys
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            openai_timeout_seconds=float(timeout) if timeout else None,

            # Models
            chat_model=os.getenv("OUTFIT_CHAT_MODEL", "gpt-4o-mini"),
            embedding_model=os.getenv("OUTFIT_EMBEDDING_MODEL", "text-embedding-ada-002"),

            # Persistence
            mongo_uri=os.getenv("MONGO_URI", "mongodb://localhost:27017"),
            mongo_db_name=os.getenv("MONGO_DB_NAME", "outfit_service"),

            # Feature Flags
            bypass_auth=os.getenv("OUTFIT_BYPASS_AUTH", "false").lower() == "true",
            logging_enabled=os.getenv("OUTFIT_LOGGING_ENABLED", "true").lower() == "true",
        )

    def has_openai(self) -> bool:
        """Check if OpenAI API key is configured."""
        return bool(self.openai_api_key)

    def to_dict(self) -> dict:
        """Export settings as dict (without sensitive keys)."""
        return {
            "chat_model": self.chat_model,
            "embedding_model": self.embedding_model,
            "mongo_db_name": self.mongo_db_name,
            "openai_configured": self.has_openai(),
            "bypass_auth": self.bypass_auth,
            "logging_enabled": self.logging_enabled,
        }


def get_settings() -> Settings:
    """Get application settings (cached singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
        logger.info(f"Settings loaded: {_settings.to_dict()}")
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from environment."""
    global _settings
    _settings = Settings.from_env()
    logger.info(f"Settings reloaded: {_settings.to_dict()}")
    return _settings


# Singleton instance
_settings: Optional[Settings] = None
