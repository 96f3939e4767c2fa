"""
Authentication Module (v1.0.0)
API key authentication; every outfit operation runs as the resolved user.
"""
import secrets
import logging
from typing import Optional
from fastapi import Header

from pymongo.errors import PyMongoError

from outfit_service.config import get_settings
from outfit_service.core.errors import AuthenticationError, StorageError
from outfit_service.core.models import utc_now
from outfit_service.db import mongo

logger = logging.getLogger(__name__)

# Configuration
API_KEY_HEADER = "X-API-Key"
API_KEY_LENGTH = 32


class User:
    """Authenticated user representation."""

    def __init__(self, user_id: str, name: str, api_key: str, created_at: str):
        self.user_id = user_id
        self.name = name
        self.api_key = api_key
        self.created_at = created_at

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "created_at": self.created_at
        }


def generate_api_key() -> str:
    """Generate a secure random API key."""
    return f"outfit_{secrets.token_hex(API_KEY_LENGTH)}"


def create_user(name: str) -> dict:
    """
    Create a new user with API key.

    Args:
        name: User display name

    Returns:
        User document with API key (only shown once!)

    Raises:
        StorageError: If the user cannot be stored
    """
    user_id = secrets.token_hex(8)
    api_key = generate_api_key()

    user_doc = {
        "user_id": user_id,
        "name": name,
        "api_key": api_key,
        "created_at": utc_now(),
        "active": True,
    }

    try:
        mongo.get_collection(mongo.USERS).insert_one(user_doc)
    except PyMongoError as e:
        logger.error(f"Failed to create user: {e}")
        raise StorageError("Failed to create user")

    logger.info(f"User created: {user_id} ({name})")

    # Return with api_key visible (only this once!)
    return {
        "user_id": user_id,
        "name": name,
        "api_key": api_key,
        "message": "Save this API key - it won't be shown again!"
    }


def get_user_by_api_key(api_key: str) -> Optional[User]:
    """
    Look up user by API key.

    Returns:
        User object if found and active, None otherwise
    """
    try:
        user_doc = mongo.get_collection(mongo.USERS).find_one({"api_key": api_key, "active": True})
    except PyMongoError as e:
        logger.error(f"Failed to get user by API key: {e}")
        raise StorageError("Failed to verify API key")

    if user_doc:
        return User(
            user_id=user_doc["user_id"],
            name=user_doc["name"],
            api_key=user_doc["api_key"],
            created_at=user_doc["created_at"]
        )

    return None


async def get_current_user(
    x_api_key: Optional[str] = Header(None, alias=API_KEY_HEADER)
) -> User:
    """
    FastAPI dependency for authentication.

    Usage:
        @router.post("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            ...

    Raises:
        AuthenticationError: If no API key or invalid API key
    """
    # Bypass auth for development
    if get_settings().bypass_auth:
        logger.warning("Auth bypass enabled - DEV MODE")
        return User(
            user_id="dev_user",
            name="Development User",
            api_key="dev_key",
            created_at=utc_now()
        )

    if not x_api_key:
        raise AuthenticationError(f"Missing API key. Include '{API_KEY_HEADER}' header.")

    user = get_user_by_api_key(x_api_key)

    if not user:
        raise AuthenticationError("Invalid API key")

    logger.debug(f"Authenticated user: {user.user_id}")
    return user


def check_outfit_ownership(owner_user_id: Optional[str], user_id: str) -> bool:
    """Check if the user owns a record."""
    return owner_user_id is not None and owner_user_id == user_id
