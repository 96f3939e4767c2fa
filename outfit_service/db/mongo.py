"""
MongoDB Connection Module (v1.0.0)
Shared client and collection access for wardrobe, outfits and feedback.
"""
import logging

from outfit_service.config import get_settings
from outfit_service.core.errors import StorageError

logger = logging.getLogger(__name__)

# Collection names
USERS = "users"
CLOTHING_ITEMS = "clothing_items"
OUTFITS = "outfits"
OUTFIT_FEEDBACK = "outfit_feedback"

# Global client
_client = None
_db = None


def connect() -> bool:
    """
    Connect to MongoDB.

    Returns:
        True if connected, False otherwise
    """
    global _client, _db

    settings = get_settings()

    try:
        from pymongo import MongoClient

        logger.info(f"Connecting to MongoDB: {settings.mongo_uri[:30]}...")

        _client = MongoClient(settings.mongo_uri, serverSelectionTimeoutMS=5000)

        # Test connection
        _client.admin.command('ping')

        _db = _client[settings.mongo_db_name]

        logger.info(f"Connected to MongoDB database: {settings.mongo_db_name}")
        return True

    except Exception as e:
        logger.warning(f"MongoDB connection failed: {e}")
        _client = None
        _db = None
        return False


def ensure_indexes() -> None:
    """Create the lookup indexes used by the store queries."""
    from pymongo import ASCENDING, DESCENDING

    get_collection(USERS).create_index("api_key", unique=True)
    get_collection(CLOTHING_ITEMS).create_index([("owner_user_id", ASCENDING)])
    get_collection(OUTFITS).create_index([("owner_user_id", ASCENDING), ("created_at", DESCENDING)])
    get_collection(OUTFIT_FEEDBACK).create_index([("outfit_id", ASCENDING), ("created_at", DESCENDING)])


def get_collection(name: str):
    """
    Get a MongoDB collection.

    Raises:
        StorageError: If the database is unreachable
    """
    if _db is None:
        connect()

    if _db is None:
        raise StorageError("Database unavailable")

    return _db[name]


def set_database(db) -> None:
    """Point the module at an already-open database (tests, scripts)."""
    global _db
    _db = db


def health_check() -> dict:
    """Check MongoDB connection health."""
    global _client

    settings = get_settings()

    try:
        if _client is None:
            connect()

        if _client:
            _client.admin.command('ping')
            return {"status": "connected", "uri": settings.mongo_uri[:30] + "..."}
        else:
            return {"status": "disconnected", "reason": "client not initialized"}

    except Exception as e:
        return {"status": "disconnected", "reason": str(e)}


def close() -> None:
    """Close the shared client."""
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None
