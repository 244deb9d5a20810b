"""MongoDB adapter for check-in storage.
"""

from typing import Optional
import logging
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

logger = logging.getLogger("mealtrack.mongo")

_client: Optional[MongoClient] = None
_db = None


# ------------------ Connection ------------------
def connect(uri: str, db_name: str = "mealtrack"):
    """Open the process-wide client and verify it with a ping.

    Raises:
        PyMongoError: If the server cannot be reached
    """
    global _client, _db
    try:
        _client = MongoClient(uri, tz_aware=True)
        _db = _client[db_name]
        _client.admin.command("ping")
        logger.info("Connected to MongoDB (database: %s)", db_name)
    except PyMongoError:
        if _client is not None:
            _client.close()
        _client = None
        _db = None
        raise


def close():
    """Close MongoDB connection."""
    global _client, _db
    try:
        if _client is not None:
            _client.close()
            logger.info("MongoDB client closed")
    except PyMongoError:
        logger.exception("Error closing MongoDB client")
    finally:
        _client = None
        _db = None


def ping() -> bool:
    """Return True when the server answers a ping."""
    if _client is None:
        return False
    try:
        _client.admin.command("ping")
        return True
    except PyMongoError as exc:
        logger.warning("MongoDB ping failed: %s", exc)
        return False


def get_collection(name: str) -> Optional[Collection]:
    """Return the named collection, or None when not connected."""
    if _db is None:
        return None
    return _db[name]
