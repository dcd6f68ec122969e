"""
app/db/mongo.py

Purpose: MongoDB connection setup

- Initializes Motor client with connection pooling
- Collections: users, overallstats, transactions (read-only here)
- Health checks and retry logic
- Translates driver failures into API errors
- Proper connection lifecycle management
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import (
    ConnectionFailure,
    ExecutionTimeout,
    NetworkTimeout,
    PyMongoError,
    ServerSelectionTimeoutError,
)
from bson import ObjectId
from contextlib import asynccontextmanager
from fastapi.encoders import jsonable_encoder
from typing import Any, Optional
import asyncio
from app.core.config import settings
from app.core.exceptions import DatabaseTimeoutError, DatabaseUnavailableError
from app.core.logging import get_logger

logger = get_logger(__name__)

# Global MongoDB client
_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None


async def connect_to_mongo():
    """
    Establishes connection to MongoDB with retry logic.
    Called during application startup.
    """
    global _client, _database

    if _client is not None:
        logger.warning("MongoDB client already initialized")
        return

    max_retries = 3
    retry_delay = 2

    for attempt in range(1, max_retries + 1):
        try:
            logger.info(
                f"Attempting to connect to MongoDB (attempt {attempt}/{max_retries})"
            )

            _client = AsyncIOMotorClient(
                settings.MONGODB_URL,
                maxPoolSize=50,
                minPoolSize=10,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=10000,
                retryReads=True,
                tz_aware=True,
            )

            _database = _client[settings.MONGODB_DB_NAME]

            # Verify connection
            await _client.admin.command("ping")

            logger.info(
                f"✅ Successfully connected to MongoDB: {settings.MONGODB_DB_NAME}"
            )
            return

        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(
                f"Failed to connect to MongoDB (attempt {attempt}/{max_retries}): {e}"
            )
            if _client is not None:
                _client.close()
            _client = None
            _database = None

            if attempt < max_retries:
                logger.info(f"Retrying in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)
                retry_delay *= 2  # Exponential backoff
            else:
                logger.critical("Failed to connect to MongoDB after all retries")
                raise ConnectionError("Could not establish MongoDB connection") from e


async def close_mongo_connection():
    """
    Closes the MongoDB connection.
    Called during application shutdown.
    """
    global _client, _database

    if _client:
        logger.info("Closing MongoDB connection")
        _client.close()
        _client = None
        _database = None
        logger.info("MongoDB connection closed")


async def check_database_health() -> bool:
    """
    Checks if the database connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    try:
        if _client is None:
            logger.error("MongoDB client not initialized")
            return False

        await _client.admin.command("ping")
        return True

    except PyMongoError as e:
        logger.error(f"Database health check failed: {str(e)}")
        return False


async def get_database() -> AsyncIOMotorDatabase:
    """
    Returns the MongoDB database instance.
    Used as a FastAPI dependency by the routers.

    Returns:
        AsyncIOMotorDatabase instance

    Raises:
        RuntimeError: If database is not initialized
    """
    if _database is None:
        raise RuntimeError(
            "Database not initialized. Call connect_to_mongo() during startup."
        )
    return _database


@asynccontextmanager
async def database_errors(operation: str):
    """
    Converts driver exceptions raised inside the block into API errors.

    Timeouts become DatabaseTimeoutError (504), everything else the
    driver raises becomes DatabaseUnavailableError (503). The driver's
    message is logged but never returned to the client.

    Usage:
        async with database_errors("fetch recent transactions"):
            docs = await cursor.to_list(length=50)
    """
    try:
        yield
    except (ExecutionTimeout, NetworkTimeout) as e:
        logger.error(f"MongoDB timeout during {operation}: {e}")
        raise DatabaseTimeoutError(
            f"Database query timed out while trying to {operation}"
        ) from e
    except PyMongoError as e:
        logger.error(f"MongoDB failure during {operation}: {e}", exc_info=True)
        raise DatabaseUnavailableError(
            f"Database unavailable while trying to {operation}"
        ) from e


def serialize_document(document: Any) -> Any:
    """
    Makes a MongoDB document JSON-safe.

    ObjectIds become hex strings and datetimes become ISO-8601 strings,
    recursively through embedded documents and arrays.
    """
    if document is None:
        return None
    return jsonable_encoder(document, custom_encoder={ObjectId: str})
