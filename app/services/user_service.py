"""
app/services/user_service.py

Purpose: User lookup

- Retrieves a single user document by its ObjectId
- Distinguishes unknown ids, malformed ids and store failures
"""

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Dict, Any

from app.core.config import settings
from app.core.exceptions import InvalidIdentifierError, ResourceNotFoundError
from app.core.logging import get_logger, LogContext
from app.db.mongo import database_errors, serialize_document

logger = get_logger(__name__)


class UserService:
    """Read access to the users collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[settings.USERS_COLLECTION]

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        """
        Retrieves a user by ID.

        Args:
            user_id: 24-character hex ObjectId string

        Returns:
            Serialized user document

        Raises:
            InvalidIdentifierError: If user_id is not a valid ObjectId
            ResourceNotFoundError: If no user has that id
        """
        with LogContext(user_id=user_id):
            if not ObjectId.is_valid(user_id):
                logger.info("Rejected malformed user id")
                raise InvalidIdentifierError(
                    f"'{user_id}' is not a valid user id",
                    details={"id": user_id}
                )

            async with database_errors("fetch user"):
                user = await self.collection.find_one(
                    {"_id": ObjectId(user_id)},
                    max_time_ms=settings.MONGODB_QUERY_TIMEOUT_MS
                )

            if user is None:
                logger.info("User not found")
                raise ResourceNotFoundError(
                    f"User {user_id} not found",
                    details={"id": user_id}
                )

            logger.debug("User retrieved")
            return serialize_document(user)
