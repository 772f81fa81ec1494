"""
Registration service: persists form submissions as documents.
"""
import logging
from typing import Any, Optional

from bson.errors import BSONError
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from webinar.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

# Failures of a single insert. BSON encoding errors (NUL in a key, ints
# wider than 8 bytes) are raised client-side and are not PyMongoErrors.
INSERT_ERRORS = (StoreUnavailableError, PyMongoError, BSONError, OverflowError)


class RegistrationService:
    """Service for storing webinar registrations."""

    def __init__(self, collection: Optional[AsyncIOMotorCollection]):
        """Initialize with the registrations collection, or None when degraded."""
        self.collection = collection

    async def register(self, record: dict[str, Any]) -> str:
        """
        Insert a registration record unchanged.

        The driver adds ``_id`` to the document it is given, so a copy is
        inserted and ``record`` is left as submitted.

        Returns:
            The id assigned by the store, as a string.

        Raises:
            StoreUnavailableError: If the store could not be opened.
            PyMongoError: If the insert fails on the server.
            BSONError, OverflowError: If the record cannot be encoded.
        """
        if self.collection is None:
            raise StoreUnavailableError()
        result = await self.collection.insert_one(dict(record))
        return str(result.inserted_id)

    async def register_and_log(self, record: dict[str, Any]) -> None:
        """Insert a record, logging the outcome instead of raising."""
        try:
            await self.register(record)
        except INSERT_ERRORS as e:
            logger.error(f"insert failed! {e}")
            return
        logger.info("Registration successfully processed!")
