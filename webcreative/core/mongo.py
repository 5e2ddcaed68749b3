"""Async MongoDB client manager for the document contact store."""
import logging
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

logger = logging.getLogger(__name__)


class MongoClientManager:
    """Owns the motor client and hands out the contacts collection."""

    def __init__(self, mongodb_url: str, database: str, collection: str):
        self.mongodb_url = mongodb_url
        self.database_name = database
        self.collection_name = collection
        self.client: Optional[AsyncIOMotorClient] = None

    async def init(self):
        """Create the client and the indexes used by the admin listing."""
        try:
            self.client = AsyncIOMotorClient(self.mongodb_url, tz_aware=False)
            await self.collection.create_index([("dataCriacao", -1)])
            await self.collection.create_index("requestId")
            logger.info(
                f"✅ MongoDB ready: {self.database_name}.{self.collection_name}"
            )
        except Exception as e:
            logger.error(f"❌ MongoDB initialization failed: {e}")
            raise

    @property
    def collection(self) -> AsyncIOMotorCollection:
        if self.client is None:
            raise RuntimeError("MongoClientManager not initialized")
        return self.client[self.database_name][self.collection_name]

    async def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None
