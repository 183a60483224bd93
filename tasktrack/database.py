"""
TASKTRACK API - Database Module

MongoDB connection management using Motor (async driver).
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from tasktrack.config import settings
from tasktrack.errors import UnexpectedError

logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: AsyncIOMotorClient | None = None
    db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        """Connect to MongoDB and make sure the unique indexes exist."""
        self.client = AsyncIOMotorClient(settings.MONGODB_URI, tz_aware=True)
        self.db = self.client[settings.MONGODB_DATABASE]
        await self.ensure_indexes()
        logger.info(f"Connected to MongoDB database '{settings.MONGODB_DATABASE}'")

    async def ensure_indexes(self) -> None:
        users = self.db["users"]
        await users.create_index([("email", ASCENDING)], unique=True)
        await users.create_index([("phone", ASCENDING)], unique=True)
        await self.db["tasks"].create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None

    def get_database(self) -> AsyncIOMotorDatabase:
        """Get the database instance."""
        if self.db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.db


# Shared connection pool for the process
database = Database()


async def get_database() -> AsyncIOMotorDatabase:
    """Dependency to get the database instance."""
    return database.get_database()


@contextmanager
def storage_errors(message: str) -> Iterator[None]:
    """Re-raise driver failures as UnexpectedError carrying a client-safe message."""
    try:
        yield
    except PyMongoError as e:
        raise UnexpectedError(message) from e
