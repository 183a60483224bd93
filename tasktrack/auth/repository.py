import logging
from abc import ABC, abstractmethod
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from tasktrack.auth.models import User
from tasktrack.errors import ConflictError

logger = logging.getLogger(__name__)


class UserRepositoryInterface(ABC):
    """Abstract interface for user repository.

    This interface allows swapping implementations (in-memory -> MongoDB).
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises ConflictError on a duplicate email or phone."""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    async def exists_by_phone(self, phone: str) -> bool:
        pass


class MongoUserRepository(UserRepositoryInterface):
    """MongoDB implementation of the user repository."""

    COLLECTION_NAME = "users"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def create(self, user: User) -> User:
        try:
            await self.collection.insert_one(user.to_dict())
        except DuplicateKeyError as e:
            # Unique indexes catch a registration racing past the service checks.
            # Email wins when both collide, same order as the service.
            field = "email" if await self.exists_by_email(user.email) else "phone"
            logger.warning(f"[MongoUserRepository] Duplicate {field} on insert for user id={user.id}")
            if field == "phone":
                raise ConflictError("Phone number already in use") from e
            raise ConflictError("Email already in use") from e
        logger.info(f"[MongoUserRepository] Created user id={user.id}")
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        doc = await self.collection.find_one({"_id": user_id})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def get_by_email(self, email: str) -> Optional[User]:
        doc = await self.collection.find_one({"email": email})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def exists_by_email(self, email: str) -> bool:
        return await self.collection.count_documents({"email": email}, limit=1) > 0

    async def exists_by_phone(self, phone: str) -> bool:
        return await self.collection.count_documents({"phone": phone}, limit=1) > 0


class InMemoryUserRepository(UserRepositoryInterface):
    """
    In-memory implementation for CI-safe testing.
    """

    def __init__(self):
        self._users: dict[str, User] = {}

    def clear(self) -> None:
        self._users.clear()

    def remove(self, user_id: str) -> None:
        self._users.pop(user_id, None)

    async def create(self, user: User) -> User:
        if await self.exists_by_email(user.email):
            raise ConflictError("Email already in use")
        if await self.exists_by_phone(user.phone):
            raise ConflictError("Phone number already in use")
        self._users[user.id] = user
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def exists_by_email(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def exists_by_phone(self, phone: str) -> bool:
        return any(user.phone == phone for user in self._users.values())
