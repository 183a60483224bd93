import base64
import hashlib
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import status
from jose import jwt, JWTError

from tasktrack.config import settings
from tasktrack.database import storage_errors
from tasktrack.auth.models import User
from tasktrack.auth.repository import UserRepositoryInterface
from tasktrack.errors import AuthError, ConflictError, ValidationError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _prehash(password: str) -> bytes:
    """SHA-256 the password first so bcrypt's 72-byte input limit never truncates it."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


class AuthService:
    """Authentication service with password hashing and JWT operations."""

    def __init__(self, repository: UserRepositoryInterface):
        self.repository = repository

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt()
        return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))

    def create_access_token(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT session token."""
        if expires_delta is None:
            expires_delta = timedelta(days=settings.SESSION_EXPIRE_DAYS)

        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": user_id,
            "exp": now + expires_delta,
            "iat": now,
        }
        return jwt.encode(
            to_encode,
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

    def decode_token(self, token: str) -> Optional[str]:
        """Decode and validate a JWT token. Returns user_id if valid."""
        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM],
            )
        except JWTError:
            return None
        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            return None
        return user_id

    async def register_user(self, name: str, email: str, phone: str, password: str) -> User:
        """Register a new user. Email is checked before phone."""
        if not name or not email or not phone or not password:
            raise ValidationError("All fields are required")

        email = _normalize_email(email)
        with storage_errors("Server error during registration"):
            if await self.repository.exists_by_email(email):
                raise ConflictError("Email already in use")
            if await self.repository.exists_by_phone(phone):
                raise ConflictError("Phone number already in use")

            user = User.create(
                name=name,
                email=email,
                phone=phone,
                password_hash=self.hash_password(password),
            )
            created = await self.repository.create(user)
        logger.info(f"Registered user id={created.id}")
        return created

    async def authenticate_user(self, email: str, password: str) -> User:
        """Authenticate by email and password. Both failure cases share one message."""
        if not email or not password:
            raise ValidationError("Email and password are required")

        with storage_errors("Server error during login"):
            user = await self.repository.get_by_email(_normalize_email(email))
        if user is None or not self.verify_password(password, user.password_hash):
            logger.info("Rejected login attempt")
            raise AuthError(INVALID_CREDENTIALS)
        return user

    async def resolve_user(self, token: Optional[str]) -> User:
        """Turn a session token into its user, or raise AuthError."""
        if not token:
            raise AuthError("Authentication required")

        user_id = self.decode_token(token)
        if user_id is None:
            raise AuthError("Invalid or expired token", status_code=status.HTTP_403_FORBIDDEN)

        # A deleted user invalidates an otherwise valid token
        user = await self.repository.get_by_id(user_id)
        if user is None:
            raise AuthError("User not found")
        return user

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        return await self.repository.get_by_id(user_id)
