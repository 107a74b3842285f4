from typing import Any
from uuid import UUID

import bcrypt
import structlog
from pymongo.asynchronous.database import AsyncDatabase

from pocketnote.core.core import Service
from pocketnote.core.modules.user.models import User
from pocketnote.core.modules.user.throttle import LoginThrottle
from pocketnote.core.modules.user.validators import validate_password, validate_username
from pocketnote.errors import AuthError, AuthFailure, NotFoundError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Manages user accounts with in-memory cache."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")
        self._users: dict[UUID, User] = {}
        self._throttle: LoginThrottle | None = None

    @property
    def throttle(self) -> LoginThrottle:
        if self._throttle is None:
            self._throttle = LoginThrottle(self.core.config.login_max_attempts, self.core.config.login_window_seconds)
        return self._throttle

    def get_user(self, user_id: UUID) -> User:
        """Get user by ID from cache."""
        if user_id not in self._users:
            raise NotFoundError(f"User '{user_id}' not found")
        return self._users[user_id]

    def has_user(self, user_id: UUID) -> bool:
        """Check if user exists by ID."""
        return user_id in self._users

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    async def register(self, username: str, password: str) -> User:
        """Create an account with a hashed password.

        Raises:
            AuthError: ALREADY_REGISTERED if the username is taken
            ValidationError: If username or password are malformed
        """
        validate_username(username)
        if self.find_by_username(username) is not None:
            raise AuthError(AuthFailure.ALREADY_REGISTERED)

        validate_password(password)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
        res = await self._collection.insert_one(User(username=username, password_hash=password_hash).to_mongo())
        user = await self.update_user_cache(res.inserted_id)
        logger.info("user_registered", user_id=user.id)
        return user

    def authenticate(self, username: str, password: str) -> User:
        """Check credentials, counting failures per username.

        Raises:
            AuthError: RATE_LIMITED after too many recent failures, INVALID_CREDENTIALS otherwise
        """
        if self.throttle.is_limited(username):
            logger.warning("login_rate_limited", username=username)
            raise AuthError(AuthFailure.RATE_LIMITED)

        user = self.find_by_username(username)
        if user is None or not bcrypt.checkpw(password.encode("utf-8"), user.password_hash.encode("utf-8")):
            self.throttle.record_failure(username)
            raise AuthError(AuthFailure.INVALID_CREDENTIALS)

        self.throttle.reset(username)
        return user

    async def update_all_users_cache(self) -> None:
        """Reload all users cache from database."""
        users = await User.list_cursor(self._collection.find())
        self._users = {user.id: user for user in users}

    async def update_user_cache(self, user_id: UUID) -> User:
        """Reload a specific user cache from database."""
        user = await self._collection.find_one({"_id": user_id})
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        self._users[user_id] = User.model_validate(user)
        return self._users[user_id]

    async def on_start(self) -> None:
        """Initialize indexes and cache."""
        await self._collection.create_index([("username", 1)], unique=True)
        await self.update_all_users_cache()
        logger.debug("user_service_started", user_count=len(self._users))
