import secrets
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from pocketnote.core.core import Service
from pocketnote.core.modules.session.models import SESSION_TTL, AuthToken, Session
from pocketnote.core.modules.user.models import User
from pocketnote.errors import AuthError
from pocketnote.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Token sessions with an in-memory cache that honours the session TTL.

    MongoDB removes expired session documents on its own schedule, so the cache
    checks expiry itself instead of trusting a cached entry forever.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")
        self._sessions: dict[AuthToken, Session] = {}

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("auth_token", 1)], unique=True)
        await self._collection.create_index([("user_id", 1)])
        await self._collection.create_index([("created_at", 1)], expireAfterSeconds=int(SESSION_TTL.total_seconds()))

    async def create_session(self, user_id: UUID) -> AuthToken:
        auth_token = AuthToken(secrets.token_urlsafe(32))
        session = Session(user_id=user_id, auth_token=auth_token)
        await self._collection.insert_one(session.to_mongo())
        self._sessions[auth_token] = session
        return auth_token

    async def get_authenticated_user(self, auth_token: AuthToken) -> User:
        """Resolve the current principal of a session.

        Raises:
            AuthError: If the session is unknown, expired or its user is gone
        """
        session = self._sessions.get(auth_token)
        if session is None:
            doc = await self._collection.find_one({"auth_token": auth_token})
            if doc is None:
                raise AuthError(message="Invalid or expired session")
            session = Session.model_validate(doc)

        if session.is_expired(now()):
            logger.debug("session_expired", user_id=session.user_id)
            await self.invalidate_session(auth_token)
            raise AuthError(message="Invalid or expired session")

        if not self.core.services.user.has_user(session.user_id):
            self._sessions.pop(auth_token, None)
            raise AuthError(message="Invalid or expired session")

        self._sessions[auth_token] = session
        return self.core.services.user.get_user(session.user_id)

    def is_session_active(self, auth_token: AuthToken) -> bool:
        """Whether a cached session exists and has not expired. Never touches the database."""
        session = self._sessions.get(auth_token)
        return session is not None and not session.is_expired(now())

    async def is_auth_token_valid(self, auth_token: AuthToken) -> bool:
        try:
            await self.get_authenticated_user(auth_token)
        except AuthError:
            return False
        return True

    async def invalidate_session(self, auth_token: AuthToken) -> None:
        """Invalidate a session by removing it from the cache and the database."""
        self._sessions.pop(auth_token, None)
        await self._collection.delete_one({"auth_token": auth_token})
