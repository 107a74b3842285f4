from datetime import datetime, timedelta
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from pocketnote.core.core import Service
from pocketnote.core.modules.note.store import NoteStore
from pocketnote.core.modules.session.models import AuthToken
from pocketnote.core.modules.user.models import User
from pocketnote.utils import now

logger = structlog.get_logger(__name__)


class WorkspaceService(Service):
    """Owns one NoteStore per signed-in session.

    A store is created and loaded when its principal is first used and is torn
    down on sign-out. Stores whose session has expired or which sat idle longer
    than `workspace_idle_seconds` are dropped on the next open, a dropped store
    is simply reloaded if its session comes back. Stores are never shared
    across principals.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._stores: dict[AuthToken, NoteStore] = {}
        self._last_used: dict[AuthToken, datetime] = {}

    async def open_store(self, auth_token: AuthToken, user: User) -> NoteStore:
        """Get the session's store, creating and loading it on first use.

        Raises:
            SyncError: If the initial load fails. The empty store is kept so a
                later request can retry the load.
        """
        self.evict_inactive(keep=auth_token)

        store = self._stores.get(auth_token)
        if store is not None and store.owner != user.id:
            # Principal switched under the same token
            self.close_store(auth_token)
            store = None

        if store is None:
            store = NoteStore(user.id, self.core.services.note)
            self._stores[auth_token] = store
            logger.debug("workspace_opened", user_id=user.id)

        self._last_used[auth_token] = now()
        if not store.loaded:
            await store.load()
        return store

    async def reload_store(self, auth_token: AuthToken, user: User) -> NoteStore:
        """Get the session's store with a fresh load. A store opened here is fetched once."""
        store = self._stores.get(auth_token)
        fresh = store is None or store.owner != user.id or not store.loaded
        store = await self.open_store(auth_token, user)
        if not fresh:
            await store.load()
        return store

    def close_store(self, auth_token: AuthToken) -> None:
        """Clear and drop the session's store. Remote notes are untouched."""
        self._last_used.pop(auth_token, None)
        store = self._stores.pop(auth_token, None)
        if store is not None:
            store.clear()
            logger.debug("workspace_closed", user_id=store.owner)

    def evict_inactive(self, at: datetime | None = None, keep: AuthToken | None = None) -> int:
        """Drop stores of expired sessions and stores idle past the configured limit.

        Returns the number of stores dropped.
        """
        at = at or now()
        idle_limit = timedelta(seconds=self.core.config.workspace_idle_seconds)
        sessions = self.core.services.session
        evicted = 0
        for auth_token in list(self._stores):
            if auth_token == keep:
                continue
            idle = at - self._last_used.get(auth_token, at) >= idle_limit
            if idle or not sessions.is_session_active(auth_token):
                self.close_store(auth_token)
                evicted += 1
        if evicted:
            logger.debug("workspace_evicted", count=evicted)
        return evicted

    async def on_stop(self) -> None:
        for auth_token in list(self._stores):
            self.close_store(auth_token)
