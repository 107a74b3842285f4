from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime
from uuid import UUID

from pocketnote.config import Config
from pocketnote.core.core import Core
from pocketnote.core.modules.note.models import Draft, Note, NoteListView, NoteStats
from pocketnote.core.modules.note.store import NoteStore
from pocketnote.core.modules.note.views import derive_view, filter_notes, note_stats
from pocketnote.core.modules.session.models import AuthToken
from pocketnote.core.modules.transform.models import TransformAction, TransformResult
from pocketnote.core.modules.user.models import User, UserView
from pocketnote.errors import AuthError, NotFoundError, TransformError
from pocketnote.utils import now


class App:
    """Facade for all application operations, resolves the session before delegating to Core."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Identity ===
    async def is_auth_token_valid(self, auth_token: AuthToken) -> bool:
        """Check if authentication token is valid."""
        return await self._core.services.session.is_auth_token_valid(auth_token)

    async def register(self, username: str, password: str) -> AuthToken:
        """Create an account and sign it in."""
        user = await self._core.services.user.register(username, password)
        return await self._core.services.session.create_session(user.id)

    async def login(self, username: str, password: str) -> AuthToken:
        """Authenticate user and create session."""
        user = self._core.services.user.authenticate(username, password)
        return await self._core.services.session.create_session(user.id)

    async def logout(self, auth_token: AuthToken) -> None:
        """Invalidate the session and tear down its note collection."""
        await self._core.services.access.ensure_authenticated(auth_token)
        self._core.services.workspace.close_store(auth_token)
        await self._core.services.session.invalidate_session(auth_token)

    async def get_current_user(self, auth_token: AuthToken) -> UserView:
        """Get current authenticated user profile."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return UserView.from_domain(current_user)

    # === Notes ===
    async def get_notes_view(self, auth_token: AuthToken, query: str = "", at: datetime | None = None) -> NoteListView:
        """Get the current collection filtered by query and grouped by recency."""
        store = await self._resolve_store(auth_token)
        return derive_view(store.notes, query, at or now(), stale=store.stale)

    async def get_notes(self, auth_token: AuthToken, query: str = "") -> list[Note]:
        """Get the current collection filtered by query, most recently updated first."""
        store = await self._resolve_store(auth_token)
        return filter_notes(store.notes, query)

    async def reload_notes(self, auth_token: AuthToken) -> list[Note]:
        """Force a reload of the collection from persistence."""
        current_user = await self._ensure_session(auth_token)
        store = await self._core.services.workspace.reload_store(auth_token, current_user)
        return list(store.notes)

    async def get_note(self, auth_token: AuthToken, note_id: UUID) -> Note:
        """Get a note from the current collection."""
        store = await self._resolve_store(auth_token)
        note = store.get(note_id)
        if note is None:
            raise NotFoundError(f"Note not found: {note_id}")
        return note

    async def get_note_stats(self, auth_token: AuthToken, note_id: UUID) -> NoteStats:
        """Get word and character counts of a note."""
        return note_stats(await self.get_note(auth_token, note_id))

    async def save_note(self, auth_token: AuthToken, draft: Draft) -> Note | None:
        """Save an editor draft. Returns None when the draft was blank and discarded."""
        store = await self._resolve_store(auth_token)
        return await store.save(draft.title, draft.content, draft.note_id)

    async def delete_note(self, auth_token: AuthToken, note_id: UUID) -> None:
        """Delete a note. Unsaved drafts need no remote call."""
        store = await self._resolve_store(auth_token)
        await store.delete(note_id)

    # === Text transform ===
    async def transform_text(self, auth_token: AuthToken, text: str, action: TransformAction) -> TransformResult:
        """Transform editor text. On failure the original text is returned unchanged."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        if not text.strip():
            return TransformResult(text=text, changed=False)
        try:
            result = await self._core.services.transform.transform(text, action, current_user.id)
        except TransformError as e:
            return TransformResult(text=text, changed=False, message=str(e))
        return TransformResult(text=result, changed=result != text)

    # === Private resolver methods ===
    async def _ensure_session(self, auth_token: AuthToken) -> User:
        """Resolve the session principal, dropping the session's store if it no longer resolves."""
        try:
            return await self._core.services.access.ensure_authenticated(auth_token)
        except AuthError:
            self._core.services.workspace.close_store(auth_token)
            raise

    async def _resolve_store(self, auth_token: AuthToken) -> NoteStore:
        """Resolve session to its loaded NoteStore. Raises AuthError if not signed in."""
        current_user = await self._ensure_session(auth_token)
        return await self._core.services.workspace.open_store(auth_token, current_user)
