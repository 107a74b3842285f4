import asyncio
from typing import Protocol
from uuid import UUID, uuid4

import structlog
from pymongo.errors import PyMongoError

from pocketnote.core.modules.note.models import Note
from pocketnote.core.modules.note.policy import is_blank, resolve
from pocketnote.errors import SaveError, SyncError
from pocketnote.utils import now

logger = structlog.get_logger(__name__)


class NotePersistence(Protocol):
    """Remote note store scoped by owner."""

    async def fetch_all(self, owner: UUID) -> list[Note]:
        """Return all notes of owner, most recently updated first."""
        ...

    async def upsert(self, note: Note) -> Note:
        """Create the note or replace it by id."""
        ...

    async def delete_by_id(self, owner: UUID, note_id: UUID) -> bool:
        """Delete a note, returning whether a row was removed."""
        ...


class NoteStore:
    """Local collection of one principal's notes, synchronized with a NotePersistence.

    Every mutation writes through persistence first and then reloads the whole
    collection, so the local view always reflects what the remote store holds
    (including its own updated_at). The collection is never changed before a
    write is confirmed.

    Mutations are serialized with a per-store lock.
    """

    def __init__(self, owner: UUID, persistence: NotePersistence) -> None:
        self._owner = owner
        self._persistence = persistence
        self._notes: list[Note] = []
        self._loaded = False
        self._stale = False
        self._lock = asyncio.Lock()

    @property
    def owner(self) -> UUID:
        return self._owner

    @property
    def notes(self) -> tuple[Note, ...]:
        """Read-only snapshot of the collection, most recently updated first."""
        return tuple(self._notes)

    @property
    def loaded(self) -> bool:
        """Whether at least one load has succeeded."""
        return self._loaded

    @property
    def stale(self) -> bool:
        """Whether the most recent load failed."""
        return self._stale

    def get(self, note_id: UUID) -> Note | None:
        return next((note for note in self._notes if note.id == note_id), None)

    async def load(self) -> list[Note]:
        """Replace the collection with everything persistence holds for the owner.

        Raises:
            SyncError: If the fetch fails. The previous collection is kept.
        """
        async with self._lock:
            return await self._reload()

    async def save(self, draft_title: str, draft_content: str, existing_id: UUID | None = None) -> Note | None:
        """Persist a draft and reload the collection.

        Blank drafts are discarded: nothing is written and None is returned.

        Args:
            draft_title: Title from the editor, may be empty
            draft_content: Content from the editor, may be empty
            existing_id: Id of the note being edited, None for a new note

        Returns:
            The saved note as reloaded from persistence, or None for a discard

        Raises:
            SaveError: If the write fails. The collection is left unchanged.
            SyncError: If the write succeeded but the following reload failed.
        """
        if is_blank(draft_title, draft_content):
            logger.debug("note_save_discarded", owner=self._owner, note_id=existing_id)
            return None

        resolved = resolve(draft_title, draft_content)
        async with self._lock:
            note = Note(
                id=existing_id or uuid4(),
                owner=self._owner,
                title=resolved.title,
                content=resolved.content,
                updated_at=now(),
            )
            try:
                await self._persistence.upsert(note)
            except PyMongoError as e:
                logger.warning("note_save_failed", owner=self._owner, note_id=note.id, error=str(e))
                raise SaveError from e

            logger.debug("note_saved", owner=self._owner, note_id=note.id, created=existing_id is None)
            await self._reload()
            # Reload reflects server-side updated_at; fall back to the written note if it is not visible yet
            return self.get(note.id) or note

    async def delete(self, note_id: UUID) -> bool:
        """Delete a note remotely and reload.

        A note that is not in the collection was never persisted, so deleting it
        is a local no-op. Remote delete failures are logged only: the reload
        then simply shows the note again.

        Returns:
            Whether a remote delete was attempted

        Raises:
            SyncError: If the reload after the delete fails.
        """
        async with self._lock:
            if self.get(note_id) is None:
                logger.debug("note_delete_skipped", owner=self._owner, note_id=note_id)
                return False

            try:
                await self._persistence.delete_by_id(self._owner, note_id)
            except PyMongoError as e:
                logger.warning("note_delete_failed", owner=self._owner, note_id=note_id, error=str(e))

            await self._reload()
            return True

    def clear(self) -> None:
        """Empty the local collection. Remote state is not touched."""
        self._notes = []
        self._loaded = False
        self._stale = False

    async def _reload(self) -> list[Note]:
        try:
            notes = await self._persistence.fetch_all(self._owner)
        except PyMongoError as e:
            self._stale = True
            logger.warning("notes_load_failed", owner=self._owner, error=str(e))
            raise SyncError from e

        # Keep the collection owner-homogeneous and unique by id
        seen: set[UUID] = set()
        self._notes = []
        for note in notes:
            if note.owner != self._owner or note.id in seen:
                continue
            seen.add(note.id)
            self._notes.append(note)
        self._loaded = True
        self._stale = False
        logger.debug("notes_loaded", owner=self._owner, count=len(self._notes))
        return list(self._notes)
