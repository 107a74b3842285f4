from typing import Any
from uuid import UUID

import structlog
from pymongo import DESCENDING
from pymongo.asynchronous.database import AsyncDatabase

from pocketnote.core.core import Service
from pocketnote.core.modules.note.models import Note
from pocketnote.utils import now

logger = structlog.get_logger(__name__)


class NoteService(Service):
    """MongoDB-backed note persistence, isolated per owner."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("notes")

    async def on_start(self) -> None:
        """Create indexes for owner lookup and recency sorting."""
        await self._collection.create_index([("owner", 1), ("updated_at", DESCENDING)])

    async def fetch_all(self, owner: UUID) -> list[Note]:
        """Get all notes of owner, most recently updated first."""
        cursor = self._collection.find({"owner": owner}).sort("updated_at", DESCENDING)
        return await Note.list_cursor(cursor)

    async def upsert(self, note: Note) -> Note:
        """Create or replace a note by id.

        Title and content are replaced wholesale, updated_at is always set here
        regardless of the value the caller computed. Owner and created_at are only
        written on insert. A note id that already belongs to another owner does not
        match the filter, so the insert fails with a duplicate key error.
        """
        timestamp = now()
        await self._collection.update_one(
            {"_id": note.id, "owner": note.owner},
            {
                "$set": {"title": note.title, "content": note.content, "updated_at": timestamp},
                "$setOnInsert": {"owner": note.owner, "created_at": timestamp},
            },
            upsert=True,
        )
        logger.debug("note_upserted", note_id=note.id, owner=note.owner)
        return note.model_copy(update={"updated_at": timestamp})

    async def delete_by_id(self, owner: UUID, note_id: UUID) -> bool:
        """Delete a note of owner, return whether it existed."""
        result = await self._collection.delete_one({"_id": note_id, "owner": owner})
        return result.deleted_count > 0

