"""Shared pytest fixtures."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

import pytest
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from pocketnote.core.modules.note.models import Note
from pocketnote.core.modules.user.models import User

OWNER_ID = UUID("87654321-4321-8765-4321-876543218765")
OTHER_OWNER_ID = UUID("12345678-1234-5678-1234-567812345678")


class InMemoryNotePersistence:
    """NotePersistence double that behaves like the MongoDB-backed NoteService.

    Every write stamps updated_at from a clock that advances one second per write,
    mimicking the server-side timestamp. Failures are injected with the fail_* flags.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.rows: dict[UUID, Note] = {}
        self.clock = start or datetime(2026, 10, 18, 9, 0, tzinfo=UTC)
        self.fail_fetch = False
        self.fail_upsert = False
        self.fail_delete = False
        self.calls: list[str] = []

    async def fetch_all(self, owner: UUID) -> list[Note]:
        self.calls.append("fetch_all")
        if self.fail_fetch:
            raise ConnectionFailure("connection refused")
        notes = [note for note in self.rows.values() if note.owner == owner]
        return sorted(notes, key=lambda note: note.updated_at, reverse=True)

    async def upsert(self, note: Note) -> Note:
        self.calls.append("upsert")
        if self.fail_upsert:
            raise ConnectionFailure("connection refused")
        existing = self.rows.get(note.id)
        if existing is not None and existing.owner != note.owner:
            raise DuplicateKeyError("E11000 duplicate key error")
        self.clock += timedelta(seconds=1)
        created_at = existing.created_at if existing is not None else self.clock
        stored = note.model_copy(update={"updated_at": self.clock, "created_at": created_at})
        self.rows[note.id] = stored
        return stored

    async def delete_by_id(self, owner: UUID, note_id: UUID) -> bool:
        self.calls.append("delete_by_id")
        if self.fail_delete:
            raise ConnectionFailure("connection refused")
        note = self.rows.get(note_id)
        if note is None or note.owner != owner:
            return False
        del self.rows[note_id]
        return True


@pytest.fixture
def persistence():
    """Empty in-memory note persistence."""
    return InMemoryNotePersistence()


@pytest.fixture
def owner_id():
    return OWNER_ID


@pytest.fixture
def mock_user():
    """Create a mock user for testing."""
    return User(
        id=OWNER_ID,
        username="testuser",
        password_hash="$2b$12$hashed_password_here",
    )


@pytest.fixture
def other_user():
    return User(
        id=OTHER_OWNER_ID,
        username="otheruser",
        password_hash="$2b$12$hashed_password_here",
    )
