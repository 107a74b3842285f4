from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field

from pocketnote.core.db import MongoModel
from pocketnote.utils import now


class Note(MongoModel):
    """Personal note owned by a single user."""

    owner: UUID  # Immutable once set
    title: str  # Never persisted empty, see policy.resolve
    content: str = ""
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)  # Maintained by NoteService on every write


class Draft(BaseModel):
    """Editor-held title/content pair not yet represented in the collection."""

    title: str = ""
    content: str = ""
    note_id: UUID | None = None  # Set when editing an already saved note


class RecencyBucket(StrEnum):
    """Time-based groups used for list presentation, in display order."""

    TODAY = "Today"
    YESTERDAY = "Yesterday"
    PREVIOUS_30_DAYS = "Previous 30 Days"
    OLDER = "Older"


class NoteGroup(BaseModel):
    """Non-empty recency bucket with its notes."""

    bucket: RecencyBucket
    notes: list[Note]


class NoteListView(BaseModel):
    """Derived list presentation for the current collection and query."""

    query: str = Field("", description="Search query the view was derived with")
    total: int = Field(..., description="Number of notes matching the query", ge=0)
    groups: list[NoteGroup] = Field(..., description="Non-empty recency buckets in display order")
    stale: bool = Field(False, description="Whether the last reload failed and notes may be outdated")


class NoteStats(BaseModel):
    """Editor footer statistics."""

    words: int
    characters: int
