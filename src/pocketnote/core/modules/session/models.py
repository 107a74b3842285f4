"""Session management models."""

from datetime import datetime, timedelta
from typing import NewType
from uuid import UUID

from pydantic import Field

from pocketnote.core.db import MongoModel
from pocketnote.utils import now

AuthToken = NewType("AuthToken", str)

SESSION_TTL = timedelta(days=30)


class Session(MongoModel):
    """User authentication session.

    Indexed on auth_token - unique, user_id, created_at (TTL SESSION_TTL).
    """

    user_id: UUID
    auth_token: str
    created_at: datetime = Field(default_factory=now)

    @property
    def expires_at(self) -> datetime:
        return self.created_at + SESSION_TTL

    def is_expired(self, at: datetime) -> bool:
        return at >= self.expires_at
