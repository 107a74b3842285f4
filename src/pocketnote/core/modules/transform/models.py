from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field

from pocketnote.core.db import MongoModel
from pocketnote.utils import now


class TransformAction(StrEnum):
    """Generative actions available in the editor."""

    FIX_GRAMMAR = "fix_grammar"
    SUMMARIZE = "summarize"
    CONTINUE_WRITING = "continue_writing"


class TransformResult(BaseModel):
    """Outcome of a text transform.

    On failure text is the original input and message explains why.
    """

    text: str = Field(..., description="Replacement text for the editor")
    changed: bool = Field(..., description="Whether the provider produced new text")
    message: str | None = Field(None, description="User-facing error message if the transform failed")


class TransformLog(MongoModel):
    """Log of a text-transform provider call."""

    user_id: UUID
    action: TransformAction
    model: str
    input_chars: int
    output_chars: int | None = None

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None

    error_message: str | None = None
    duration_ms: int
    created_at: datetime = Field(default_factory=now)
