from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from pocketnote.core.modules.note.models import Draft, Note, NoteListView, NoteStats
from pocketnote.web.deps import AppDep, AuthTokenDep
from pocketnote.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["notes"])


class SaveNoteRequest(BaseModel):
    """Editor draft to save."""

    title: str = Field("", description="Note title, may be empty (inferred from the first line of content)")
    content: str = Field("", description="Note content")
    id: UUID | None = Field(None, description="Id of the note being edited, omit for a new note")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"title": "", "content": "Buy milk\nand eggs"},
                {"title": "Groceries", "content": "Buy milk and eggs", "id": "3f0d6c1e-7f0b-4d1e-9a44-7c1c5d2b9e10"},
            ]
        }
    }


class SaveNoteResponse(BaseModel):
    """Result of saving a draft."""

    note: Note | None = Field(None, description="Saved note, null when the draft was discarded")
    discarded: bool = Field(..., description="True when title and content were both blank and nothing was written")


@router.get(
    "/notes",
    summary="List notes",
    description="""Get the signed-in user's notes grouped by recency.

Groups are `Today`, `Yesterday`, `Previous 30 Days` and `Older`; empty groups are omitted.
Within a group notes are ordered most recently updated first.

Use `q` for a case-insensitive substring search over title and content.
`stale` is true when the last reload failed and the notes shown may be outdated.""",
    operation_id="listNotes",
    responses={
        200: {"description": "Grouped notes"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        503: {"model": ErrorResponse, "description": "Notes could not be loaded"},
    },
)
async def list_notes(
    app: AppDep,
    auth_token: AuthTokenDep,
    q: Annotated[str, Query(description="Search query")] = "",
) -> NoteListView:
    return await app.get_notes_view(auth_token, q)


@router.post(
    "/notes/reload",
    summary="Reload notes",
    description="Discard the loaded collection and fetch it again from storage.",
    operation_id="reloadNotes",
    responses={
        200: {"description": "Notes, most recently updated first"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        503: {"model": ErrorResponse, "description": "Notes could not be loaded, previous state kept"},
    },
)
async def reload_notes(app: AppDep, auth_token: AuthTokenDep) -> list[Note]:
    return await app.reload_notes(auth_token)


@router.get(
    "/notes/{note_id}",
    summary="Get note",
    operation_id="getNote",
    responses={
        200: {"description": "Note details"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def get_note(note_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> Note:
    return await app.get_note(auth_token, note_id)


@router.get(
    "/notes/{note_id}/stats",
    summary="Get note statistics",
    description="Word and character counts of the note content.",
    operation_id="getNoteStats",
    responses={
        200: {"description": "Note statistics"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def get_note_stats(note_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> NoteStats:
    return await app.get_note_stats(auth_token, note_id)


@router.put(
    "/notes",
    summary="Save note",
    description=(
        "Create or replace a note from editor fields. Without a title, the first line of content "
        "(up to 30 characters) becomes the title. A draft with blank title and content is discarded."
    ),
    operation_id="saveNote",
    responses={
        200: {"description": "Note saved or draft discarded"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        502: {"model": ErrorResponse, "description": "Write failed, nothing changed"},
        503: {"model": ErrorResponse, "description": "Saved, but notes could not be reloaded"},
    },
)
async def save_note(request: SaveNoteRequest, app: AppDep, auth_token: AuthTokenDep) -> SaveNoteResponse:
    note = await app.save_note(auth_token, Draft(title=request.title, content=request.content, note_id=request.id))
    return SaveNoteResponse(note=note, discarded=note is None)


@router.delete(
    "/notes/{note_id}",
    summary="Delete note",
    operation_id="deleteNote",
    status_code=204,
    responses={
        204: {"description": "Note deleted (or was never saved)"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        503: {"model": ErrorResponse, "description": "Notes could not be reloaded"},
    },
)
async def delete_note(note_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.delete_note(auth_token, note_id)
