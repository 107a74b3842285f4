from fastapi import APIRouter
from pydantic import BaseModel, Field

from pocketnote.core.modules.transform.models import TransformAction, TransformResult
from pocketnote.web.deps import AppDep, AuthTokenDep
from pocketnote.web.openapi import ErrorResponse

router = APIRouter(prefix="/transform", tags=["transform"])


class TransformRequest(BaseModel):
    text: str = Field(..., description="Editor text to transform")
    action: TransformAction = Field(..., description="Action to apply")


@router.post(
    "",
    summary="Transform text",
    description=(
        "Apply an AI action to text. Provider failures are reported in `message` "
        "and the original text is returned unchanged."
    ),
    operation_id="transformText",
    responses={
        200: {"description": "Transformed (or unchanged) text"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def transform_text(request: TransformRequest, app: AppDep, auth_token: AuthTokenDep) -> TransformResult:
    return await app.transform_text(auth_token, request.text, request.action)
