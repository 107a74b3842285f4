from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from pocketnote.web.deps import AUTH_COOKIE_NAME, AppDep, AuthTokenDep
from pocketnote.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])

SESSION_MAX_AGE = 30 * 24 * 60 * 60  # matches session TTL


class CredentialsRequest(BaseModel):
    """Username and password."""

    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password")


class LoginResponse(BaseModel):
    """Authentication response."""

    token: str = Field(..., description="Authentication token for subsequent requests")


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=False,  # Set to True in production with HTTPS
        max_age=SESSION_MAX_AGE,
    )


@router.post(
    "/auth/register",
    summary="Create account",
    description="Register a new account and sign it in.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "Account created and signed in"},
        400: {"model": ErrorResponse, "description": "Invalid username or password"},
        401: {"model": ErrorResponse, "description": "Username already registered"},
    },
)
async def register(request: CredentialsRequest, app: AppDep, response: Response) -> LoginResponse:
    token = await app.register(request.username, request.password)
    _set_auth_cookie(response, token)
    return LoginResponse(token=token)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with username and password to receive an authentication token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        429: {"model": ErrorResponse, "description": "Too many failed attempts"},
    },
)
async def login(request: CredentialsRequest, app: AppDep, response: Response) -> LoginResponse:
    """Authenticate user and create session."""
    token = await app.login(request.username, request.password)
    _set_auth_cookie(response, token)
    return LoginResponse(token=token)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Invalidate the current session and drop its loaded notes.",
    operation_id="logout",
    status_code=204,
    responses={
        204: {"description": "Successfully logged out"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def logout(app: AppDep, auth_token: AuthTokenDep, response: Response) -> None:
    await app.logout(auth_token)
    response.delete_cookie(AUTH_COOKIE_NAME)
