from abc import ABC
from enum import StrEnum


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Note not found") -> None:
        super().__init__(message)


class AuthFailure(StrEnum):
    """Why an authentication attempt was rejected."""

    INVALID_CREDENTIALS = "invalid_credentials"
    ALREADY_REGISTERED = "already_registered"
    RATE_LIMITED = "rate_limited"


AUTH_FAILURE_MESSAGES: dict[AuthFailure, str] = {
    AuthFailure.INVALID_CREDENTIALS: "Incorrect username or password.",
    AuthFailure.ALREADY_REGISTERED: "This username is already registered. Please log in instead.",
    AuthFailure.RATE_LIMITED: "Too many attempts. Please wait a few minutes before trying again.",
}


class AuthError(UserError):
    """Raised when authentication fails."""

    def __init__(self, reason: AuthFailure = AuthFailure.INVALID_CREDENTIALS, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or AUTH_FAILURE_MESSAGES[reason])


class AccessDeniedError(UserError):
    """Raised when a user tries to access a resource they do not have permission for."""


class ValidationError(UserError):
    """Raised when user input fails validation."""


class SyncError(UserError):
    """Raised when notes could not be loaded from the remote store.

    The local collection keeps whatever it held before the failed load.
    """

    def __init__(self, message: str = "Could not load notes. Showing the last known state.") -> None:
        super().__init__(message)


class SaveError(UserError):
    """Raised when a note write was not confirmed by the remote store."""

    def __init__(self, message: str = "Could not save the note.") -> None:
        super().__init__(message)


class TransformError(UserError):
    """Raised when the text-transform provider fails."""

    def __init__(self, message: str = "Failed to process text with AI") -> None:
        super().__init__(message)
