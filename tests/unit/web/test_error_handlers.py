"""Tests for mapping UserError subclasses to HTTP responses."""

import asyncio
import json

import pytest

from pocketnote.errors import (
    AccessDeniedError,
    AuthError,
    AuthFailure,
    NotFoundError,
    SaveError,
    SyncError,
    TransformError,
    ValidationError,
)
from pocketnote.web.error_handlers import user_error_handler


def handle(exc):
    response = asyncio.run(user_error_handler(None, exc))
    return response.status_code, json.loads(response.body)


@pytest.mark.parametrize(
    ("exc", "status_code", "error_type"),
    [
        (AuthError(), 401, "invalid_credentials"),
        (AuthError(AuthFailure.ALREADY_REGISTERED), 401, "already_registered"),
        (AuthError(AuthFailure.RATE_LIMITED), 429, "rate_limited"),
        (AccessDeniedError("nope"), 403, "access_denied"),
        (NotFoundError(), 404, "not_found"),
        (ValidationError("bad"), 400, "validation_error"),
        (SyncError(), 503, "sync_error"),
        (SaveError(), 502, "save_error"),
        (TransformError(), 502, "transform_error"),
    ],
)
def test_status_and_type(exc, status_code, error_type):
    assert handle(exc) == (status_code, {"message": str(exc), "type": error_type})


def test_auth_error_messages_are_distinct():
    messages = {str(AuthError(reason)) for reason in AuthFailure}

    assert len(messages) == len(AuthFailure)


def test_auth_error_custom_message():
    exc = AuthError(message="Invalid or expired session")

    assert exc.reason == AuthFailure.INVALID_CREDENTIALS
    assert str(exc) == "Invalid or expired session"
