"""Tests for account field validators."""

import pytest

from pocketnote.core.modules.user.validators import validate_password, validate_username
from pocketnote.errors import ValidationError


@pytest.mark.parametrize("username", ["bob", "alice.smith", "me+notes@example.com", "a_b-c"])
def test_valid_usernames(username):
    validate_username(username)


@pytest.mark.parametrize("username", ["", "ab", "has space", "x" * 65, "semi;colon"])
def test_invalid_usernames(username):
    with pytest.raises(ValidationError):
        validate_username(username)


def test_valid_password():
    validate_password("s3cret!")


@pytest.mark.parametrize("password", ["short", "has space in it", "tab\there"])
def test_invalid_passwords(password):
    with pytest.raises(ValidationError):
        validate_password(password)
