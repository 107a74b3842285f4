import re

from pocketnote.errors import ValidationError

USERNAME_RE = re.compile(r"^[A-Za-z0-9_.@+-]{3,64}$")


def validate_username(username: str) -> None:
    """Validate username: 3-64 chars of letters, digits or _.@+-"""
    if not USERNAME_RE.fullmatch(username):
        raise ValidationError("Username must be 3-64 characters: letters, digits or _.@+-")


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - No whitespace characters
    - Minimum length of 6 characters

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < 6:
        raise ValidationError("Password must be at least 6 characters long")

    if any(char.isspace() for char in password):
        raise ValidationError("Password cannot contain whitespace characters")
