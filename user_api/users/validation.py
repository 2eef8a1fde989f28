"""Acceptance rules for user create/edit input.

All checks are pure. They raise a ``UserValidationError`` subclass on the
first failing rule and return ``None`` otherwise.
"""
import enum
import re

from user_api.core.exceptions import (
    InvalidEmailFormatError,
    InvalidNameFormatError,
    MissingFieldError,
    NameLengthOutOfRangeError,
    WeakPasswordError,
)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
NAME_PATTERN = re.compile(r"[A-Za-z\s]+")

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100

PASSWORD_MIN_LENGTH = 8
PASSWORD_SPECIAL_CHARS = frozenset('!@#$%^&*(),.?":{}|<>')
_ASCII_LOWER = frozenset("abcdefghijklmnopqrstuvwxyz")
_ASCII_UPPER = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
_ASCII_DIGITS = frozenset("0123456789")
_PASSWORD_ALPHABET = _ASCII_LOWER | _ASCII_UPPER | _ASCII_DIGITS | PASSWORD_SPECIAL_CHARS


class ValidationMode(str, enum.Enum):
    STRICT = "strict"    # Full format, length and strength rules
    LENIENT = "lenient"  # Presence checks plus the stored name length limit


def validate_email(email: str | None) -> None:
    if not email or EMAIL_PATTERN.fullmatch(email) is None:
        raise InvalidEmailFormatError()


def validate_full_name(full_name: str | None) -> None:
    if not full_name or NAME_PATTERN.fullmatch(full_name) is None:
        raise InvalidNameFormatError()
    if not NAME_MIN_LENGTH <= len(full_name) <= NAME_MAX_LENGTH:
        raise NameLengthOutOfRangeError(NAME_MIN_LENGTH, NAME_MAX_LENGTH)


def is_strong_password(password: str) -> bool:
    chars = set(password)
    return (
        len(password) >= PASSWORD_MIN_LENGTH
        and chars <= _PASSWORD_ALPHABET
        and bool(chars & _ASCII_LOWER)
        and bool(chars & _ASCII_UPPER)
        and bool(chars & _ASCII_DIGITS)
        and bool(chars & PASSWORD_SPECIAL_CHARS)
    )


def validate_password(password: str | None) -> None:
    if not password or not is_strong_password(password):
        raise WeakPasswordError()


def _require(field: str, value: str | None) -> None:
    if not value:
        raise MissingFieldError(field)


def _check_stored_name_length(full_name: str | None) -> None:
    # The users.full_name column holds at most NAME_MAX_LENGTH characters.
    if full_name and len(full_name) > NAME_MAX_LENGTH:
        raise NameLengthOutOfRangeError(1, NAME_MAX_LENGTH)


def validate_create(
    full_name: str | None,
    email: str | None,
    password: str | None,
    mode: ValidationMode = ValidationMode.STRICT,
) -> None:
    if mode is ValidationMode.LENIENT:
        _require("fullName", full_name)
        _require("email", email)
        _require("password", password)
        _check_stored_name_length(full_name)
        return

    validate_email(email)
    validate_full_name(full_name)
    validate_password(password)


def validate_edit(
    email: str | None,
    full_name: str | None,
    password: str | None = None,
    mode: ValidationMode = ValidationMode.STRICT,
) -> None:
    """Password is only checked when one is supplied; an empty string counts as absent."""
    if mode is ValidationMode.LENIENT:
        _require("email", email)
        _check_stored_name_length(full_name)
        return

    validate_email(email)
    if not full_name:
        raise MissingFieldError("fullName", "Full name is required")
    validate_full_name(full_name)
    if password:
        validate_password(password)
