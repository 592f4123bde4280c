"""Syntactic checks applied to user input before any hashing or storage."""

from __future__ import annotations

import re
from typing import Optional, Tuple

MIN_PASSWORD_LENGTH = 8
MIN_NAME_LENGTH = 2

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_UPPER_RE = re.compile(r"[A-Z]")
_LOWER_RE = re.compile(r"[a-z]")
_DIGIT_RE = re.compile(r"[0-9]")


def is_valid_email(email: str) -> bool:
    """No DNS lookup is performed; this is a pattern match only."""

    return _EMAIL_RE.fullmatch(email) is not None


def validate_password(password: str) -> Tuple[bool, Optional[str]]:
    """
    Check the password policy and return `(ok, reason)`.

    Only the first violation is reported, checked in order: length,
    uppercase, lowercase, digit.
    """

    if len(password) < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    if not _UPPER_RE.search(password):
        return False, "Password must contain at least one uppercase letter"
    if not _LOWER_RE.search(password):
        return False, "Password must contain at least one lowercase letter"
    if not _DIGIT_RE.search(password):
        return False, "Password must contain at least one number"
    return True, None


def is_valid_name(name: str) -> bool:
    return len(name) >= MIN_NAME_LENGTH
