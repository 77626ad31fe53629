"""Edit-layer checks for user records."""

from __future__ import annotations

import re

from tadmin.errors import InvalidEntityError
from tadmin.users.schemas import User

_EMAIL_RE = re.compile(r"[A-Z0-9a-z._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}")


def is_valid_email(email: str) -> bool:
    return _EMAIL_RE.fullmatch(email) is not None


def validate_user(user: User) -> None:
    """
    Check a user before it is written.

    Raises:
        InvalidEntityError: If the display name is blank or the email is malformed.
    """
    if not user.display_name.strip():
        msg = "Display name is required"
        raise InvalidEntityError(msg)
    if user.email is not None and not is_valid_email(user.email):
        msg = f"Invalid email address: {user.email}"
        raise InvalidEntityError(msg)
