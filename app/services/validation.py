"""
Field validators shared by the account and profile services.

Each check raises ValidationError naming the offending field, so callers
can surface "which field was wrong" regardless of the transport in front
of the service layer.
"""

import re

from app.exceptions import ValidationError
from app.models.account import Role


# local-part@domain — intentionally permissive on the domain side
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")

NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 150
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100
CODE_MAX_LENGTH = 20
ADDRESS_MAX_LENGTH = 200
PHONE_MAX_LENGTH = 20
DOCUMENT_MAX_LENGTH = 20


def require_text(field: str, value: str | None, max_length: int) -> None:
    """Reject missing, blank, or over-long required text."""
    if value is None or not value.strip():
        raise ValidationError(field, f"{field} is required")
    check_length(field, value, max_length)


def check_length(field: str, value: str | None, max_length: int) -> None:
    """Reject optional text longer than max_length (None passes)."""
    if value is not None and len(value) > max_length:
        raise ValidationError(
            field, f"{field} must be at most {max_length} characters"
        )


def validate_email(email: str | None) -> None:
    require_text("email", email, EMAIL_MAX_LENGTH)
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("email", "email is not a valid address")


def validate_password(password: str | None) -> None:
    if password is None or len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            "password",
            f"password must be at least {PASSWORD_MIN_LENGTH} characters",
        )
    if len(password) > PASSWORD_MAX_LENGTH:
        raise ValidationError(
            "password",
            f"password must be at most {PASSWORD_MAX_LENGTH} characters",
        )


def parse_role(role: Role | str | None) -> Role:
    """Convert caller input into a Role, rejecting anything outside the set."""
    try:
        return Role(role)
    except ValueError:
        raise ValidationError("role", "role must be 'ADMIN' or 'CLIENT'") from None
