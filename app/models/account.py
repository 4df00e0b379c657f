"""
Account model — the base user identity.

Each Account holds a login credential (email + hashed password), a role,
and an activation flag. Accounts with the CLIENT role usually own a
Profile (see app/models/profile.py), but the Account itself carries no
reference to it: the profile is found with a reverse query on
profiles.account_id.

Roles:
  - ADMIN: can list and read every account and profile
  - CLIENT: can only read and update their own records

The password is stored as an Argon2id hash — never in plaintext.
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Role(str, enum.Enum):
    """
    Closed set of roles an account can hold.

    Inherits from str so the value serializes naturally to JSON and is
    stored as a simple string in the database.
    """
    ADMIN = "ADMIN"
    CLIENT = "CLIENT"

    @classmethod
    def _missing_(cls, value):
        # Accept "admin"/"client" and the legacy "CLIENTE"; anything else is rejected
        if isinstance(value, str):
            name = value.strip().upper()
            return cls.__members__.get(ROLE_ALIASES.get(name, name))
        return None


# Role names stored by the previous system, mapped onto the current ones
ROLE_ALIASES = {
    "CLIENTE": "CLIENT",
}


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    first_name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    last_name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    # Login identifier — the UNIQUE constraint is the authoritative guard
    email: Mapped[str] = mapped_column(
        String(150),
        unique=True,
        nullable=False,
        index=True,
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    role: Mapped[Role] = mapped_column(
        Enum(Role),
        nullable=False,
        index=True,
    )

    # Deactivated accounts can't authenticate but their data is preserved
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    # Set once at insert; no operation writes it afterwards
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
