"""
Profile model — the client-specific record owned by a CLIENT account.

A Profile stores contact and identity details (address, phone, identity
document) and a public code such as "CLI-001".

One-to-one with Account:
  The account_id column has a UNIQUE constraint, so each Account owns at
  most one Profile. Together with the UNIQUE constraint on code, this is
  what actually guarantees uniqueness when requests race each other.

The owning account is loaded eagerly (lazy="joined") because every
profile response embeds it, and async sessions cannot lazy-load.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.account import Account


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    # UNIQUE enforces the one-to-one relationship
    account_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accounts.id"),
        unique=True,
        nullable=False,
        index=True,
    )

    code: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
    )

    address: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
    )

    phone: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
    )

    # National ID, tax number, etc.
    document: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
    )

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

    # --- Relationships ---
    # No back_populates: Account does not reference its profile
    account: Mapped[Account] = relationship(lazy="joined")


class CodeSequence(Base):
    """
    Storage-side counter backing profile code generation.

    Keeping the counter in the database (rather than in the process) means
    every worker sees the same sequence and consecutive calls to the
    generator never hand out the same candidate twice.
    """
    __tablename__ = "code_sequences"

    name: Mapped[str] = mapped_column(
        String(50),
        primary_key=True,
    )

    last_value: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
