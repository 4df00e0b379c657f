"""
Account service — business logic for the base user identity.

This module handles:
  - Registration (validation, email uniqueness, password hashing)
  - Cascading profile creation for CLIENT registrations
  - Patch updates of name/email, password changes, activation toggling
  - Read-only lookups

Error policy:
  Mutations raise typed domain errors (ValidationError, NotFoundError,
  DuplicateEmailError). Lookups never raise on a miss; they return None
  or an empty list.

Uniqueness:
  The pre-check on email only exists to produce a clean error in the
  common case. Two concurrent registrations can both pass it, so every
  write touching the email column is flushed inside a savepoint and a
  constraint violation from the database is converted into
  DuplicateEmailError.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import AccountsAPIError, DuplicateEmailError, NotFoundError
from app.models.account import Account, Role
from app.security import hash_password
from app.services import profile_service
from app.services.validation import (
    NAME_MAX_LENGTH,
    parse_role,
    require_text,
    validate_email,
    validate_password,
)

logger = logging.getLogger(__name__)


async def _email_taken(db: AsyncSession, email: str) -> bool:
    result = await db.execute(select(Account.id).where(Account.email == email))
    return result.first() is not None


async def _save(db: AsyncSession, account: Account, email: str) -> None:
    """Flush the account in a savepoint, mapping a unique violation on email."""
    try:
        async with db.begin_nested():
            db.add(account)
            await db.flush()
    except IntegrityError:
        raise DuplicateEmailError(email) from None


async def _get_or_raise(db: AsyncSession, account_id: uuid.UUID) -> Account:
    account = await get_by_id(db, account_id)
    if account is None:
        raise NotFoundError("Account", account_id)
    return account


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

async def register(
    db: AsyncSession,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    role: Role | str,
    address: str | None = None,
    phone: str | None = None,
    document: str | None = None,
) -> Account:
    """
    Register a new account and, for CLIENT accounts, its profile.

    Fields are validated in order (first_name, last_name, email, password,
    role) and the first failure is reported.

    The profile step is best-effort. If it fails for any reason the error
    is logged and the account is still returned: nobody should be blocked
    from registering by a profile-side problem, even though that leaves a
    CLIENT account without a profile until one is created explicitly.

    Args:
        db: Database session.
        first_name / last_name: Required, at most 50 characters.
        email: Required, unique, at most 150 characters.
        password: Plaintext, 6-100 characters (hashed before storage).
        role: "ADMIN" or "CLIENT".
        address / phone / document: Optional profile fields (CLIENT only).

    Returns:
        The newly created Account.

    Raises:
        ValidationError: If any field is invalid.
        DuplicateEmailError: If the email is already registered.
    """
    require_text("first_name", first_name, NAME_MAX_LENGTH)
    require_text("last_name", last_name, NAME_MAX_LENGTH)
    validate_email(email)
    validate_password(password)
    role = parse_role(role)

    if await _email_taken(db, email):
        raise DuplicateEmailError(email)

    account = Account(
        first_name=first_name,
        last_name=last_name,
        email=email,
        hashed_password=hash_password(password),
        role=role,
        is_active=True,
    )
    await _save(db, account, email)
    logger.info("Registered account %s with role %s", account.id, role.value)

    if role is Role.CLIENT:
        try:
            # A failed flush in here only unwinds this savepoint
            async with db.begin_nested():
                await profile_service.create_with_generated_code(
                    db,
                    account_id=account.id,
                    address=address,
                    phone=phone,
                    document=document,
                )
        except (AccountsAPIError, SQLAlchemyError):
            logger.warning(
                "Profile creation failed for account %s; registration kept",
                account.id,
                exc_info=True,
            )

    return account


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

async def update_fields(
    db: AsyncSession,
    account_id: uuid.UUID,
    first_name: str | None = None,
    last_name: str | None = None,
    email: str | None = None,
) -> Account:
    """
    Patch an account's name and email.

    Only non-empty arguments are applied; None or "" leaves the field as is.
    Every supplied value is checked before any of them is assigned, so a
    rejected update changes nothing.

    Raises:
        NotFoundError: If the account doesn't exist.
        ValidationError: If a supplied value is too long or malformed.
        DuplicateEmailError: If the new email belongs to another account.
    """
    account = await _get_or_raise(db, account_id)

    if first_name:
        require_text("first_name", first_name, NAME_MAX_LENGTH)
    if last_name:
        require_text("last_name", last_name, NAME_MAX_LENGTH)
    new_email = email if email and email != account.email else None
    if new_email:
        validate_email(new_email)
        if await _email_taken(db, new_email):
            raise DuplicateEmailError(new_email)

    if not (first_name or last_name or new_email):
        return account

    if first_name:
        account.first_name = first_name
    if last_name:
        account.last_name = last_name
    if new_email:
        account.email = new_email

    await _save(db, account, account.email)
    return account


async def change_password(
    db: AsyncSession,
    account_id: uuid.UUID,
    new_password: str,
) -> Account:
    """
    Replace an account's password with a fresh hash.

    Raises:
        NotFoundError: If the account doesn't exist.
        ValidationError: If the new password is shorter than 6 characters.
    """
    account = await _get_or_raise(db, account_id)
    validate_password(new_password)

    account.hashed_password = hash_password(new_password)
    await db.flush()
    return account


async def set_active(
    db: AsyncSession,
    account_id: uuid.UUID,
    active: bool,
) -> Account:
    """Activate or deactivate an account. Either direction is always allowed."""
    account = await _get_or_raise(db, account_id)
    account.is_active = active
    await db.flush()
    return account


# ---------------------------------------------------------------------------
# Lookups (never raise on a miss)
# ---------------------------------------------------------------------------

async def get_by_id(db: AsyncSession, account_id: uuid.UUID) -> Account | None:
    result = await db.execute(select(Account).where(Account.id == account_id))
    return result.scalar_one_or_none()


async def get_by_email(db: AsyncSession, email: str) -> Account | None:
    result = await db.execute(select(Account).where(Account.email == email))
    return result.scalar_one_or_none()


async def list_by_role(db: AsyncSession, role: Role | str) -> list[Account]:
    """List accounts holding a role. An unknown role simply matches nothing."""
    try:
        role = Role(role)
    except ValueError:
        return []
    result = await db.execute(
        select(Account).where(Account.role == role).order_by(Account.created_at)
    )
    return list(result.scalars().all())


async def list_by_active(db: AsyncSession, active: bool) -> list[Account]:
    result = await db.execute(
        select(Account).where(Account.is_active == active).order_by(Account.created_at)
    )
    return list(result.scalars().all())


async def list_all(db: AsyncSession) -> list[Account]:
    result = await db.execute(select(Account).order_by(Account.created_at))
    return list(result.scalars().all())
