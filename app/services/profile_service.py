"""
Profile service — business logic for the client profile.

This module handles:
  - Profile creation (one per CLIENT account, unique public code)
  - Patch updates of address, phone, and identity document
  - Unique code generation ("CLI-001", "CLI-002", ...)
  - Read-only lookups

Code generation:
  Candidates come from a counter stored in the code_sequences table,
  seeded from the current profile count. A candidate already in use
  (e.g. a code inserted by hand) advances the counter. The loop is
  bounded by CODE_GENERATION_MAX_ATTEMPTS.

  The generator is optimistic: two concurrent registrations can still pick
  the same candidate. The UNIQUE constraint on profiles.code decides the
  winner, and create_with_generated_code() retries the loser with a new
  code, again within the same bound.
"""

import logging
import uuid

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import (
    CodeGenerationExhaustedError,
    DuplicateCodeError,
    DuplicateProfileError,
    NotFoundError,
    ValidationError,
)
from app.models.account import Account, Role
from app.models.profile import CodeSequence, Profile
from app.services.validation import (
    ADDRESS_MAX_LENGTH,
    CODE_MAX_LENGTH,
    DOCUMENT_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    check_length,
    require_text,
)

logger = logging.getLogger(__name__)

CODE_SEQUENCE_NAME = "profile_code"


def _format_code(counter: int) -> str:
    return f"{settings.PROFILE_CODE_PREFIX}{counter:0{settings.PROFILE_CODE_WIDTH}d}"


def _check_contact_fields(
    address: str | None,
    phone: str | None,
    document: str | None,
) -> None:
    check_length("address", address, ADDRESS_MAX_LENGTH)
    check_length("phone", phone, PHONE_MAX_LENGTH)
    check_length("document", document, DOCUMENT_MAX_LENGTH)


async def _code_in_use(db: AsyncSession, code: str) -> bool:
    result = await db.execute(select(Profile.id).where(Profile.code == code))
    return result.first() is not None


async def _account_has_profile(db: AsyncSession, account_id: uuid.UUID) -> bool:
    result = await db.execute(
        select(Profile.id).where(Profile.account_id == account_id)
    )
    return result.first() is not None


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------

async def create_profile(
    db: AsyncSession,
    account_id: uuid.UUID,
    code: str,
    address: str | None = None,
    phone: str | None = None,
    document: str | None = None,
) -> Profile:
    """
    Create the profile of a CLIENT account.

    Args:
        db: Database session.
        account_id: The owning account (must exist and hold role CLIENT).
        code: Public profile code, unique across all profiles.
        address / phone / document: Optional contact details.

    Returns:
        The newly created Profile.

    Raises:
        NotFoundError: If the account doesn't exist.
        ValidationError: If the account is not a CLIENT, the code is blank,
            or a field is too long.
        DuplicateProfileError: If the account already owns a profile.
        DuplicateCodeError: If the code is already in use.
    """
    result = await db.execute(select(Account).where(Account.id == account_id))
    account = result.scalar_one_or_none()
    if account is None:
        raise NotFoundError("Account", account_id)

    if account.role is not Role.CLIENT:
        raise ValidationError("role", "Account must have role CLIENT to own a profile")

    if await _account_has_profile(db, account_id):
        raise DuplicateProfileError(account_id)

    require_text("code", code, CODE_MAX_LENGTH)

    if await _code_in_use(db, code):
        raise DuplicateCodeError(code)

    _check_contact_fields(address, phone, document)

    profile = Profile(
        account=account,
        code=code,
        address=address,
        phone=phone,
        document=document,
    )
    try:
        async with db.begin_nested():
            db.add(profile)
            await db.flush()
    except IntegrityError:
        # Lost a race: work out which constraint fired
        taken = await db.execute(select(Profile.id).where(Profile.code == code))
        if taken.first() is not None:
            raise DuplicateCodeError(code) from None
        raise DuplicateProfileError(account_id) from None

    logger.info("Created profile %s (%s) for account %s", profile.id, code, account_id)
    return profile


async def create_with_generated_code(
    db: AsyncSession,
    account_id: uuid.UUID,
    address: str | None = None,
    phone: str | None = None,
    document: str | None = None,
) -> Profile:
    """
    Create a profile with a freshly generated code.

    Retries with a new code whenever the storage constraint rejects the
    candidate, up to CODE_GENERATION_MAX_ATTEMPTS times.

    Raises:
        CodeGenerationExhaustedError: If every attempt collided.
        (plus everything create_profile raises other than DuplicateCodeError)
    """
    attempts = settings.CODE_GENERATION_MAX_ATTEMPTS
    for _ in range(attempts):
        code = await generate_unique_code(db)
        try:
            return await create_profile(
                db,
                account_id=account_id,
                code=code,
                address=address,
                phone=phone,
                document=document,
            )
        except DuplicateCodeError:
            logger.info("Profile code %s was taken concurrently, retrying", code)
    raise CodeGenerationExhaustedError(attempts)


async def generate_unique_code(db: AsyncSession) -> str:
    """
    Produce a profile code that is not in use at call time.

    The counter starts at max(last handed-out value, profile count) + 1,
    so sequential calls never repeat a code even when none of them has
    been used to create a profile yet.

    Raises:
        CodeGenerationExhaustedError: If CODE_GENERATION_MAX_ATTEMPTS
            consecutive candidates are all taken.
    """
    total = await db.scalar(select(func.count()).select_from(Profile))
    sequence = await db.get(CodeSequence, CODE_SEQUENCE_NAME, with_for_update=True)
    if sequence is None:
        try:
            async with db.begin_nested():
                sequence = CodeSequence(name=CODE_SEQUENCE_NAME, last_value=0)
                db.add(sequence)
                await db.flush()
        except IntegrityError:
            # Another request created the row first
            sequence = await db.get(CodeSequence, CODE_SEQUENCE_NAME)

    counter = max(sequence.last_value, total) + 1
    for _ in range(settings.CODE_GENERATION_MAX_ATTEMPTS):
        code = _format_code(counter)
        if not await _code_in_use(db, code):
            sequence.last_value = counter
            await db.flush()
            return code
        logger.debug("Profile code %s already in use, advancing", code)
        counter += 1

    raise CodeGenerationExhaustedError(settings.CODE_GENERATION_MAX_ATTEMPTS)


# ---------------------------------------------------------------------------
# Updates (patch semantics)
# ---------------------------------------------------------------------------

async def update_profile(
    db: AsyncSession,
    profile_id: uuid.UUID,
    address: str | None = None,
    phone: str | None = None,
    document: str | None = None,
) -> Profile:
    """
    Patch a profile. Arguments left as None keep their stored value.

    Raises:
        NotFoundError: If the profile doesn't exist.
        ValidationError: If a supplied value is too long.
    """
    profile = await get_by_id(db, profile_id)
    if profile is None:
        raise NotFoundError("Profile", profile_id)

    _check_contact_fields(address, phone, document)

    if address is not None:
        profile.address = address
    if phone is not None:
        profile.phone = phone
    if document is not None:
        profile.document = document

    await db.flush()
    return profile


async def update_profile_by_account_id(
    db: AsyncSession,
    account_id: uuid.UUID,
    address: str | None = None,
    phone: str | None = None,
    document: str | None = None,
) -> Profile:
    """Patch the profile owned by account_id (NotFoundError if it has none)."""
    profile = await get_by_account_id(db, account_id)
    if profile is None:
        raise NotFoundError("Profile for account", account_id)
    return await update_profile(
        db, profile.id, address=address, phone=phone, document=document
    )


# ---------------------------------------------------------------------------
# Lookups (never raise on a miss)
# ---------------------------------------------------------------------------

async def get_by_id(db: AsyncSession, profile_id: uuid.UUID) -> Profile | None:
    result = await db.execute(select(Profile).where(Profile.id == profile_id))
    return result.scalar_one_or_none()


async def get_by_code(db: AsyncSession, code: str) -> Profile | None:
    result = await db.execute(select(Profile).where(Profile.code == code))
    return result.scalar_one_or_none()


async def get_by_account_id(db: AsyncSession, account_id: uuid.UUID) -> Profile | None:
    result = await db.execute(select(Profile).where(Profile.account_id == account_id))
    return result.scalar_one_or_none()


async def get_by_account_email(db: AsyncSession, email: str) -> Profile | None:
    result = await db.execute(
        select(Profile).join(Profile.account).where(Account.email == email)
    )
    return result.scalar_one_or_none()


async def list_all(db: AsyncSession) -> list[Profile]:
    result = await db.execute(select(Profile).order_by(Profile.created_at))
    return list(result.scalars().all())
