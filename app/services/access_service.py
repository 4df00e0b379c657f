"""
Access service — role/ownership predicates and the authorization policy.

Everything here is derived from account lookups; nothing is ever written.

Policy:
  Every gated operation goes through authorize(), which looks the
  operation up in a single table:

    ADMIN_ONLY       — caller must hold role ADMIN
    ADMIN_OR_OWNER   — caller must be ADMIN or own the target account

  A denial is not an error. authorize() returns Decision.DENY_AS_EMPTY and
  the router answers with an empty list or null, exactly as if nothing
  matched. Callers therefore cannot tell "forbidden" from "not found",
  which avoids leaking whether a record exists.
"""

import enum
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.account import Role
from app.services import account_service


class Decision(str, enum.Enum):
    ALLOW = "allow"
    DENY_AS_EMPTY = "deny_as_empty"


class Operation(str, enum.Enum):
    """Every operation the request layer gates."""
    LIST_ACCOUNTS = "list_accounts"
    READ_ACCOUNT = "read_account"
    UPDATE_ACCOUNT = "update_account"
    CHANGE_PASSWORD = "change_password"
    SET_ACTIVE = "set_active"
    LIST_PROFILES = "list_profiles"
    READ_PROFILE = "read_profile"
    CREATE_PROFILE = "create_profile"
    UPDATE_PROFILE = "update_profile"
    GENERATE_CODE = "generate_code"


ADMIN_ONLY = frozenset({
    Operation.LIST_ACCOUNTS,
    Operation.SET_ACTIVE,
    Operation.LIST_PROFILES,
    Operation.CREATE_PROFILE,
    Operation.GENERATE_CODE,
})

ADMIN_OR_OWNER = frozenset({
    Operation.READ_ACCOUNT,
    Operation.UPDATE_ACCOUNT,
    Operation.CHANGE_PASSWORD,
    Operation.READ_PROFILE,
    Operation.UPDATE_PROFILE,
})


async def has_role(db: AsyncSession, email: str, role: Role | str) -> bool:
    """True if an account with this email exists and holds the role."""
    account = await account_service.get_by_email(db, email)
    if account is None:
        return False
    try:
        return account.role is Role(role)
    except ValueError:
        return False


async def is_owner(db: AsyncSession, email: str, target_account_id: uuid.UUID) -> bool:
    """True if the account with this email is the target account."""
    account = await account_service.get_by_email(db, email)
    if account is None:
        return False
    return account.id == target_account_id


async def authorize(
    db: AsyncSession,
    caller_email: str | None,
    operation: Operation,
    owner_id: uuid.UUID | None = None,
) -> Decision:
    """
    Decide whether caller_email may perform operation.

    Args:
        db: Database session.
        caller_email: The verified caller, or None for anonymous requests.
        operation: The gated operation.
        owner_id: Account that owns the target record, for
            ADMIN_OR_OWNER operations. None means no such record exists,
            in which case only an admin is allowed through.

    Returns:
        Decision.ALLOW or Decision.DENY_AS_EMPTY.
    """
    if caller_email is None:
        return Decision.DENY_AS_EMPTY

    if await has_role(db, caller_email, Role.ADMIN):
        return Decision.ALLOW

    if operation in ADMIN_ONLY or owner_id is None:
        return Decision.DENY_AS_EMPTY

    if operation in ADMIN_OR_OWNER and await is_owner(db, caller_email, owner_id):
        return Decision.ALLOW

    return Decision.DENY_AS_EMPTY
