"""
Accounts router — account lookup and maintenance endpoints.

Endpoints:
  GET    /accounts                      — List all accounts (?role= filter) [admin]
  GET    /accounts/by-email?email=...   — Find an account by email   [admin or owner]
  GET    /accounts/{account_id}         — Get one account            [admin or owner]
  PATCH  /accounts/{account_id}         — Update name/email          [admin or owner]
  PUT    /accounts/{account_id}/password — Change password           [admin or owner]
  PUT    /accounts/{account_id}/active  — Activate/deactivate        [admin]

Every endpoint asks access_service.authorize() first. A denied caller gets
[] from list endpoints and null from single-item endpoints, never a 403.
"""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_caller_email
from app.models.account import Role
from app.schemas.account import (
    AccountResponse,
    AccountUpdateRequest,
    ActiveStateRequest,
    PasswordChangeRequest,
)
from app.services import account_service
from app.services.access_service import Decision, Operation, authorize

router = APIRouter()


@router.get(
    "",
    response_model=list[AccountResponse],
    summary="[Admin] List accounts",
)
async def list_accounts(
    role: Role | None = Query(None, description="Only accounts with this role"),
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    """List every account, optionally filtered by role."""
    if await authorize(db, caller, Operation.LIST_ACCOUNTS) is Decision.DENY_AS_EMPTY:
        return []
    if role is not None:
        return await account_service.list_by_role(db, role)
    return await account_service.list_all(db)


@router.get(
    "/by-email",
    response_model=AccountResponse | None,
    summary="Find an account by email",
)
async def get_account_by_email(
    email: str = Query(...),
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    account = await account_service.get_by_email(db, email)
    owner_id = account.id if account is not None else None
    if await authorize(db, caller, Operation.READ_ACCOUNT, owner_id) is Decision.DENY_AS_EMPTY:
        return None
    return account


@router.get(
    "/{account_id}",
    response_model=AccountResponse | None,
    summary="Get an account",
)
async def get_account(
    account_id: uuid.UUID,
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    """
    Return one account. Admins can read any account, clients only their own.

    Returns null both when the account doesn't exist and when the caller
    isn't allowed to see it.
    """
    if await authorize(db, caller, Operation.READ_ACCOUNT, account_id) is Decision.DENY_AS_EMPTY:
        return None
    return await account_service.get_by_id(db, account_id)


@router.patch(
    "/{account_id}",
    response_model=AccountResponse | None,
    summary="Update account fields",
)
async def update_account(
    account_id: uuid.UUID,
    updates: AccountUpdateRequest,
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    """
    Update first name, last name, and/or email.

    Only provided, non-empty fields are updated. This is the PATCH
    semantic: partial updates.
    """
    if await authorize(db, caller, Operation.UPDATE_ACCOUNT, account_id) is Decision.DENY_AS_EMPTY:
        return None
    return await account_service.update_fields(
        db,
        account_id,
        first_name=updates.first_name,
        last_name=updates.last_name,
        email=updates.email,
    )


@router.put(
    "/{account_id}/password",
    response_model=AccountResponse | None,
    summary="Change password",
)
async def change_password(
    account_id: uuid.UUID,
    request: PasswordChangeRequest,
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    if await authorize(db, caller, Operation.CHANGE_PASSWORD, account_id) is Decision.DENY_AS_EMPTY:
        return None
    return await account_service.change_password(db, account_id, request.new_password)


@router.put(
    "/{account_id}/active",
    response_model=AccountResponse | None,
    summary="[Admin] Activate or deactivate an account",
)
async def set_active(
    account_id: uuid.UUID,
    request: ActiveStateRequest,
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    if await authorize(db, caller, Operation.SET_ACTIVE, account_id) is Decision.DENY_AS_EMPTY:
        return None
    return await account_service.set_active(db, account_id, request.active)
