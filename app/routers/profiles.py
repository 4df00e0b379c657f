"""
Profiles router — client profile endpoints.

Endpoints:
  GET    /profiles                            — List all profiles       [admin]
  POST   /profiles                            — Create a profile        [admin]
  POST   /profiles/codes                      — Generate a unique code  [admin]
  GET    /profiles/by-code/{code}             — Find by code            [admin or owner]
  GET    /profiles/by-email?email=...         — Find by owner's email   [admin or owner]
  GET    /profiles/by-account/{account_id}    — Find by owning account  [admin or owner]
  PATCH  /profiles/by-account/{account_id}    — Update by owning account [admin or owner]
  GET    /profiles/{profile_id}               — Get one profile         [admin or owner]
  PATCH  /profiles/{profile_id}               — Update a profile        [admin or owner]

"Owner" means the caller is the account that owns the profile. Denied
callers get [] or null, the same answer as when nothing matches.

Static paths are declared before /{profile_id} so they are not parsed
as UUIDs.
"""

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_caller_email
from app.models.profile import Profile
from app.schemas.profile import (
    GeneratedCodeResponse,
    ProfileCreateRequest,
    ProfileResponse,
    ProfileUpdateRequest,
)
from app.services import profile_service
from app.services.access_service import Decision, Operation, authorize

router = APIRouter()


async def _visible(
    db: AsyncSession,
    caller: str | None,
    profile: Profile | None,
) -> Profile | None:
    """Return the profile if the caller may read it, otherwise None."""
    owner_id = profile.account_id if profile is not None else None
    if await authorize(db, caller, Operation.READ_PROFILE, owner_id) is Decision.DENY_AS_EMPTY:
        return None
    return profile


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="[Admin] List all profiles",
)
async def list_profiles(
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    if await authorize(db, caller, Operation.LIST_PROFILES) is Decision.DENY_AS_EMPTY:
        return []
    return await profile_service.list_all(db)


@router.post(
    "",
    response_model=ProfileResponse | None,
    status_code=status.HTTP_201_CREATED,
    summary="[Admin] Create a profile",
)
async def create_profile(
    request: ProfileCreateRequest,
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    """
    Create the profile of an existing CLIENT account with an explicit code.

    Fails with 404 if the account doesn't exist, 422 if it isn't a CLIENT
    or the code is blank, and 409 if the account already has a profile or
    the code is taken.
    """
    if await authorize(db, caller, Operation.CREATE_PROFILE) is Decision.DENY_AS_EMPTY:
        return None
    return await profile_service.create_profile(
        db,
        account_id=request.account_id,
        code=request.code,
        address=request.address,
        phone=request.phone,
        document=request.document,
    )


@router.post(
    "/codes",
    response_model=GeneratedCodeResponse | None,
    summary="[Admin] Generate a unique profile code",
)
async def generate_code(
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    if await authorize(db, caller, Operation.GENERATE_CODE) is Decision.DENY_AS_EMPTY:
        return None
    return GeneratedCodeResponse(code=await profile_service.generate_unique_code(db))


@router.get(
    "/by-code/{code}",
    response_model=ProfileResponse | None,
    summary="Find a profile by code",
)
async def get_profile_by_code(
    code: str,
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    return await _visible(db, caller, await profile_service.get_by_code(db, code))


@router.get(
    "/by-email",
    response_model=ProfileResponse | None,
    summary="Find a profile by its owner's email",
)
async def get_profile_by_email(
    email: str = Query(...),
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    return await _visible(db, caller, await profile_service.get_by_account_email(db, email))


@router.get(
    "/by-account/{account_id}",
    response_model=ProfileResponse | None,
    summary="Find a profile by owning account",
)
async def get_profile_by_account(
    account_id: uuid.UUID,
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    return await _visible(db, caller, await profile_service.get_by_account_id(db, account_id))


@router.patch(
    "/by-account/{account_id}",
    response_model=ProfileResponse | None,
    summary="Update the profile of an account",
)
async def update_profile_by_account(
    account_id: uuid.UUID,
    updates: ProfileUpdateRequest,
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    """Patch the profile owned by account_id. Omitted fields stay unchanged."""
    if await authorize(db, caller, Operation.UPDATE_PROFILE, account_id) is Decision.DENY_AS_EMPTY:
        return None
    return await profile_service.update_profile_by_account_id(
        db,
        account_id,
        address=updates.address,
        phone=updates.phone,
        document=updates.document,
    )


@router.get(
    "/{profile_id}",
    response_model=ProfileResponse | None,
    summary="Get a profile",
)
async def get_profile(
    profile_id: uuid.UUID,
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    return await _visible(db, caller, await profile_service.get_by_id(db, profile_id))


@router.patch(
    "/{profile_id}",
    response_model=ProfileResponse | None,
    summary="Update a profile",
)
async def update_profile(
    profile_id: uuid.UUID,
    updates: ProfileUpdateRequest,
    caller: str | None = Depends(get_caller_email),
    db: AsyncSession = Depends(get_db),
):
    """
    Patch a profile's address, phone, and/or document.

    Only fields present in the body are applied; an explicit null is
    treated the same as an omitted field.
    """
    profile = await profile_service.get_by_id(db, profile_id)
    owner_id = profile.account_id if profile is not None else None
    if await authorize(db, caller, Operation.UPDATE_PROFILE, owner_id) is Decision.DENY_AS_EMPTY:
        return None
    return await profile_service.update_profile(
        db,
        profile_id,
        address=updates.address,
        phone=updates.phone,
        document=updates.document,
    )
