"""
Auth router — registration and login endpoints.

These are the only public endpoints in the API. Everything else identifies
the caller through HTTP Basic credentials on each request.

Endpoints:
  POST /auth/register  — Create an account (and profile, for CLIENT)
  POST /auth/login     — Check credentials and return the account

Security notes:
  - Plaintext passwords exist only in memory during request processing;
    they are hashed before any database operation and never logged.
  - No request body logging middleware is installed, so POST bodies
    containing passwords are not written to any log file.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.account import AccountResponse
from app.schemas.auth import LoginRequest, RegisterRequest
from app.services import account_service, auth_service

router = APIRouter()


@router.post(
    "/register",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new account.

    - **first_name** / **last_name**: Required, 1-50 characters
    - **email**: Valid address, not already registered
    - **password**: 6-100 characters
    - **role**: "ADMIN" or "CLIENT"
    - **address** / **phone** / **document**: Optional; used to create the
      client profile when the role is CLIENT
    """
    return await account_service.register(
        db=db,
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password=request.password,
        role=request.role,
        address=request.address,
        phone=request.phone,
        document=request.document,
    )


@router.post(
    "/login",
    response_model=AccountResponse,
    summary="Verify credentials",
)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Check an email/password pair and return the matching account.

    No token is issued: subsequent requests send the same credentials
    with HTTP Basic authentication.
    """
    return await auth_service.login(
        db=db,
        email=request.email,
        password=request.password,
    )
