"""
Authentication service — credential verification and login.

There are no sessions or tokens: every gated request carries the caller's
email and password, and verify_credentials() checks them against the
stored hash each time. Verification has no side effects, so it is safe to
repeat on every call.

Security notes:
  - Login returns the same error for "wrong password", "email not found",
    and "account inactive" to prevent user enumeration
  - Plaintext passwords are only ever passed to the hash verifier
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import InvalidCredentialsError
from app.models.account import Account
from app.security import verify_password
from app.services import account_service


async def verify_credentials(
    db: AsyncSession,
    email: str,
    password: str,
) -> Account | None:
    """
    Check an email/password pair.

    Returns:
        The Account if the password matches and the account is active,
        otherwise None.
    """
    account = await account_service.get_by_email(db, email)
    if account is None:
        return None
    if not verify_password(password, account.hashed_password):
        return None
    if not account.is_active:
        return None
    return account


async def login(
    db: AsyncSession,
    email: str,
    password: str,
) -> Account:
    """
    Authenticate a caller and return their account.

    Raises:
        InvalidCredentialsError: If the email doesn't exist, the password is
            wrong, or the account is deactivated.
    """
    account = await verify_credentials(db, email, password)
    if account is None:
        raise InvalidCredentialsError()
    return account
