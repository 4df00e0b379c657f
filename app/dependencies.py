"""
FastAPI dependencies for caller identification.

There are no tokens in this API. A caller identifies themselves with HTTP
Basic credentials (email + password) on every request, and
get_caller_email() verifies them against the stored hash each time:

  no Authorization header   -> None (anonymous; every gated operation
                               is then denied as an empty result)
  valid, active credentials -> the caller's email
  anything else             -> 401 invalid_credentials

Which caller may do what is decided afterwards, in one place:
app.services.access_service.authorize().
"""

from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import InvalidCredentialsError
from app.services import auth_service


# auto_error=False: a missing header yields None instead of an automatic 401
basic_scheme = HTTPBasic(auto_error=False)


async def get_caller_email(
    credentials: HTTPBasicCredentials | None = Depends(basic_scheme),
    db: AsyncSession = Depends(get_db),
) -> str | None:
    """
    Resolve and verify the caller behind the current request.

    Returns:
        The verified caller's email, or None if no credentials were sent.

    Raises:
        InvalidCredentialsError: If credentials were sent but don't match
            an active account.
    """
    if credentials is None:
        return None

    account = await auth_service.verify_credentials(
        db, credentials.username, credentials.password
    )
    if account is None:
        raise InvalidCredentialsError()
    return account.email
