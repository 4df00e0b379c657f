"""
Pydantic schemas for the public auth endpoints (register and login).

Registration accepts the optional profile fields too: when the role is
CLIENT they seed the profile created alongside the account.
"""

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    """Request body for POST /auth/register."""
    first_name: str
    last_name: str
    email: str
    password: str
    role: str
    address: str | None = None
    phone: str | None = None
    document: str | None = None


class LoginRequest(BaseModel):
    """
    Request body for POST /auth/login.

    The email is a plain string: any address registration accepted must
    be able to log in, and the service layer owns the email rules.
    """
    email: str
    password: str
