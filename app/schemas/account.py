"""
Pydantic schemas for Account endpoints.

Field rules (lengths, email shape, password length, role values) are
enforced in the service layer so that every entry point gets the same
ValidationError. These request models only describe the shape of the body.

Notice that hashed_password is NEVER included in any response schema.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel

from app.models.account import Role


class AccountResponse(BaseModel):
    """Public representation of an Account (never includes the password hash)."""
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    role: Role
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class AccountUpdateRequest(BaseModel):
    """Request body for PATCH /accounts/{id} (all fields optional)."""
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None


class PasswordChangeRequest(BaseModel):
    """Request body for PUT /accounts/{id}/password."""
    new_password: str


class ActiveStateRequest(BaseModel):
    """Request body for PUT /accounts/{id}/active."""
    active: bool
