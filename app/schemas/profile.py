"""
Pydantic schemas for Profile endpoints.

The response embeds the owning account through AccountResponse, so the
password hash is excluded here as well.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel

from app.schemas.account import AccountResponse


class ProfileResponse(BaseModel):
    """Public representation of a Profile and its owning account."""
    id: uuid.UUID
    code: str
    address: str | None
    phone: str | None
    document: str | None
    created_at: datetime
    account: AccountResponse

    model_config = {"from_attributes": True}


class ProfileCreateRequest(BaseModel):
    """Request body for POST /profiles."""
    account_id: uuid.UUID
    code: str
    address: str | None = None
    phone: str | None = None
    document: str | None = None


class ProfileUpdateRequest(BaseModel):
    """Request body for PATCH /profiles/... (omitted fields stay unchanged)."""
    address: str | None = None
    phone: str | None = None
    document: str | None = None


class GeneratedCodeResponse(BaseModel):
    """Response body for POST /profiles/codes."""
    code: str
