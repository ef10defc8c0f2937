"""Pydantic schemas for the login endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field

from geckotrack.domain.models import UserRole


class LoginRequest(BaseModel):
    """Any non-empty password is accepted; there is no credential check."""

    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)


class IdentityResponse(BaseModel):
    username: str
    name: str
    role: UserRole
