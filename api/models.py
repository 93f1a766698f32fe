"""
API request and response models for the user management REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py, which
own the internal domain representation. Route handlers map between the two.

Password hashes never appear in any response model.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from auth.models import PublicIdentity, Session

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class RoleEnum(str, Enum):
    admin = "admin"
    user = "user"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Request body for POST /api/v1/auth/login."""

    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)


class SignupRequest(BaseModel):
    """Request body for POST /api/v1/auth/signup.

    There is no role field: self-registered accounts are always "user".
    """

    email: str = Field(min_length=1, max_length=255)
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class SessionResponse(BaseModel):
    """The visitor's session snapshot."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    role: RoleEnum

    @classmethod
    def from_session(cls, session: Session) -> "SessionResponse":
        return cls(id=session.id, username=session.username, role=session.role)


class IdentityResponse(BaseModel):
    """One identity as shown to admins."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    email: str
    role: RoleEnum

    @classmethod
    def from_public(cls, identity: PublicIdentity) -> "IdentityResponse":
        return cls(id=identity.id, username=identity.username, email=identity.email, role=identity.role)


class LandingResponse(BaseModel):
    """Response for GET /api/v1/auth/landing.

    all_users is present only for admin sessions.
    """

    model_config = ConfigDict(frozen=True)

    user: SessionResponse
    all_users: Optional[list[IdentityResponse]] = None


class MessageResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
    users: int
