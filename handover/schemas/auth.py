"""Request/response schemas for auth and user management endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from handover.core.security import NAME_MAX_LEN, USERNAME_MAX_LEN

Role = Literal["admin", "user"]


class LoginRequest(BaseModel):
    """Credentials for login. Presence is checked by the service so a missing field maps to 400."""

    username: str | None = Field(default=None, description="Username")
    password: str | None = Field(default=None, description="Password")


class SessionTokenRequest(BaseModel):
    """Optional body carrier for a session token (logout and validate)."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(
        default=None,
        alias="sessionId",
        description="Session token; the Authorization or X-Session-Id header may be used instead.",
    )


class PublicUser(BaseModel):
    """Public view of a user: no password hash."""

    username: str
    role: Role
    name: str

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Session token returned after successful login."""

    session_id: str = Field(..., description="Opaque session token")
    user: PublicUser


class SessionView(BaseModel):
    """Read-only projection of a session, attached to the request as the current identity."""

    username: str
    role: Role
    name: str
    login_time: datetime

    class Config:
        from_attributes = True


class AckResponse(BaseModel):
    success: bool = True


class CreateUserRequest(BaseModel):
    """Body for POST /users (admin only). role defaults to 'user'."""

    username: str | None = Field(default=None, max_length=USERNAME_MAX_LEN)
    password: str | None = None
    name: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    role: Role | None = None


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    username: str
    role: Role
    name: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserListItem]
