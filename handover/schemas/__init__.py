"""Pydantic request/response schemas."""

from handover.schemas.auth import (
    AckResponse,
    CreateUserRequest,
    LoginRequest,
    LoginResponse,
    PublicUser,
    SessionTokenRequest,
    SessionView,
    UserListItem,
    UsersListResponse,
)
from handover.schemas.errors import ErrorResponse
from handover.schemas.handover import (
    HandoverListResponse,
    HandoverResponse,
    HandoverSummary,
)
from handover.schemas.health import HealthResponse

__all__ = [
    "AckResponse",
    "CreateUserRequest",
    "ErrorResponse",
    "HandoverListResponse",
    "HandoverResponse",
    "HandoverSummary",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "PublicUser",
    "SessionTokenRequest",
    "SessionView",
    "UserListItem",
    "UsersListResponse",
]
