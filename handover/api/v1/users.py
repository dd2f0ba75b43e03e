"""User management endpoints (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from handover.api.v1.auth import get_store, require_admin
from handover.core.config import Settings, get_settings
from handover.schemas.auth import (
    AckResponse,
    CreateUserRequest,
    SessionView,
    UserListItem,
    UsersListResponse,
)
from handover.services import users as user_service
from handover.services.store import Store

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[SessionView, Depends(require_admin)],
    store: Annotated[Store, Depends(get_store)],
) -> UsersListResponse:
    """List all users without password hashes."""
    return UsersListResponse(users=user_service.list_users(store))


@router.post("", response_model=UserListItem, status_code=status.HTTP_201_CREATED)
def create_user(
    body: CreateUserRequest,
    _admin: Annotated[SessionView, Depends(require_admin)],
    store: Annotated[Store, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserListItem:
    """Create a user. role defaults to 'user'; 409 if the username exists."""
    return user_service.create_user(
        store,
        username=body.username,
        password=body.password,
        name=body.name,
        role=body.role,
        rounds=settings.BCRYPT_ROUNDS,
    )


@router.delete("/{username}", response_model=AckResponse)
def delete_user(
    username: str,
    _admin: Annotated[SessionView, Depends(require_admin)],
    store: Annotated[Store, Depends(get_store)],
) -> AckResponse:
    """Delete a user and end all of their sessions. The admin account cannot be deleted."""
    user_service.delete_user(store, username)
    return AckResponse()
