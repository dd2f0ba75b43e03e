"""Admin-only user management: list, create, delete."""

import logging

from handover.core.security import ADMIN_USERNAME, hash_password
from handover.models import User
from handover.schemas.auth import UserListItem
from handover.services.errors import (
    DuplicateUsernameError,
    MissingFieldsError,
    NotFoundError,
    ProtectedUserError,
    store_errors,
)
from handover.services.store import DuplicateKeyError, Store

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"


def list_users(store: Store) -> list[UserListItem]:
    """Return every user without password hashes."""
    with store_errors("list users"):
        users = store.list_users()
    return [UserListItem.model_validate(u) for u in users]


def create_user(
    store: Store,
    username: str | None,
    password: str | None,
    name: str | None,
    role: str | None = None,
    rounds: int | None = None,
) -> UserListItem:
    """
    Create a user with a hashed password. role defaults to 'user'. rounds overrides the
    configured bcrypt cost.

    Raises MissingFieldsError if username, password or name is absent and
    DuplicateUsernameError if the username is taken; the existing row is not changed.
    """
    if not username or not username.strip() or not password or not name or not name.strip():
        raise MissingFieldsError("Username, password and name are required.")
    username = username.strip()

    with store_errors("create user"):
        if store.find_user_by_username(username) is not None:
            raise DuplicateUsernameError()
        user = User(
            username=username,
            password_hash=hash_password(password, rounds=rounds),
            role=role or DEFAULT_ROLE,
            name=name.strip(),
        )
        try:
            store.insert_user(user)
        except DuplicateKeyError as e:
            raise DuplicateUsernameError() from e

    logger.info("Created user", extra={"username": user.username, "role": user.role})
    return UserListItem(username=user.username, role=user.role, name=user.name)


def delete_user(store: Store, username: str) -> None:
    """
    Delete a user and all of their sessions in one transaction.

    The reserved admin account can never be deleted.
    """
    if username == ADMIN_USERNAME:
        raise ProtectedUserError()

    with store_errors("delete user"):
        with store.transaction():
            sessions_deleted = store.delete_sessions_by_username(username)
            if store.delete_user(username) == 0:
                raise NotFoundError("User not found.")

    logger.info(
        "Deleted user",
        extra={"username": username, "sessions_deleted": sessions_deleted},
    )
