"""Login, logout and session validation."""

import logging
from datetime import UTC, datetime, timedelta

from handover.core.security import (
    USERNAME_MAX_LEN,
    dummy_password_hash,
    new_session_token,
    verify_password,
)
from handover.models import LoginSession
from handover.schemas.auth import LoginResponse, PublicUser, SessionView
from handover.services.errors import (
    InvalidCredentialsError,
    InvalidSessionError,
    MissingFieldsError,
    NoSessionError,
    store_errors,
)
from handover.services.store import Store

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite returns naive datetimes; they are written in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Authenticator:
    """Verifies credentials against the user store and mints sessions."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def login(self, username: str | None, password: str | None) -> LoginResponse:
        """
        Verify username/password and create a new session.

        Unknown usernames and wrong passwords raise the same InvalidCredentialsError,
        and both paths run one bcrypt comparison.
        """
        if not username or not username.strip() or not password:
            raise MissingFieldsError("Username and password are required.")
        username = username.strip()

        user = None
        # No stored username is longer than the column allows; skip the lookup.
        if len(username) <= USERNAME_MAX_LEN:
            with store_errors("login lookup"):
                user = self.store.find_user_by_username(username)

        if user is None:
            verify_password(password, dummy_password_hash())
            logger.info("Login failed", extra={"username": username})
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            logger.info("Login failed", extra={"username": username})
            raise InvalidCredentialsError()

        session = LoginSession(
            session_id=new_session_token(),
            username=user.username,
            role=user.role,
            name=user.name,
            login_time=datetime.now(UTC),
        )
        with store_errors("session insert"):
            self.store.insert_session(session)

        logger.info("Login succeeded", extra={"username": user.username, "role": user.role})
        return LoginResponse(
            session_id=session.session_id,
            user=PublicUser(username=user.username, role=user.role, name=user.name),
        )

    def logout(self, session_id: str | None) -> None:
        """Delete the session if it exists. Unknown or blank tokens are not an error."""
        if not session_id or not session_id.strip():
            return
        with store_errors("logout"):
            self.store.delete_session_by_id(session_id.strip())


class SessionValidator:
    """Resolves a session token to a read-only view of the session."""

    def __init__(self, store: Store, max_age_minutes: int | None = None) -> None:
        self.store = store
        self.max_age_minutes = max_age_minutes

    def validate(self, session_id: str | None) -> SessionView:
        if not session_id or not session_id.strip():
            raise NoSessionError()

        with store_errors("session lookup"):
            session = self.store.find_session_by_id(session_id.strip())
        if session is None:
            raise InvalidSessionError()

        if self.max_age_minutes is not None:
            age = datetime.now(UTC) - _as_utc(session.login_time)
            if age > timedelta(minutes=self.max_age_minutes):
                raise InvalidSessionError()

        return SessionView(
            username=session.username,
            role=session.role,
            name=session.name,
            login_time=session.login_time,
        )
