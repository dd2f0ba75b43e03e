"""Unit tests for handover.services.auth: login, logout and session validation against a mock store."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from handover.core.security import hash_password
from handover.models import LoginSession, User
from handover.services.auth import Authenticator, SessionValidator
from handover.services.errors import (
    InternalError,
    InvalidCredentialsError,
    InvalidSessionError,
    MissingFieldsError,
    NoSessionError,
)


def _user(
    username: str = "alice",
    password: str = "pw1",
    role: str = "user",
    name: str = "Alice",
) -> User:
    """Build a transient User with a low-cost bcrypt hash."""
    return User(
        username=username,
        password_hash=hash_password(password, rounds=4),
        role=role,
        name=name,
    )


def _session(
    session_id: str = "tok",
    login_time: datetime | None = None,
    **kwargs: object,
) -> LoginSession:
    defaults = {"username": "alice", "role": "user", "name": "Alice"}
    defaults.update(kwargs)
    return LoginSession(
        session_id=session_id,
        login_time=login_time or datetime.now(UTC),
        **defaults,
    )


def _store_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestLogin(unittest.TestCase):
    """Authenticator.login verifies credentials and stores a role/name snapshot."""

    def test_success_creates_session_with_snapshot(self) -> None:
        store = MagicMock()
        store.find_user_by_username.return_value = _user(role="admin", name="Boss")
        result = Authenticator(store).login("alice", "pw1")

        store.insert_session.assert_called_once()
        session = store.insert_session.call_args.args[0]
        self.assertEqual(session.session_id, result.session_id)
        self.assertEqual(session.username, "alice")
        self.assertEqual(session.role, "admin")
        self.assertEqual(session.name, "Boss")
        self.assertIsNotNone(session.login_time)
        self.assertEqual(result.user.username, "alice")
        self.assertEqual(result.user.role, "admin")
        self.assertEqual(result.user.name, "Boss")

    def test_each_login_gets_a_new_token(self) -> None:
        store = MagicMock()
        store.find_user_by_username.return_value = _user()
        auth = Authenticator(store)
        self.assertNotEqual(auth.login("alice", "pw1").session_id, auth.login("alice", "pw1").session_id)

    def test_unknown_user_and_wrong_password_are_indistinguishable(self) -> None:
        store = MagicMock()
        store.find_user_by_username.return_value = None
        with self.assertRaises(InvalidCredentialsError) as unknown:
            Authenticator(store).login("nobody", "pw1")

        store.find_user_by_username.return_value = _user()
        with self.assertRaises(InvalidCredentialsError) as wrong:
            Authenticator(store).login("alice", "wrongpw")

        self.assertEqual(unknown.exception.kind, wrong.exception.kind)
        self.assertEqual(unknown.exception.message, wrong.exception.message)
        self.assertEqual(unknown.exception.status_code, 401)
        self.assertEqual(wrong.exception.status_code, 401)
        store.insert_session.assert_not_called()

    def test_missing_fields(self) -> None:
        store = MagicMock()
        for username, password in [(None, "pw"), ("alice", None), ("  ", "pw"), ("alice", "")]:
            with self.assertRaises(MissingFieldsError):
                Authenticator(store).login(username, password)
        store.find_user_by_username.assert_not_called()

    def test_overlong_username_is_invalid_credentials(self) -> None:
        store = MagicMock()
        with self.assertRaises(InvalidCredentialsError):
            Authenticator(store).login("g" * 300, "pw1")
        store.find_user_by_username.assert_not_called()
        store.insert_session.assert_not_called()

    def test_store_failure_on_lookup(self) -> None:
        store = MagicMock()
        store.find_user_by_username.side_effect = _store_error()
        with self.assertRaises(InternalError) as ctx:
            Authenticator(store).login("alice", "pw1")
        self.assertNotIn("connection refused", ctx.exception.message)
        store.insert_session.assert_not_called()

    def test_store_failure_on_insert_returns_no_session(self) -> None:
        store = MagicMock()
        store.find_user_by_username.return_value = _user()
        store.insert_session.side_effect = _store_error()
        with self.assertRaises(InternalError):
            Authenticator(store).login("alice", "pw1")


class TestLogout(unittest.TestCase):
    """Authenticator.logout is idempotent."""

    def test_deletes_session(self) -> None:
        store = MagicMock()
        Authenticator(store).logout("tok")
        store.delete_session_by_id.assert_called_once_with("tok")

    def test_blank_token_is_a_no_op(self) -> None:
        store = MagicMock()
        Authenticator(store).logout(None)
        Authenticator(store).logout("   ")
        store.delete_session_by_id.assert_not_called()

    def test_store_failure(self) -> None:
        store = MagicMock()
        store.delete_session_by_id.side_effect = _store_error()
        with self.assertRaises(InternalError):
            Authenticator(store).logout("tok")


class TestValidate(unittest.TestCase):
    """SessionValidator.validate resolves tokens without mutating sessions."""

    def test_no_session(self) -> None:
        store = MagicMock()
        for token in (None, "", "   "):
            with self.assertRaises(NoSessionError):
                SessionValidator(store).validate(token)
        store.find_session_by_id.assert_not_called()

    def test_unknown_session(self) -> None:
        store = MagicMock()
        store.find_session_by_id.return_value = None
        with self.assertRaises(InvalidSessionError):
            SessionValidator(store).validate("tok")

    def test_returns_projection(self) -> None:
        login_time = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
        store = MagicMock()
        store.find_session_by_id.return_value = _session(login_time=login_time)
        view = SessionValidator(store).validate("tok")
        self.assertEqual(view.username, "alice")
        self.assertEqual(view.role, "user")
        self.assertEqual(view.name, "Alice")
        self.assertEqual(view.login_time, login_time)
        store.insert_session.assert_not_called()
        store.delete_session_by_id.assert_not_called()

    def test_old_sessions_never_expire_by_default(self) -> None:
        store = MagicMock()
        store.find_session_by_id.return_value = _session(
            login_time=datetime.now(UTC) - timedelta(days=365)
        )
        self.assertEqual(SessionValidator(store).validate("tok").username, "alice")

    def test_max_age_rejects_old_sessions(self) -> None:
        store = MagicMock()
        store.find_session_by_id.return_value = _session(
            login_time=datetime.now(UTC) - timedelta(minutes=61)
        )
        with self.assertRaises(InvalidSessionError):
            SessionValidator(store, max_age_minutes=60).validate("tok")

    def test_max_age_accepts_naive_utc_timestamps(self) -> None:
        store = MagicMock()
        naive_now = datetime.now(UTC).replace(tzinfo=None)
        store.find_session_by_id.return_value = _session(login_time=naive_now)
        self.assertEqual(SessionValidator(store, max_age_minutes=60).validate("tok").name, "Alice")


if __name__ == "__main__":
    unittest.main()
