"""Data access for users, sessions and handover documents.

Services receive a Store instead of opening database sessions themselves, so
tests can pass a double. SqlStore is the SQLAlchemy implementation; each write
commits on its own unless it runs inside transaction().
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from handover.models import Handover, LoginSession, User


class DuplicateKeyError(Exception):
    """Raised when an insert collides with an existing primary key."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class Store(Protocol):
    def find_user_by_username(self, username: str) -> User | None: ...

    def insert_user(self, user: User) -> None: ...

    def delete_user(self, username: str) -> int: ...

    def list_users(self) -> list[User]: ...

    def insert_session(self, session: LoginSession) -> None: ...

    def find_session_by_id(self, session_id: str) -> LoginSession | None: ...

    def delete_session_by_id(self, session_id: str) -> None: ...

    def delete_sessions_by_username(self, username: str) -> int: ...

    def delete_sessions_older_than(self, cutoff: datetime) -> int: ...

    def upsert_document(self, document_id: str, data: str) -> None: ...

    def find_document_by_id(self, document_id: str) -> Handover | None: ...

    def list_document_summaries(self) -> list[tuple[str, datetime]]: ...

    def transaction(self) -> AbstractContextManager[Store]: ...


class SqlStore:
    """Store backed by a single SQLAlchemy session (one per request)."""

    def __init__(self, db: Session) -> None:
        self._db = db
        self._in_transaction = False

    def _commit(self) -> None:
        if self._in_transaction:
            self._db.flush()
            return
        try:
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise

    @contextmanager
    def transaction(self) -> Iterator[SqlStore]:
        """Group several writes into one commit; any exception rolls all of them back."""
        if self._in_transaction:
            yield self
            return
        self._in_transaction = True
        try:
            yield self
            self._db.commit()
        except BaseException:
            self._db.rollback()
            raise
        finally:
            self._in_transaction = False

    # Users

    def find_user_by_username(self, username: str) -> User | None:
        return self._db.query(User).filter(User.username == username).first()

    def insert_user(self, user: User) -> None:
        self._db.add(user)
        try:
            self._commit()
        except IntegrityError as e:
            self._db.rollback()
            raise DuplicateKeyError(f"User '{user.username}' already exists.") from e

    def delete_user(self, username: str) -> int:
        deleted = (
            self._db.query(User)
            .filter(User.username == username)
            .delete(synchronize_session=False)
        )
        self._commit()
        return deleted

    def list_users(self) -> list[User]:
        return self._db.query(User).order_by(User.username).all()

    # Sessions

    def insert_session(self, session: LoginSession) -> None:
        self._db.add(session)
        self._commit()

    def find_session_by_id(self, session_id: str) -> LoginSession | None:
        return (
            self._db.query(LoginSession)
            .filter(LoginSession.session_id == session_id)
            .first()
        )

    def delete_session_by_id(self, session_id: str) -> None:
        self._db.query(LoginSession).filter(
            LoginSession.session_id == session_id
        ).delete(synchronize_session=False)
        self._commit()

    def delete_sessions_by_username(self, username: str) -> int:
        deleted = (
            self._db.query(LoginSession)
            .filter(LoginSession.username == username)
            .delete(synchronize_session=False)
        )
        self._commit()
        return deleted

    def delete_sessions_older_than(self, cutoff: datetime) -> int:
        deleted = (
            self._db.query(LoginSession)
            .filter(LoginSession.login_time < cutoff)
            .delete(synchronize_session=False)
        )
        self._commit()
        return deleted

    # Handover documents

    def upsert_document(self, document_id: str, data: str) -> None:
        """Insert or fully replace a document in one statement, refreshing last_updated."""
        now = datetime.now(UTC)
        dialect = self._db.get_bind().dialect.name
        if dialect == "postgresql":
            insert = postgresql.insert
        elif dialect == "sqlite":
            insert = sqlite.insert
        else:
            self._db.merge(Handover(id=document_id, data=data, last_updated=now))
            self._commit()
            return
        stmt = insert(Handover).values(id=document_id, data=data, last_updated=now)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Handover.id],
            set_={"data": stmt.excluded.data, "last_updated": stmt.excluded.last_updated},
        )
        self._db.execute(stmt)
        self._commit()

    def find_document_by_id(self, document_id: str) -> Handover | None:
        return self._db.query(Handover).filter(Handover.id == document_id).first()

    def list_document_summaries(self) -> list[tuple[str, datetime]]:
        rows = (
            self._db.query(Handover.id, Handover.last_updated)
            .order_by(Handover.last_updated.desc(), Handover.id)
            .all()
        )
        return [(row.id, row.last_updated) for row in rows]
