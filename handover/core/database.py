"""Database engine, session management and schema bootstrap."""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from handover.core.config import Settings, settings
from handover.core.security import ADMIN_USERNAME, hash_password
from handover.models import Base, User

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections may be shared across worker threads."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo,
        )
    return create_engine(database_url, pool_pre_ping=True, echo=echo)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


def seed_admin(db: Session, app_settings: Settings) -> bool:
    """
    Insert the reserved admin account if it does not exist yet.

    Returns True when a new row was written. An existing admin is left untouched.
    """
    if db.get(User, ADMIN_USERNAME) is not None:
        return False
    db.add(
        User(
            username=ADMIN_USERNAME,
            password_hash=hash_password(
                app_settings.ADMIN_PASSWORD.get_secret_value(),
                rounds=app_settings.BCRYPT_ROUNDS,
            ),
            role="admin",
            name=app_settings.ADMIN_NAME,
        )
    )
    try:
        db.commit()
    except IntegrityError:
        # Another process seeded it first.
        db.rollback()
        return False
    return True


def init_db(bind: Engine, app_settings: Settings) -> None:
    """Create missing tables and seed the admin account. Errors are logged, not raised."""
    try:
        Base.metadata.create_all(bind=bind)
        db = Session(bind=bind)
        try:
            if seed_admin(db, app_settings):
                logger.info("Seeded admin account '%s'", ADMIN_USERNAME)
        finally:
            db.close()
        logger.info("Database initialized successfully")
    except SQLAlchemyError:
        logger.exception("Database initialization failed")
