"""ORM model for active login sessions."""

from sqlalchemy import Column, DateTime, String, func

from handover.models.base import Base


class LoginSession(Base):
    """
    One row per issued session token.

    role and name are copied from the user at login time and are not kept in
    sync afterwards. username is a soft reference to users.username; rows are
    removed explicitly when the user is deleted.
    """

    __tablename__ = "sessions"

    session_id = Column(String(255), primary_key=True)
    username = Column(String(255), nullable=False, index=True)
    role = Column(String(32), nullable=False)
    name = Column(String(255), nullable=False)
    login_time = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
