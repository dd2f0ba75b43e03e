"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Column, DateTime, String, func

from handover.models.base import Base


class User(Base):
    """
    User account for session authentication and role-based access control.

    role: 'admin' or 'user'
    """

    __tablename__ = "users"

    username = Column(String(255), primary_key=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user", server_default="user")
    name = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
