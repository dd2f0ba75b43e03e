"""SQLAlchemy ORM models."""

from handover.models.base import Base
from handover.models.handover import Handover
from handover.models.session import LoginSession
from handover.models.user import User

__all__ = ["Base", "Handover", "LoginSession", "User"]
