"""Core app configuration and database."""

from handover.core.config import get_settings, settings
from handover.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
