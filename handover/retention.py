"""
CLI entrypoint for the session purge job. Run from cron, e.g.:

  python -m handover.retention

Or hourly: 0 * * * * cd /path/to/handover && .venv/bin/python -m handover.retention
"""

import logging
import sys

from handover.core.config import get_settings
from handover.core.database import SessionLocal
from handover.core.logging import configure_logging
from handover.services.retention import purge_expired_sessions
from handover.services.store import SqlStore

logger = logging.getLogger(__name__)


def main() -> int:
    """Delete sessions older than SESSION_MAX_AGE_MINUTES."""
    settings = get_settings()
    configure_logging(settings)
    db = SessionLocal()
    try:
        sessions_deleted = purge_expired_sessions(SqlStore(db), settings)
        logger.info("Session purge completed: sessions_deleted=%s", sessions_deleted)
        return 0
    except Exception as e:
        logger.exception("Session purge failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
