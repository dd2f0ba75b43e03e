"""Session retention: delete sessions older than SESSION_MAX_AGE_MINUTES."""

import logging
from datetime import datetime, timezone, timedelta
from typing import TYPE_CHECKING

from handover.services.store import Store

if TYPE_CHECKING:
    from handover.core.config import Settings

logger = logging.getLogger(__name__)


def purge_expired_sessions(store: Store, settings: "Settings") -> int:
    """
    Delete sessions whose login_time is older than SESSION_MAX_AGE_MINUTES.

    Returns the number of sessions deleted. Does nothing when no maximum age is
    configured, since sessions then live until logout. Idempotent.
    """
    if settings.SESSION_MAX_AGE_MINUTES is None:
        logger.info("Session expiry is disabled (SESSION_MAX_AGE_MINUTES unset); skipping.")
        return 0

    cutoff = datetime.now(timezone.utc) - timedelta(minutes=settings.SESSION_MAX_AGE_MINUTES)
    deleted_count = store.delete_sessions_older_than(cutoff)

    if deleted_count > 0:
        logger.info(
            "Session purge: cutoff=%s, sessions_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
