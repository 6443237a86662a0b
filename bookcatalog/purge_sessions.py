"""
CLI entrypoint for the expired-session purge job. Run from cron, e.g.:

  python -m bookcatalog.purge_sessions

Or hourly: 0 * * * * cd /path/to/bookcatalog && .venv/bin/python -m bookcatalog.purge_sessions
"""

import logging
import sys

from bookcatalog.core.config import get_settings
from bookcatalog.core.database import SessionLocal
from bookcatalog.core.errors import StorageError
from bookcatalog.services.sessions import SessionManager

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Delete sessions whose sliding expiry has passed."""
    db = SessionLocal()
    try:
        deleted = SessionManager(db, get_settings()).purge_expired()
        logger.info("Session purge completed: sessions_deleted=%s", deleted)
        return 0
    except StorageError as e:
        logger.exception("Session purge failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
