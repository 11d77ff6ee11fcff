# ============================================================================
# FILE: app/core/logging.py
# ============================================================================
import logging
from app.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False

def setup_logging(level: str = None) -> None:
    """Configure the root logger once for the whole application"""
    global _configured
    if _configured:
        return

    log_level = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    # SQL echo is noisy, keep it behind DEBUG
    if not settings.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True
    logging.getLogger(__name__).debug(f"Logging configured at {log_level}")
