# ============================================================================
# FILE: listenqueue/core/logging.py
# ============================================================================
import logging
import sys
from typing import Optional
from listenqueue.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False

def setup_logging(log_level: Optional[str] = None) -> None:
    """
    Configure the root logger once for the whole application
    Every module logs through logging.getLogger(__name__)
    """
    global _configured
    if _configured:
        return

    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stdout, level=level)

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _configured = True
