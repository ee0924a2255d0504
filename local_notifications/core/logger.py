"""
Logging setup.

Every module logs through a named stdlib logger sharing one format.
"""

import logging
import sys

from local_notifications.core.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """Return a named logger with a single stream handler attached."""
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
        log.propagate = False
    log.setLevel(get_settings().LOG_LEVEL.upper())
    return log


logger = setup_logger("local_notifications")
