"""
Centralized logging configuration shared by both services.
"""
import logging
import sys
from typing import Optional

from shared.core.config import settings

LOG_FORMAT = "%(levelname)-8s [%(asctime)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_level: Optional[str] = None):
    """
    Configure the root logger with a console handler.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Falls back to
            ``settings.LOG_LEVEL``.
    """
    level_name = (log_level or settings.LOG_LEVEL or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Avoid stacking handlers when both apps run in one process
    for handler in root_logger.handlers:
        if getattr(handler, "_asset_tracker", False):
            return root_logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    console_handler._asset_tracker = True
    root_logger.addHandler(console_handler)

    # SQL echo is far too noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return root_logger
