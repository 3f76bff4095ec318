"""
Logging setup shared by the API, the services and the maintenance scripts.
Console output plus a rotating log file under settings.LOG_DIR.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from parking_manager.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that drown out the parking logs at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "multipart", "httpx")

_configured = False


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)

    if settings.LOG_DIR:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        # 10 × 5MB files, oldest dropped first
        file_handler = RotatingFileHandler(
            filename=os.path.join(settings.LOG_DIR, settings.LOG_FILE),
            maxBytes=5 * 1024 * 1024,
            backupCount=10,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Named logger for a module: `logger = get_logger(__name__)`."""
    _configure_root_logger()
    return logging.getLogger(name)
