import logging
import sys
from typing import Optional


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# SQL echo and per-request access lines drown out the shopping_list.* events.
_QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")


def configure_logging(level: str = "INFO") -> None:
    """Attach one stdout handler to the root logger. Safe to call repeatedly."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if root.handlers:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "pantry")
