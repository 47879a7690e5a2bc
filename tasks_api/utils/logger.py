"""
utils/logger.py
---------------
Root logger setup for the service. `create_app` calls `configure_logging`
once with the configured level; modules log through `get_logger(__name__)`.
"""

import logging
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_handler: logging.Handler | None = None


def configure_logging(level: str = "INFO") -> None:
    """
    Install the stdout handler on the root logger and set its level.

    Calling it again only changes the level.
    """
    global _handler
    root = logging.getLogger()
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        root.addHandler(_handler)
    root.setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    return logging.getLogger(name)
