"""Logging configuration.

Configures the root logger once so every module can log through
``logging.getLogger(__name__)``.
"""

import logging

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure application logging.

    Safe to call more than once; only the first call installs handlers.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG".
    """
    global _configured
    if _configured:
        return

    logging.basicConfig(level=level, format=LOG_FORMAT)
    # SQLAlchemy echoes every statement at INFO; keep it quiet by default
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True
