"""
Centralized logging for Wordbank.

Every module logs through ``get_logger(__name__)``; ``setup_logging`` applies
the persisted log level (see ``BackendSettings.get_log_level``) to the
``wordbank`` and uvicorn loggers.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# HTTP and SDK chatter, shown only at debug level
NOISY_LOGGERS = ("urllib3", "requests", "google", "google_genai", "httpx", "asyncio")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def setup_logging(level: Optional["LogLevel"] = None):
    """
    (Re)configure logging for the current process.

    Args:
        level: LogLevel to apply; None reads the stored setting
    """
    from .settings import BackendSettings, LogLevel

    level = level or BackendSettings.get_log_level()
    python_level = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.NONE: logging.CRITICAL + 1,
    }.get(level, logging.INFO)

    logging.basicConfig(
        level=python_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True
    )

    for name in ("wordbank",) + SERVER_LOGGERS:
        logging.getLogger(name).setLevel(python_level)

    noisy_level = logging.DEBUG if level == LogLevel.DEBUG else logging.ERROR
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    logger.debug(f"Log level set to {level.value}")


logger = logging.getLogger("wordbank")
