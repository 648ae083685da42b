"""
logging_setup.py

Configures the root logger with a console handler and a size-rotated log
file. Modules log through child loggers of PACKAGE_LOGGER_NAME and inherit
these handlers.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
MAX_LOG_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3


def setup_logging(
    log_dir: str = "log",
    log_file_name: str = "environment_exporter.log",
    log_level: str = "INFO",
) -> logging.Logger:
    """
    Configure the root logger and return it.

    Calling this more than once replaces the level but never stacks
    duplicate handlers.

    Args:
        log_dir: Directory for the log file; created if missing.
        log_file_name: Name of the rotating log file inside log_dir.
        log_level: Level name such as "DEBUG" or "INFO".
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.abspath(os.path.join(log_dir, log_file_name))

    root = logging.getLogger()
    root.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT)

    has_console = any(
        type(h) is logging.StreamHandler for h in root.handlers
    )
    has_file = any(
        isinstance(h, RotatingFileHandler) and h.baseFilename == log_path
        for h in root.handlers
    )

    if not has_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if not has_file:
        file_handler = RotatingFileHandler(
            log_path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root
