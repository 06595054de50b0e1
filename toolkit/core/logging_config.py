"""
Logging for the toolkit.

Every module logs under the "toolkit" logger. The library only attaches a
NullHandler; applications that want output call setup_logging().
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional

LIBRARY_LOGGER = "toolkit"

DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_LOG_FILE = Path("logs") / "toolkit.log"

CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'

# Loggers of the libraries underneath uploads, downloads and post_json
NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "multipart", "python_multipart")

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    enable_file_logging: bool = False
) -> None:
    """
    Send toolkit and application logs to stdout, and optionally to a file.

    Replaces any handlers already on the root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ...)
        log_file: Path of the log file (defaults to logs/toolkit.log)
        enable_file_logging: Whether to also write DEBUG and above to log_file
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    root_logger.addHandler(console_handler)

    if enable_file_logging:
        path = Path(log_file) if log_file is not None else DEFAULT_LOG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a toolkit module (pass __name__)."""
    return logging.getLogger(name)
