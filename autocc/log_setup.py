"""Logging configuration for AutoCC."""

import logging
import sys
from logging.handlers import RotatingFileHandler
import os
from typing import Optional
from .utils import ensure_dir_exists

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - [%(threadName)s %(name)s:%(lineno)d] - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Third-party loggers that are noisy at INFO
QUIET_LOGGERS = ("urllib3", "httpx", "httpcore", "transformers", "filelock")

def setup_logging(
    log_level: int = logging.INFO,
    log_dir: Optional[str] = "logs",
    log_file: str = "autocc.log",
    max_bytes: int = 10 * 1024 * 1024, # 10 MB
    backup_count: int = 5
) -> Optional[str]:
    """
    Configures the root logger for console output and a rotating log file.

    Safe to call more than once: handlers from a previous call are replaced,
    which lets the CLI log config errors first and switch to configured
    paths afterwards.

    Args:
        log_level: The minimum logging level (e.g., logging.INFO, logging.DEBUG).
        log_dir: Directory for the log file. None disables file logging.
        log_file: The name of the log file.
        max_bytes: Maximum size of a log file before rotation.
        backup_count: Number of backup log files to keep.

    Returns:
        Path of the log file, or None when only console logging is active.
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    root.setLevel(log_level)
    formatter = logging.Formatter(DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if not log_dir:
        return None

    log_path = os.path.join(log_dir, log_file)
    try:
        ensure_dir_exists(log_dir)
        file_handler = RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8')
    except Exception as e:
        # Console logging stays usable without the file
        root.error(f"Failed to set up file logging handler at {log_path}: {e}", exc_info=True)
        return None
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
    root.info(f"Logging initialized. Log file: {log_path}")
    return log_path
