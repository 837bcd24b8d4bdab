"""Logging configuration for the API server and CLI tools.

Provides dual output (stdout + file) with configurable level via LOG_LEVEL env var.
Default: INFO. Set LOG_LEVEL=WARNING for production, DEBUG for verbose output.
"""

import logging
import os
import sys
from pathlib import Path

# Map string level names to logging constants
LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_level(level_str: str | None = None) -> int:
    """Resolve a logging level name.

    Args:
        level_str: Level name; falls back to the LOG_LEVEL environment variable

    Returns:
        Logging level constant (default: INFO)
    """
    if level_str is None:
        level_str = os.getenv("LOG_LEVEL", "INFO")
    return LOG_LEVEL_MAP.get(level_str.upper(), logging.INFO)


def setup_server_logging(log_file: str = "logs/server.log", level: str | None = None) -> None:
    """
    Configure root logger for the API server and CLI tools.

    Args:
        log_file: Path to log file (default: logs/server.log)
        level: Level name overriding LOG_LEVEL

    Behavior:
        - Sets up all loggers to output to both stdout and file
        - ISO format timestamps for consistency
        - Replaces previously installed root handlers
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    log_level = get_log_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove any existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(log_level)
    stdout_handler.setFormatter(formatter)
    root_logger.addHandler(stdout_handler)

    file_handler = logging.FileHandler(log_path)
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)


__all__ = ["setup_server_logging", "get_log_level"]
