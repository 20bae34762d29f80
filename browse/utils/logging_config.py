"""Centralized logging configuration for content-browse."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logging(log_file_prefix: str = "content_browse") -> logging.Logger:
    """
    Configure logging for the application.

    Sets up both console and file logging with consistent formatting.
    Uses rotating file handler to keep at most 4 previous log files.
    Only configures if not already configured to avoid duplicate handlers.

    Args:
        log_file_prefix: Prefix for the log file name (default: "content_browse")

    Returns:
        Logger instance for the calling module
    """
    root_logger = logging.getLogger()

    # Only configure if not already configured (avoid duplicate handlers)
    if root_logger.handlers:
        return logging.getLogger(__name__)

    log_dir = Path("./logs")
    log_dir.mkdir(exist_ok=True)
    log_file = log_dir / f"{log_file_prefix}.log"

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # stdout carries the JSON printed by the sitemap and browse commands
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)

    # maxBytes=10MB per file, backupCount=4 keeps 4 backup files
    file_handler = RotatingFileHandler(
        log_file,
        mode="a",
        maxBytes=10 * 1024 * 1024,
        backupCount=4,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    return logging.getLogger(__name__)
