"""Logging configuration for worship-log.

Every CLI invocation appends to one log file in the configured log
directory, keeping console output for the user.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILENAME = "worship_log.log"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s"


def setup_logging(
    log_dir: Path,
    level: int = logging.DEBUG,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """Set up application logging to a size-rotated file.

    Calling this again replaces the previous file handler.

    Args:
        log_dir: Directory to store log files
        level: Minimum level written to the log file
        max_bytes: Size at which worship_log.log rolls over to .1
        backup_count: Number of rolled-over files to keep

    Returns:
        Configured "worship_log" logger
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME

    logger = logging.getLogger("worship_log")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(file_handler)

    logger.debug(f"Log file: {log_file}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance under the "worship_log" namespace
    """
    if name.startswith("worship_log"):
        return logging.getLogger(name)
    return logging.getLogger(f"worship_log.{name}")
