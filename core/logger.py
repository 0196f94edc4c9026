import logging
import os
from logging.handlers import TimedRotatingFileHandler
import sys
from pathlib import Path

# Base logs directory (override with LOG_DIR)
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def resolve_level(level) -> int:
    """Accept either a logging constant or a level name such as "DEBUG"."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logger(logger_name: str, file_path: str, level=None) -> logging.Logger:
    """Configures a standardized logger with file and console handlers.

    The logger rotates its file daily and retains 30 days of history.

    Args:
        logger_name (str): Unique identifier for the logger (e.g., 'BumpTracker').
        file_path (str): Relative path for the log file within LOG_DIR.
                         Example: 'cogs/bump.log'.
        level (int | str, optional): The logging threshold. Defaults to the
                         LOG_LEVEL environment variable, or INFO.

    Returns:
        logging.Logger: The configured logger instance.

    Example:
        >>> logger = setup_logger("BumpTracker", "cogs/bump.log")
        >>> logger.info("Logger initialized.")
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(resolve_level(level if level is not None else os.getenv("LOG_LEVEL", "INFO")))

    # Check if handler already exists to avoid duplicate logs
    if logger.handlers:
        return logger

    full_log_path = LOG_DIR / file_path
    os.makedirs(os.path.dirname(full_log_path), exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # 1. File Handler (Timed Rotation - Daily)
    file_handler = TimedRotatingFileHandler(
        filename=full_log_path,
        when="midnight",
        interval=1,
        backupCount=30,
        encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # 2. Console Handler (Standard Output)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
