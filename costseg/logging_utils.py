"""
Cost Segregation - Logging Framework

Provides centralized logging with:
- Console output for development
- File logging with rotation for the API service
- Performance timing utilities
"""

import logging
import sys
import time
from pathlib import Path
from logging.handlers import RotatingFileHandler
from functools import wraps
from typing import Optional, Callable, Any, Union

LOG_FILE_NAME = "costseg.log"


_LEVELS_BY_NAME = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def parse_level(level: Union[int, str]) -> int:
    """Log level from an int or a level name; unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    return _LEVELS_BY_NAME.get(str(level).strip().upper(), logging.INFO)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_to_file: bool = False,
    log_dir: str = "logs",
    max_bytes: int = 5_000_000,  # 5MB
    backup_count: int = 3
) -> None:
    """
    Configure global logging settings.

    Args:
        level: Minimum log level (int or name such as "DEBUG")
        log_to_file: Whether to write logs to file
        log_dir: Directory for log files
        max_bytes: Max size per log file before rotation
        backup_count: Number of backup files to keep
    """
    level = parse_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_format = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(console_format)
    root_logger.addHandler(console_handler)

    # File handler with rotation
    if log_to_file:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path / LOG_FILE_NAME,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setLevel(level)
        file_format = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_format)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Handlers are left to setup_logging(); library modules only name their
    logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


# ==============================================================================
# PERFORMANCE TIMING
# ==============================================================================

def timed(func: Callable) -> Callable:
    """
    Decorator to log function execution time at DEBUG level.

    Usage:
        @timed
        def my_function():
            ...
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        logger = get_logger(func.__module__)
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start
        logger.debug(f"{func.__name__} completed in {elapsed * 1000:.1f}ms")
        return result
    return wrapper


# ==============================================================================
# ERROR LOGGING
# ==============================================================================

def log_error(
    error: Exception,
    context: str,
    logger_name: Optional[str] = None
) -> str:
    """
    Log an error with context and return a user-friendly message.

    Args:
        error: The exception that occurred
        context: What was happening when the error occurred
        logger_name: Optional logger name

    Returns:
        User-friendly error message (without internal details)
    """
    logger = get_logger(logger_name or "costseg.error")
    logger.error(f"{context}: {type(error).__name__}: {str(error)}", exc_info=True)

    return f"An error occurred while {context}. Please try again."
