"""Logging and small helpers for Theme Studio."""

import logging
import traceback
from typing import Optional

LOGGER_NAME = "themestudio"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", log_file: Optional[str] = None,
                  console: bool = True) -> logging.Logger:
    """Setup logging configuration for Theme Studio."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


def log_exception(e: Exception, context: str = "", logger: Optional[logging.Logger] = None):
    """Log an exception with full traceback."""
    logger = logger or get_logger()
    logger.error(f"EXCEPTION in {context}: {type(e).__name__}: {str(e)}")
    logger.debug(f"Traceback:\n{traceback.format_exc()}")


def clamp(val, lo, hi):
    """Clamp a value between low and high bounds."""
    return max(lo, min(hi, val))
