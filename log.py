"""Logging setup for the lookup service, plus small structured helpers"""

import logging
import os
from datetime import datetime
from functools import wraps
from pathlib import Path


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/app.log")

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

logger = logging.getLogger("lexicon_lookup")


def _configure(target: logging.Logger, log_file: str, level: str) -> logging.Logger:
    """Attach the file and console handlers once per process"""
    target.setLevel(getattr(logging, level.upper(), logging.INFO))
    if target.handlers:
        return target

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    # Full detail goes to the file, the console only gets INFO and up
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    target.addHandler(file_handler)
    target.addHandler(console_handler)
    return target


_configure(logger, LOG_FILE, LOG_LEVEL)


def log_error(error_type: str, message: str, details: dict = None):
    """Log error with structured format"""
    error_info = {
        "timestamp": datetime.now().isoformat(),
        "error_type": error_type,
        "details": details or {}
    }
    logger.error(f"{error_type}: {message}", extra=error_info)


def log_info(message: str, details: dict = None):
    """Log info message"""
    logger.info(message, extra={"details": details or {}})


def log_warning(message: str, details: dict = None):
    """Log warning message"""
    logger.warning(message, extra={"details": details or {}})


def log_debug(message: str, details: dict = None):
    """Log debug message, file handler only"""
    logger.debug(message, extra={"details": details or {}})


def log_exception(func):
    """
    Decorator for lookup operations: any exception escaping the wrapped
    function is logged with the call arguments, then re-raised
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            log_error(
                error_type=type(e).__name__,
                message=str(e),
                details={
                    "function": func.__name__,
                    "args": str(args),
                    "kwargs": str(kwargs)
                }
            )
            raise
    return wrapper


__all__ = ['logger', 'log_error', 'log_info', 'log_warning', 'log_debug', 'log_exception']
