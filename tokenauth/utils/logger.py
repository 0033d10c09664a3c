"""Logging setup shared by all tokenauth modules."""
import logging
import sys
from typing import Optional

from tokenauth.config import config

ROOT_LOGGER = "tokenauth"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _package_logger() -> logging.Logger:
    """Package root logger; the only one that owns a handler."""
    logger = logging.getLogger(ROOT_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(_level(config.log_level))
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the ``tokenauth`` hierarchy.
    
    Module loggers carry no handler of their own; records propagate to the
    package logger, so one call to ``set_log_level`` governs all of them.
    
    Args:
        name: Logger name, typically __name__ of the calling module.
        
    Returns:
        Logger instance.
    """
    _package_logger()
    return logging.getLogger(name or ROOT_LOGGER)


def set_log_level(level: str) -> None:
    """Apply a level name such as ``DEBUG`` to every tokenauth logger.
    
    Unknown names fall back to INFO.
    """
    _package_logger().setLevel(_level(level))
