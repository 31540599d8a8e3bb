"""Logging configuration for the projectile_motion package.

A single pre-configured logger is shared by every module. Console output is
enabled at INFO level; file logging at DEBUG level can be switched on while
investigating a session:

    from projectile_motion.logger import enable_file_logging, logger

    enable_file_logging("session.log")
    logger.debug("trajectory details")
"""
import logging
from typing import Optional

__all__ = ('logger',
           'enable_file_logging',
           'disable_file_logging',
)

formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")
console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)
console_handler.setLevel(logging.INFO)

logger: logging.Logger = logging.getLogger('projectile_motion')
logger.addHandler(console_handler)
logger.setLevel(logging.INFO)

# Added dynamically by enable_file_logging
file_handler: Optional[logging.FileHandler] = None


def enable_file_logging(filename: str = "projectile_motion.log") -> None:
    """Log DEBUG and above to ``filename``, replacing any previous file handler."""
    global file_handler
    if file_handler is not None:
        disable_file_logging()

    file_handler = logging.FileHandler(filename)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
    logger.addHandler(file_handler)
    logger.setLevel(logging.DEBUG)


def disable_file_logging() -> None:
    """Remove and close the file handler. Safe to call when none is active."""
    global file_handler
    if file_handler is not None:
        logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None
        logger.setLevel(logging.INFO)
