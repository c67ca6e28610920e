"""
Logging setup for the ``beadwheels`` logger namespace.
"""

import logging

LOGGER_NAME = "beadwheels"
LOG_FORMAT = "[%(levelname)s][%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a console handler once and set the package log level."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))
    return logger
