"""
Logging setup for the HostelHub API.

Modules log through ``logging.getLogger(__name__)``; this installs the one
stdout handler they all propagate to.
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the ``hostelhub`` logger hierarchy.

    Args:
        level: Level name such as "INFO" or "DEBUG"

    Returns:
        The package root logger
    """
    logger = logging.getLogger("hostelhub")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates on reload
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
