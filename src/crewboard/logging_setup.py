"""Console logging setup for the command-line tool.

Library modules only create loggers; handlers are attached here.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Args:
        verbose: If True, log at DEBUG; otherwise WARNING and above.

    Returns:
        The configured "crewboard" logger.
    """
    logger = logging.getLogger("crewboard")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Avoid adding handlers multiple times
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
