"""Logging configuration for latphys."""

import logging
import sys

LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}


def setup_logging(level: str = "INFO", format_type: str = "structured") -> logging.Logger:
    """
    Attach a stdout handler to the 'latphys' logger.

    Parameters
    ----------
    level : str, optional
        Level name, case-insensitive. Unknown names fall back to INFO.
    format_type : str, optional
        'structured' (timestamp, logger name, level) or anything else for a
        short 'LEVEL - message' format

    Returns
    -------
    logger : logging.Logger
        The configured 'latphys' logger
    """
    log_level = LEVEL_MAP.get(level.upper(), logging.INFO)

    if format_type == "structured":
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    else:
        formatter = logging.Formatter(
            '%(levelname)s - %(message)s'
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logger = logging.getLogger('latphys')
    logger.setLevel(log_level)
    # Replace handlers from earlier calls, keep the NullHandler
    for old in list(logger.handlers):
        if not isinstance(old, logging.NullHandler):
            logger.removeHandler(old)
    logger.addHandler(handler)

    return logger
