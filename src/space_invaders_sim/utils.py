"""
Space Invaders utils
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("space_invaders_sim")


def configure_logging(level: int | str = logging.DEBUG) -> logging.Logger:
    """
    Configure the root handler and return the package logger.

    :param level: Logging level, either a number or a name like "INFO"
    :type level: int | str

    :return: logging.Logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)

    return logger
