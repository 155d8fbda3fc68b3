"""
Logging configuration for the viewer package.
"""

from __future__ import annotations

import logging
import sys
from typing import Union

PACKAGE_LOGGER = "src"


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Configure the package logger with a single stdout handler.

    Streamlit re-executes the script on every interaction, so existing
    handlers are cleared to avoid duplicate lines.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )
    logger.addHandler(handler)
    return logger
