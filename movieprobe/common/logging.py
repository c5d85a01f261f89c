# movieprobe/common/logging.py
from __future__ import annotations

import logging

from movieprobe.common.settings import get_settings


def get_logger(name: str = "movieprobe", level: int | str | None = None) -> logging.Logger:
    """
    Return the package logger, at the configured LOG_LEVEL unless given one.
    If no handlers are set anywhere, we add a basicConfig once.
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(level)
    return logger
