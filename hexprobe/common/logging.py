# hexprobe/common/logging.py
from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = "hexprobe", level: int | str | None = None) -> logging.Logger:
    """
    Return a named logger. The root handler is configured once, on first use,
    so library callers that already set up logging keep their own handlers.
    When no level is given the configured ``log_level`` setting applies.
    """
    if level is None:
        from hexprobe.common.settings import get_settings
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=level, format=_FORMAT)
    logger.setLevel(level)
    return logger
