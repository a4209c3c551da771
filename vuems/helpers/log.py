"""Console reporting for module loading phases."""
from __future__ import annotations

import logging
from typing import Sequence

logger = logging.getLogger("vuems")

BORDER = "------------------------"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def log(header: str, logs: Sequence[str] | str) -> None:
    """Print a bordered header followed by one line per message."""
    logger.info(BORDER)
    logger.info("-- %s --", header)
    logger.info(BORDER)

    if isinstance(logs, str):
        logs = [logs]
    for msg in logs:
        logger.info(msg)


def configure_logging(level: str = "info") -> None:
    """Apply the configured level to the `vuems` logger tree."""
    logger.setLevel(_LEVELS.get(level, logging.INFO))
    if not logging.getLogger().handlers and not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        logger.addHandler(handler)
