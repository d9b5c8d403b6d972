"""
Logging configuration for the renderer packages.

Handlers live on the package root logger ('celltext') only; module loggers
are its children and propagate to it, so each record is written once.
The root level comes from RenderSettings.log_level (CELLTEXT_LOG_LEVEL or
.env), the optional log file from CELLTEXT_LOG_FILE.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from .constants import (
    LOG_FORMAT, LOG_FILE,
    LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT
)
from .settings import get_settings

ROOT_LOGGER = 'celltext'


def _attach_handlers(root: logging.Logger):
    formatter = logging.Formatter(LOG_FORMAT)

    # Console: only anomalies, rendering is chatty at DEBUG
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(formatter)
    root.addHandler(console)

    # Rotating file: everything, when a path is configured
    if LOG_FILE:
        Path(LOG_FILE).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            LOG_FILE,
            maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
            backupCount=LOG_BACKUP_COUNT
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def setup_logger(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the package root logger and return it.

    Handlers are attached on the first call only; the level is applied on
    every call so it can be changed at runtime.

    Args:
        level: Level name such as 'DEBUG'. Defaults to the settings value.

    Returns:
        The 'celltext' logger.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        _attach_handlers(root)
    level_name = (level or get_settings().log_level).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger for a module, placed under the package root logger.

    Usage:
        from config.logging_config import get_logger
        logger = get_logger(__name__)
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        setup_logger()
    if not name or name == ROOT_LOGGER:
        return root
    if not name.startswith(ROOT_LOGGER + '.'):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


# Usage: from config.logging_config import logger
logger = get_logger()
