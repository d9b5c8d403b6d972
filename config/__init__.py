"""
Configuration module for the cell text renderer.
"""
from .constants import *
from .logging_config import setup_logger, get_logger, logger
from .settings import RenderSettings, get_settings

__all__ = [
    # Logging
    'setup_logger',
    'get_logger',
    'logger',
    # Settings
    'RenderSettings',
    'get_settings',
    # Constants (all exported via *)
]
