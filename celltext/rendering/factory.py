#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Renderer Factory

Picks a backend by name at construction time, with width and backend
defaults taken from RenderSettings.
"""

from typing import Dict, Optional, Type

from config.logging_config import get_logger
from config.settings import RenderSettings, get_settings
from .base_renderer import Renderer
from .raw_renderer import RawRenderer
from .text_renderer import TextRenderer

logger = get_logger(__name__)


RENDERERS: Dict[str, Type[Renderer]] = {
    'text': TextRenderer,
    'raw': RawRenderer,
}


def create_renderer(
    backend: Optional[str] = None,
    width: Optional[int] = None,
    settings: Optional[RenderSettings] = None,
) -> Renderer:
    """
    Create a top-level renderer.

    Args:
        backend: 'text' or 'raw'; defaults to settings.default_backend
        width: Width in cells; defaults to settings.default_width
        settings: Settings to read defaults from (process settings if None)

    Returns:
        New renderer instance

    Raises:
        ValueError: If the backend name is unknown
    """
    settings = settings or get_settings()
    name = (backend or settings.default_backend).lower()
    renderer_cls = RENDERERS.get(name)
    if renderer_cls is None:
        raise ValueError(f"Unknown renderer backend: {name} (expected one of {sorted(RENDERERS)})")
    width = settings.default_width if width is None else width
    logger.debug(f"Creating {renderer_cls.__name__} width={width}")
    return renderer_cls(width)
