"""
celltext - render nested block/inline document content to fixed-width text.
"""

from .contracts import RenderContractError
from .rendering import RawRenderer, Renderer, TextRenderer, create_renderer

__version__ = "1.0.0"

__all__ = [
    'RenderContractError',
    'Renderer',
    'TextRenderer',
    'RawRenderer',
    'create_renderer',
]
