"""
Rendering Module

Renderer contract plus two backends:
- TextRenderer (width-aware wrapping, blocks, tables)
- RawRenderer (whitespace-collapsing baseline)

Exports:
- Renderer, TextRenderer, RawRenderer, RenderedText
- create_renderer (backend factory)
- TaggedLine, Run, BorderLine (line model)
- AnnotationKind, Annotation, AnnotationSpan, AnnotationTracker
- FragmentRegistry, FragmentPosition
"""

from .annotations import Annotation, AnnotationKind, AnnotationSpan, AnnotationTracker
from .base_renderer import Renderer
from .columns import Column, ColumnComposer
from .factory import create_renderer
from .fragments import FragmentPosition, FragmentRegistry
from .lines import BorderLine, FragmentStart, Run, TaggedLine, text_width
from .raw_renderer import RawRenderer
from .text_renderer import RenderedText, TextRenderer
from .wrapping import WrappedBlock

__all__ = [
    'Renderer',
    'TextRenderer',
    'RawRenderer',
    'RenderedText',
    'create_renderer',
    'TaggedLine',
    'Run',
    'BorderLine',
    'FragmentStart',
    'text_width',
    'Column',
    'ColumnComposer',
    'WrappedBlock',
    'Annotation',
    'AnnotationKind',
    'AnnotationSpan',
    'AnnotationTracker',
    'FragmentPosition',
    'FragmentRegistry',
]
