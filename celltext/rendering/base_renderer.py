#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Base Renderer Interface

Defines the operations a document walker drives to turn a tree of
block and inline content into text. Every backend implements all of them.

Version: 1.0.0
"""

import functools
from abc import ABC, abstractmethod
from typing import Iterable

from celltext.contracts import RendererConsumedError


def requires_live(method):
    """Reject calls on a renderer that has already been consumed."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if self._consumed:
            raise RendererConsumedError(
                f"{type(self).__name__}.{method.__name__}() called after the renderer was consumed"
            )
        return method(self, *args, **kwargs)
    return wrapper


class Renderer(ABC):
    """
    Abstract base class for text rendering backends.

    A renderer is built by a walker issuing operations in document order.
    Nested content is built out-of-line in a sub-renderer obtained from
    new_sub_renderer(); appending it (append_subrender() or
    append_columns_with_borders()) consumes it, as does finalization.

    Usage:
        renderer = TextRenderer(width=40)
        renderer.start_block()
        renderer.add_inline_text("Hello, world")
        renderer.end_block()
        text = renderer.into_string()
    """

    def __init__(self):
        self._consumed = False

    @property
    def consumed(self) -> bool:
        """True once the renderer was appended into a parent or finalized"""
        return self._consumed

    def _mark_consumed(self):
        if self._consumed:
            raise RendererConsumedError(f"{type(self).__name__} was already consumed")
        self._consumed = True

    def _check_compatible(self, other: 'Renderer'):
        if not isinstance(other, type(self)):
            raise TypeError(
                f"Cannot append {type(other).__name__} into {type(self).__name__}"
            )
        if other is self:
            raise ValueError("A renderer cannot be appended into itself")

    @abstractmethod
    def add_empty_line(self):
        """Add an empty line to the output (ie between blocks)."""
        pass

    @abstractmethod
    def new_sub_renderer(self, width: int) -> 'Renderer':
        """
        Create an independent renderer of the same kind.

        Args:
            width: Width in character cells for the new renderer

        Returns:
            Fresh renderer, to be consumed later by an append operation
        """
        pass

    @abstractmethod
    def start_block(self, indent: int = 0):
        """
        Start a new block.

        Args:
            indent: Extra indentation (cells) relative to the enclosing block
        """
        pass

    @abstractmethod
    def end_block(self):
        """Mark the end of the innermost open block."""
        pass

    @abstractmethod
    def new_line(self):
        """Start a new line, if necessary (but don't add an empty line)."""
        pass

    @abstractmethod
    def new_line_hard(self):
        """Start a new line, adding an empty one if already at a line start."""
        pass

    @abstractmethod
    def add_horizontal_border(self):
        """Add a full-width horizontal border."""
        pass

    @abstractmethod
    def start_pre(self):
        """
        Begin a preformatted region. Until the matching end_pre(),
        whitespace is kept verbatim. Pre regions can nest.
        """
        pass

    @abstractmethod
    def end_pre(self):
        """Finish a preformatted region started with start_pre()."""
        pass

    @abstractmethod
    def add_preformatted_block(self, text: str):
        """Add text verbatim (no wrapping) followed by a line break."""
        pass

    @abstractmethod
    def add_inline_text(self, text: str):
        """Add inline text, wrapped at the renderer width, to the current block."""
        pass

    @abstractmethod
    def width(self) -> int:
        """Return the configured width in character cells."""
        pass

    @abstractmethod
    def add_block_line(self, line: str):
        """Add a whole line verbatim, bypassing word wrap."""
        pass

    @abstractmethod
    def append_subrender(self, other: 'Renderer', prefixes: Iterable[str]):
        """
        Consume a sub-renderer and append its lines.

        Args:
            other: Finished sub-renderer (unusable afterwards)
            prefixes: One prefix per emitted line, in order; lines beyond
                the end of the sequence are left unprefixed
        """
        pass

    @abstractmethod
    def append_columns_with_borders(self, cols: Iterable['Renderer'], collapse: bool):
        """
        Consume sub-renderers and join them left-to-right with vertical
        rules, followed by a horizontal border.

        Args:
            cols: Finished sub-renderers, one per column
            collapse: Merge borders of the columns with the surrounding ones
                instead of stacking them
        """
        pass

    @abstractmethod
    def empty(self) -> bool:
        """Return True if nothing visible has been added."""
        pass

    @abstractmethod
    def text_len(self) -> int:
        """Return the amount of text added so far (never decreases)."""
        pass

    @abstractmethod
    def start_link(self, target: str):
        """Start a hyperlink to `target`."""
        pass

    @abstractmethod
    def end_link(self):
        """Finish the innermost open hyperlink."""
        pass

    @abstractmethod
    def start_emphasis(self):
        """Start an emphasised region."""
        pass

    @abstractmethod
    def end_emphasis(self):
        """Finish the innermost emphasised region."""
        pass

    @abstractmethod
    def start_strong(self):
        """Start a strong region."""
        pass

    @abstractmethod
    def end_strong(self):
        """Finish the innermost strong region."""
        pass

    @abstractmethod
    def start_code(self):
        """Start a code region."""
        pass

    @abstractmethod
    def end_code(self):
        """Finish the innermost code region."""
        pass

    @abstractmethod
    def add_image(self, title: str):
        """Add an image, represented by its title."""
        pass

    @abstractmethod
    def record_frag_start(self, fragname: str):
        """Record the start of a named fragment at the current position."""
        pass

    @abstractmethod
    def into_string(self) -> str:
        """Consume the renderer and return the rendered text."""
        pass

    def finalize(self):
        """Consume the renderer and return its result (the text, unless a backend has more)."""
        return self.into_string()
