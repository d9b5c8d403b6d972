#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Raw Renderer

Baseline backend without any layout: inline text is concatenated, every
operation that ends a unit of output adds one space, and the result has
each run of whitespace collapsed to a single space. Block, pre-region and
annotation pairing is still checked so the contract stays testable.
"""

import re
from typing import Dict, Iterable, List

from celltext.contracts import (
    InvalidWidthError,
    UnbalancedBlockError,
    UnbalancedPreError,
)
from config.constants import MIN_WIDTH, RAW_RENDERER_WIDTH
from config.logging_config import get_logger
from .annotations import AnnotationKind, AnnotationTracker
from .base_renderer import Renderer, requires_live

logger = get_logger(__name__)

WHITESPACE_RUN = re.compile(r'\s+')


class RawRenderer(Renderer):
    """
    Renderer which outputs plain text with whitespace normalised.

    Usage:
        renderer = RawRenderer()
        renderer.add_inline_text("Hello")
        renderer.add_empty_line()
        renderer.add_inline_text("world")
        renderer.into_string()   # "Hello world"
    """

    def __init__(self, width: int = RAW_RENDERER_WIDTH):
        super().__init__()
        if isinstance(width, bool) or not isinstance(width, int) or width < MIN_WIDTH:
            raise InvalidWidthError(f"Invalid renderer width: {width!r}", width=width)
        self._width = width
        self.buffer = ''
        self._annotations = AnnotationTracker()
        self._block_depths: List[Dict[AnnotationKind, int]] = []
        self._pre_depth = 0

    def _take_buffer(self) -> str:
        if self._block_depths:
            raise UnbalancedBlockError(f"{len(self._block_depths)} block(s) still open at finalization")
        self._annotations.check_depths({}, "finalization")
        self._mark_consumed()
        buffer, self.buffer = self.buffer, ''
        return buffer

    @requires_live
    def add_empty_line(self):
        self.new_line_hard()

    @requires_live
    def new_sub_renderer(self, width: int) -> 'RawRenderer':
        return RawRenderer(width)

    @requires_live
    def start_block(self, indent: int = 0):
        self._block_depths.append(self._annotations.depths())

    @requires_live
    def end_block(self):
        if not self._block_depths:
            raise UnbalancedBlockError("end_block() called with no open block")
        self._annotations.check_depths(self._block_depths.pop(), "end_block()")

    @requires_live
    def new_line(self):
        pass

    @requires_live
    def new_line_hard(self):
        self.buffer += ' '

    @requires_live
    def add_horizontal_border(self):
        pass

    @requires_live
    def start_pre(self):
        self._pre_depth += 1

    @requires_live
    def end_pre(self):
        if self._pre_depth == 0:
            raise UnbalancedPreError("end_pre() called with no open pre region")
        self._pre_depth -= 1

    @requires_live
    def add_preformatted_block(self, text: str):
        self.add_inline_text(text)
        self.new_line_hard()

    @requires_live
    def add_inline_text(self, text: str):
        self.buffer += text

    def width(self) -> int:
        return self._width

    @requires_live
    def add_block_line(self, line: str):
        self.add_inline_text(line)
        self.new_line_hard()

    @requires_live
    def append_subrender(self, other: 'RawRenderer', prefixes: Iterable[str]):
        self._check_compatible(other)
        self.buffer += other._take_buffer()
        self.new_line_hard()

    @requires_live
    def append_columns_with_borders(self, cols: Iterable['RawRenderer'], collapse: bool):
        cols = list(cols)
        for col in cols:
            self._check_compatible(col)
        for col in cols:
            self.buffer += col._take_buffer()
            self.new_line_hard()

    def empty(self) -> bool:
        return not self.buffer

    def text_len(self) -> int:
        return len(self.buffer)

    @requires_live
    def start_link(self, target: str):
        self._annotations.start(AnnotationKind.LINK, self.text_len(), target)

    @requires_live
    def end_link(self):
        self._annotations.end(AnnotationKind.LINK, self.text_len())

    @requires_live
    def start_emphasis(self):
        self._annotations.start(AnnotationKind.EMPHASIS, self.text_len())

    @requires_live
    def end_emphasis(self):
        self._annotations.end(AnnotationKind.EMPHASIS, self.text_len())

    @requires_live
    def start_strong(self):
        self._annotations.start(AnnotationKind.STRONG, self.text_len())

    @requires_live
    def end_strong(self):
        self._annotations.end(AnnotationKind.STRONG, self.text_len())

    @requires_live
    def start_code(self):
        self._annotations.start(AnnotationKind.CODE, self.text_len())

    @requires_live
    def end_code(self):
        self._annotations.end(AnnotationKind.CODE, self.text_len())

    @requires_live
    def add_image(self, title: str):
        self.add_inline_text(title)
        self.new_line_hard()

    @requires_live
    def record_frag_start(self, fragname: str):
        pass

    @requires_live
    def into_string(self) -> str:
        """Consume the renderer; collapse every whitespace run to one space."""
        buffer = self._take_buffer()
        logger.debug(f"Raw render finished, {len(buffer)} characters before normalisation")
        return WHITESPACE_RUN.sub(' ', buffer)
