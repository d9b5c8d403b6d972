#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Text Renderer

The layout backend: wraps inline text to a fixed cell width, keeps a
stack of (optionally indented) blocks, handles preformatted regions,
merges sub-renderers line by line or side by side as table columns, and
tracks annotations and fragment anchors on the runs it emits.

Version: 1.0.0
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional

from celltext.contracts import (
    InvalidWidthError,
    UnbalancedBlockError,
    UnbalancedPreError,
)
from config.constants import DEFAULT_WIDTH, MIN_WIDTH
from config.logging_config import get_logger
from .annotations import AnnotationKind, AnnotationSpan, AnnotationTracker
from .base_renderer import Renderer, requires_live
from .columns import Column, ColumnComposer
from .fragments import FragmentRegistry
from .lines import (
    BorderLine,
    FragmentStart,
    RenderLine,
    TaggedLine,
    annotation_spans,
    as_tagged_line,
)
from .wrapping import WrappedBlock

logger = get_logger(__name__)


@dataclass
class _BlockFrame:
    """State captured when a block opens, checked when it closes."""
    indent: int
    pre_depth: int
    annotation_depths: Dict[AnnotationKind, int] = field(default_factory=dict)


@dataclass
class RenderedText:
    """Finalized output of a TextRenderer; span offsets index into `text`."""
    lines: List[TaggedLine]
    fragments: FragmentRegistry
    spans: List[AnnotationSpan]

    @property
    def text(self) -> str:
        return ''.join(line.text + '\n' for line in self.lines)

    def __str__(self) -> str:
        return self.text


class TextRenderer(Renderer):
    """
    Width-constrained text layout backend.

    Usage:
        renderer = TextRenderer(width=30)
        renderer.start_block()
        renderer.add_inline_text("Some text that is long enough to wrap.")
        renderer.end_block()
        print(renderer.into_string())
    """

    def __init__(self, width: int = DEFAULT_WIDTH):
        """
        Initialize renderer.

        Args:
            width: Output width in character cells

        Raises:
            InvalidWidthError: If width is not a positive integer
        """
        super().__init__()
        if isinstance(width, bool) or not isinstance(width, int) or width < MIN_WIDTH:
            raise InvalidWidthError(f"Invalid renderer width: {width!r}", width=width)
        self._width = width
        self.lines: List[RenderLine] = []
        # True right after end_block(): the next visible text starts a
        # blank-line separated region and whitespace is dropped.
        self._at_block_end = False
        self._wrapping: Optional[WrappedBlock] = None
        self._annotations = AnnotationTracker()
        self._pre_depth = 0
        self._blocks: List[_BlockFrame] = []
        self._blocks_started = 0
        self._pending_markers: List[FragmentStart] = []
        self._text_len = 0

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @property
    def _indent(self) -> int:
        return self._blocks[-1].indent if self._blocks else 0

    def _ensure_wrapping(self) -> WrappedBlock:
        if self._wrapping is None:
            self._wrapping = WrappedBlock(self._width - self._indent)
            for marker in self._pending_markers:
                self._wrapping.add_marker(marker)
            self._pending_markers = []
        return self._wrapping

    def _flush_wrapping(self):
        if self._wrapping is None:
            return
        wrapping, self._wrapping = self._wrapping, None
        lines = wrapping.take_lines()
        self._text_len += wrapping.textlen
        self._pending_markers.extend(wrapping.take_markers())
        for line in lines:
            self._push_line(line)

    def _push_line(self, line: RenderLine):
        """Append a line at the current indentation."""
        indent = self._indent
        if isinstance(line, BorderLine):
            line.indent += indent
        else:
            if indent and not line.is_empty():
                line.insert_front(' ' * indent)
            if self._pending_markers:
                line.elements[0:0] = self._pending_markers
                self._pending_markers = []
        self.lines.append(line)

    def _last_line_blank(self) -> bool:
        last = self.lines[-1] if self.lines else None
        return isinstance(last, TaggedLine) and last.text == ''

    def _separate_from_previous(self):
        """Leave a blank line before new block content, unless one is there."""
        self._flush_wrapping()
        if self.lines and not self._last_line_blank():
            self.lines.append(TaggedLine())
        self._at_block_end = False

    def _start_unwrapped(self):
        """Flush inline text; right after a block, open a separated region."""
        if self._at_block_end:
            self._separate_from_previous()
        else:
            self._flush_wrapping()

    def _take_merged_lines(self, other: 'TextRenderer') -> List[RenderLine]:
        """Consume `other`; its anchors count the blocks started here before it."""
        base = self._blocks_started
        lines = other._take_lines()
        if base:
            for line in lines:
                if isinstance(line, TaggedLine):
                    line.elements = [
                        replace(element, block=element.block + base)
                        if isinstance(element, FragmentStart) else element
                        for element in line.elements
                    ]
        self._blocks_started += other._blocks_started
        return lines

    def _take_lines(self) -> List[RenderLine]:
        """
        Flush everything, check that all scopes are closed and consume.

        Raises:
            UnbalancedBlockError, UnbalancedPreError, UnbalancedAnnotationError
        """
        if self._blocks:
            raise UnbalancedBlockError(f"{len(self._blocks)} block(s) still open at finalization")
        if self._pre_depth:
            raise UnbalancedPreError(f"{self._pre_depth} pre region(s) still open at finalization")
        self._annotations.check_depths({}, "finalization")
        self._flush_wrapping()
        if self._pending_markers:
            target = next((line for line in reversed(self.lines) if isinstance(line, TaggedLine)), None)
            if target is None:
                target = TaggedLine()
                self.lines.append(target)
            target.elements.extend(self._pending_markers)
            self._pending_markers = []
        self._mark_consumed()
        lines, self.lines = self.lines, []
        logger.debug(f"TextRenderer width={self._width} consumed with {len(lines)} lines")
        return lines

    # ------------------------------------------------------------------
    # Block structure
    # ------------------------------------------------------------------

    @requires_live
    def add_empty_line(self):
        self._flush_wrapping()
        self.lines.append(TaggedLine())
        self._at_block_end = False

    @requires_live
    def new_sub_renderer(self, width: int) -> 'TextRenderer':
        return TextRenderer(width)

    @requires_live
    def start_block(self, indent: int = 0):
        if indent < 0:
            raise InvalidWidthError(f"Negative block indentation: {indent}", width=self._width)
        total = self._indent + indent
        if total >= self._width:
            raise InvalidWidthError(
                f"Indentation {total} leaves no room in width {self._width}",
                width=self._width - total,
            )
        self._flush_wrapping()
        if self.lines and not self._last_line_blank():
            self.add_empty_line()
        self._blocks.append(_BlockFrame(
            indent=total,
            pre_depth=self._pre_depth,
            annotation_depths=self._annotations.depths(),
        ))
        self._blocks_started += 1
        self._at_block_end = False
        logger.debug(f"start_block depth={len(self._blocks)} indent={total}")

    @requires_live
    def end_block(self):
        if not self._blocks:
            raise UnbalancedBlockError("end_block() called with no open block")
        frame = self._blocks[-1]
        if self._pre_depth != frame.pre_depth:
            raise UnbalancedPreError(
                f"Block closed with {self._pre_depth - frame.pre_depth} pre region(s) still open"
            )
        self._annotations.check_depths(frame.annotation_depths, "end_block()")
        self._flush_wrapping()
        self._blocks.pop()
        self._at_block_end = True
        logger.debug(f"end_block depth={len(self._blocks)}")

    @requires_live
    def new_line(self):
        self._flush_wrapping()

    @requires_live
    def new_line_hard(self):
        if self._wrapping is None or self._wrapping.at_boundary():
            self.add_empty_line()
        else:
            self._flush_wrapping()

    @requires_live
    def add_horizontal_border(self):
        self._start_unwrapped()
        available = self._width - self._indent
        last = self.lines[-1] if self.lines else None
        if isinstance(last, BorderLine) and last.collapsible and last.indent == self._indent:
            last.merge(BorderLine.of_width(available))
            last.collapsible = False
            return
        self._push_line(BorderLine.of_width(available))
        self._text_len += available

    # ------------------------------------------------------------------
    # Preformatted text
    # ------------------------------------------------------------------

    @requires_live
    def start_pre(self):
        self._pre_depth += 1

    @requires_live
    def end_pre(self):
        floor = self._blocks[-1].pre_depth if self._blocks else 0
        if self._pre_depth <= floor:
            raise UnbalancedPreError("end_pre() called with no open pre region")
        self._pre_depth -= 1

    @requires_live
    def add_preformatted_block(self, text: str):
        self._start_unwrapped()
        pieces = text.split('\n')
        if len(pieces) > 1 and pieces[-1] == '':
            pieces.pop()
        tag = self._annotations.active()
        for piece in pieces:
            piece = piece.expandtabs()
            self._push_line(TaggedLine.from_text(piece, tag))
            self._text_len += len(piece)

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    @requires_live
    def add_inline_text(self, text: str):
        if not text:
            return
        if self._pre_depth == 0 and self._at_block_end and text.isspace():
            # Whitespace between blocks
            return
        if self._at_block_end:
            self._separate_from_previous()
        wrapping = self._ensure_wrapping()
        if self._pre_depth == 0:
            wrapping.add_text(text, self._annotations.active())
        else:
            wrapping.add_preformatted_text(text, self._annotations.active())

    def width(self) -> int:
        return self._width

    @requires_live
    def add_block_line(self, line: str):
        self._start_unwrapped()
        tag = self._annotations.active()
        for piece in line.split('\n'):
            self._push_line(TaggedLine.from_text(piece, tag))
            self._text_len += len(piece)

    # ------------------------------------------------------------------
    # Sub-renderers
    # ------------------------------------------------------------------

    @requires_live
    def append_subrender(self, other: 'TextRenderer', prefixes: Iterable[str]):
        self._check_compatible(other)
        if isinstance(prefixes, str):
            raise TypeError("prefixes must be a sequence of strings, not a single string")
        self._start_unwrapped()
        sub_lines = self._take_merged_lines(other)
        tag = self._annotations.active()
        prefix_iter = iter(prefixes)
        for line in sub_lines:
            prefix = next(prefix_iter, None)
            if isinstance(line, BorderLine) and not prefix:
                self._push_line(line)
                self._text_len += line.width
                continue
            line = as_tagged_line(line)
            if prefix:
                line.insert_front(prefix, tag)
            self._push_line(line)
            self._text_len += len(line.text)
        logger.debug(f"Appended {len(sub_lines)} sub-render lines")

    @requires_live
    def append_columns_with_borders(self, cols: Iterable['TextRenderer'], collapse: bool):
        cols = list(cols)
        for col in cols:
            self._check_compatible(col)
        if len({id(col) for col in cols}) != len(cols):
            raise ValueError("The same renderer was passed as more than one column")
        self._start_unwrapped()

        columns = [Column(col.width(), self._take_merged_lines(col)) for col in cols]
        composer = ColumnComposer(columns, collapse, self._annotations.active())
        available = self._width - self._indent
        if composer.total_width > available:
            logger.warning(
                f"Columns need {composer.total_width} cells but only {available} are available"
            )

        last = self.lines[-1] if self.lines else None
        previous = last if isinstance(last, BorderLine) and last.indent == self._indent else None
        for row in composer.compose(previous):
            self._push_line(row)
            self._text_len += len(row.text)

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    def empty(self) -> bool:
        return not self.lines and (self._wrapping is None or self._wrapping.is_empty())

    def text_len(self) -> int:
        pending = self._wrapping.textlen if self._wrapping is not None else 0
        return self._text_len + pending

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------

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
        self._annotations.start(AnnotationKind.IMAGE, self.text_len(), title)
        self.add_inline_text(title)
        self._annotations.end(AnnotationKind.IMAGE, self.text_len())

    @requires_live
    def record_frag_start(self, fragname: str):
        marker = FragmentStart(fragname, self._blocks_started)
        if self._wrapping is not None and not self._at_block_end:
            self._wrapping.add_marker(marker)
        else:
            self._pending_markers.append(marker)

    # ------------------------------------------------------------------
    # Finalization
    # ------------------------------------------------------------------

    def spans(self) -> List[AnnotationSpan]:
        """Annotation spans closed so far, in text_len() positions."""
        return list(self._annotations.spans)

    @requires_live
    def into_lines(self) -> List[TaggedLine]:
        """Consume the renderer and return its lines, borders drawn as text."""
        return [as_tagged_line(line) for line in self._take_lines()]

    @requires_live
    def into_string(self) -> str:
        return ''.join(line.text + '\n' for line in self.into_lines())

    @requires_live
    def into_rendered_text(self) -> RenderedText:
        """Consume the renderer; return lines, text, fragments and spans."""
        lines = [as_tagged_line(line) for line in self._take_lines()]
        return RenderedText(lines, FragmentRegistry.from_lines(lines), annotation_spans(lines))
