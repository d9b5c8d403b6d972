#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Word Wrapping

Turns a stream of inline text into lines no wider than the wrap width.

Words are maximal runs of non-whitespace characters and may span several
add_text() calls (so "<b>foo</b>bar" stays one word with two runs).
Whitespace only terminates words: leading and trailing whitespace
disappears and internal runs of it become a single space. A word wider
than the whole line is split at the last character cell that fits.

Preformatted text bypasses all of this and is split only on newlines.
"""

from typing import List, Optional

from celltext.contracts import InvalidWidthError
from config.constants import MIN_WIDTH
from config.logging_config import get_logger
from .lines import Annotations, FragmentStart, Run, TaggedLine, char_width

logger = get_logger(__name__)

TAB_STOP = 8


class WrappedBlock:
    """
    Wrapping buffer for one stretch of inline content.

    `textlen` counts the characters taken in so far, including the single
    spaces inserted between words.

    Usage:
        block = WrappedBlock(width=20)
        block.add_text("some inline text", annotations=())
        lines = block.take_lines()
    """

    def __init__(self, width: int):
        if width < MIN_WIDTH:
            raise InvalidWidthError(f"Cannot wrap text to width {width}", width=width)
        self.width = width
        self.text: List[TaggedLine] = []
        self.line = TaggedLine()
        self.linelen = 0
        self.word = TaggedLine()
        self.wordlen = 0
        self.spacetag: Optional[Annotations] = None
        self.textlen = 0

    def add_text(self, text: str, annotations: Annotations):
        for ch in text:
            if ch.isspace():
                self.flush_word()
                self.spacetag = annotations
                continue
            width = char_width(ch)
            if width is None:
                continue
            self.word.push_str(ch, annotations)
            self.wordlen += width
            self.textlen += 1

    def add_preformatted_text(self, text: str, annotations: Annotations):
        """Add text verbatim, breaking lines only at newlines."""
        self.flush_word()
        for ch in text:
            if ch == '\n':
                self.force_flush_line()
                continue
            if ch == '\t':
                pad = TAB_STOP - (self.linelen % TAB_STOP)
                self.line.push_str(' ' * pad, annotations)
                self.linelen += pad
                self.textlen += pad
                continue
            width = char_width(ch)
            if width is None:
                continue
            self.line.push_str(ch, annotations)
            self.linelen += width
            self.textlen += 1

    def add_marker(self, marker: FragmentStart):
        """Attach a zero-width marker to the word being built."""
        self.word.push(marker)

    def flush_word(self):
        """Place the pending word on the current line, wrapping if needed."""
        if self.wordlen > 0:
            needed = self.wordlen + (1 if self.linelen > 0 else 0)
            if needed <= self.width - self.linelen:
                if self.linelen > 0:
                    self.line.push_str(' ', self.spacetag or ())
                    self.spacetag = None
                    self.linelen += 1
                    self.textlen += 1
                self.line.consume(self.word)
                self.linelen += self.wordlen
            else:
                self.flush_line()
                if self.wordlen <= self.width:
                    self.line.consume(self.word)
                    self.linelen = self.wordlen
                else:
                    self._split_word()
        elif not self.word.is_empty():
            # Only zero-width content (markers, combining marks)
            self.line.consume(self.word)
        self.wordlen = 0

    def _split_word(self):
        """Hard-split an over-long word at character cell boundaries."""
        logger.debug(f"Splitting {self.wordlen}-cell word at width {self.width}")
        elements = self.word.elements
        self.word = TaggedLine()
        lineleft = self.width - self.linelen
        for element in elements:
            if isinstance(element, FragmentStart):
                self.line.push(element)
                continue
            remaining = element.text
            while remaining:
                run = Run(remaining, element.annotations)
                if run.width <= lineleft:
                    self.line.push(run)
                    lineleft -= run.width
                    break
                split_idx = 0
                for idx, ch in enumerate(remaining):
                    ch_width = char_width(ch) or 0
                    if ch_width > lineleft:
                        split_idx = idx
                        break
                    lineleft -= ch_width
                if split_idx == 0 and lineleft == self.width:
                    raise InvalidWidthError(
                        f"Character {remaining[0]!r} does not fit in width {self.width}",
                        width=self.width,
                    )
                self.line.push_str(remaining[:split_idx], element.annotations)
                self.text.append(self.line)
                self.line = TaggedLine()
                lineleft = self.width
                remaining = remaining[split_idx:]
        self.linelen = self.width - lineleft

    def flush_line(self):
        """End the current line if it holds any text; lone markers stay put."""
        if next(self.line.runs(), None) is not None:
            self.text.append(self.line)
            self.line = TaggedLine()
            self.linelen = 0

    def force_flush_line(self):
        """End the current line even if it is empty."""
        self.text.append(self.line)
        self.line = TaggedLine()
        self.linelen = 0

    def flush(self):
        self.flush_word()
        self.flush_line()

    def at_boundary(self) -> bool:
        """True when nothing is buffered on the current line."""
        return self.linelen == 0 and self.wordlen == 0

    def is_empty(self) -> bool:
        return not self.text and self.at_boundary()

    def take_lines(self) -> List[TaggedLine]:
        """Flush and hand over every finished line."""
        self.flush()
        lines, self.text = self.text, []
        return lines

    def take_markers(self) -> List[FragmentStart]:
        """Hand over markers left without any text to attach to."""
        markers = list(self.line.fragments())
        self.line = TaggedLine()
        return markers
