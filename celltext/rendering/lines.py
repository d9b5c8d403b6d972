#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Line Model

Runs, tagged lines and structured border lines. All widths are measured in
terminal character cells via wcwidth.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from wcwidth import wcwidth

from config.constants import (
    BORDER_HORIZONTAL,
    BORDER_JOIN_ABOVE,
    BORDER_JOIN_BELOW,
    BORDER_JOIN_CROSS,
)
from .annotations import Annotation, AnnotationSpan


Annotations = Tuple[Annotation, ...]


def char_width(ch: str) -> Optional[int]:
    """Cell width of one character, None for non-printing characters."""
    width = wcwidth(ch)
    if width < 0:
        return None
    return width


def text_width(text: str) -> int:
    """Cell width of a string; non-printing characters count as zero."""
    total = 0
    for ch in text:
        width = char_width(ch)
        if width:
            total += width
    return total


@dataclass
class Run:
    """A piece of text carrying the annotations open when it was appended."""
    text: str
    annotations: Annotations = ()

    @property
    def width(self) -> int:
        return text_width(self.text)


@dataclass(frozen=True)
class FragmentStart:
    """Zero-width marker for a named anchor."""
    name: str
    block: int = 0


LineElement = Union[Run, FragmentStart]


@dataclass
class TaggedLine:
    """An ordered sequence of runs (and fragment markers) forming one line."""
    elements: List[LineElement] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str, annotations: Annotations = ()) -> 'TaggedLine':
        line = cls()
        if text:
            line.push_str(text, annotations)
        return line

    def push_str(self, text: str, annotations: Annotations = ()):
        """Append text, merging into the last run when the tags match."""
        if not text:
            return
        last = self.elements[-1] if self.elements else None
        if isinstance(last, Run) and last.annotations == annotations:
            last.text += text
        else:
            self.elements.append(Run(text, annotations))

    def push(self, element: LineElement):
        if isinstance(element, Run):
            self.push_str(element.text, element.annotations)
        else:
            self.elements.append(element)

    def consume(self, other: 'TaggedLine'):
        """Move every element of `other` onto the end of this line."""
        for element in other.elements:
            self.push(element)
        other.elements = []

    def insert_front(self, text: str, annotations: Annotations = ()):
        if text:
            self.elements.insert(0, Run(text, annotations))

    def pad_to(self, width: int, annotations: Annotations = ()):
        missing = width - self.width
        if missing > 0:
            self.push_str(' ' * missing, annotations)

    @property
    def width(self) -> int:
        return sum(element.width for element in self.elements if isinstance(element, Run))

    @property
    def text(self) -> str:
        return ''.join(element.text for element in self.elements if isinstance(element, Run))

    def runs(self) -> Iterator[Run]:
        for element in self.elements:
            if isinstance(element, Run):
                yield element

    def fragments(self) -> Iterator[FragmentStart]:
        for element in self.elements:
            if isinstance(element, FragmentStart):
                yield element

    def is_empty(self) -> bool:
        return not self.elements

    def __str__(self) -> str:
        return self.text


class BorderSegment(Enum):
    """One cell of a horizontal border."""
    STRAIGHT = BORDER_HORIZONTAL
    JOIN_ABOVE = BORDER_JOIN_ABOVE
    JOIN_BELOW = BORDER_JOIN_BELOW
    JOIN_CROSS = BORDER_JOIN_CROSS


@dataclass
class BorderLine:
    """
    A horizontal border kept structured until finalization, so that column
    separators composed later can still draw their junctions on it.

    `indent` cells of blank space precede the segments; junction positions
    are relative to the first segment. `collapsible` marks the trailing
    border of a collapsed column composition: a following horizontal
    border merges into it.
    """
    segments: List[BorderSegment] = field(default_factory=list)
    indent: int = 0
    collapsible: bool = False

    @classmethod
    def of_width(cls, width: int, indent: int = 0) -> 'BorderLine':
        return cls([BorderSegment.STRAIGHT] * width, indent=indent)

    @property
    def width(self) -> int:
        return self.indent + len(self.segments)

    def stretch_to(self, width: int):
        if width > len(self.segments):
            self.segments.extend([BorderSegment.STRAIGHT] * (width - len(self.segments)))

    def join_above(self, x: int):
        """A vertical rule arrives at cell `x` from above."""
        self.stretch_to(x + 1)
        if self.segments[x] in (BorderSegment.STRAIGHT, BorderSegment.JOIN_ABOVE):
            self.segments[x] = BorderSegment.JOIN_ABOVE
        else:
            self.segments[x] = BorderSegment.JOIN_CROSS

    def join_below(self, x: int):
        """A vertical rule leaves cell `x` downwards."""
        self.stretch_to(x + 1)
        if self.segments[x] in (BorderSegment.STRAIGHT, BorderSegment.JOIN_BELOW):
            self.segments[x] = BorderSegment.JOIN_BELOW
        else:
            self.segments[x] = BorderSegment.JOIN_CROSS

    def merge_from_below(self, other: 'BorderLine', pos: int):
        """Fold a border sitting directly below this one (offset `pos`) into it."""
        for idx, segment in enumerate(other.segments):
            if segment in (BorderSegment.JOIN_BELOW, BorderSegment.JOIN_CROSS):
                self.join_below(idx + pos)

    def merge_from_above(self, other: 'BorderLine', pos: int):
        """Fold a border sitting directly above this one (offset `pos`) into it."""
        for idx, segment in enumerate(other.segments):
            if segment in (BorderSegment.JOIN_ABOVE, BorderSegment.JOIN_CROSS):
                self.join_above(idx + pos)

    def merge(self, other: 'BorderLine'):
        """Overlay another border occupying the same row."""
        self.stretch_to(len(other.segments))
        for idx, segment in enumerate(other.segments):
            if segment in (BorderSegment.JOIN_ABOVE, BorderSegment.JOIN_CROSS):
                self.join_above(idx)
            if segment in (BorderSegment.JOIN_BELOW, BorderSegment.JOIN_CROSS):
                self.join_below(idx)

    def rules_above(self) -> List[int]:
        """Cells where a vertical rule meets this border from above."""
        return [
            idx for idx, segment in enumerate(self.segments)
            if segment in (BorderSegment.JOIN_ABOVE, BorderSegment.JOIN_CROSS)
        ]

    @property
    def text(self) -> str:
        return ' ' * self.indent + ''.join(segment.value for segment in self.segments)

    def to_tagged_line(self, annotations: Annotations = ()) -> TaggedLine:
        return TaggedLine.from_text(self.text, annotations)

    def __str__(self) -> str:
        return self.text


RenderLine = Union[TaggedLine, BorderLine]


def as_tagged_line(line: RenderLine) -> TaggedLine:
    if isinstance(line, BorderLine):
        return line.to_tagged_line()
    return line


def annotation_spans(lines: Iterable[TaggedLine]) -> List[AnnotationSpan]:
    """
    Locate every annotation in the text the lines join into (each line
    followed by a newline). A span runs from the first to the last character
    tagged with it; annotations that never tagged any text are absent.
    """
    found: Dict[int, AnnotationSpan] = {}
    offset = 0
    for line in lines:
        for run in line.runs():
            end = offset + len(run.text)
            for annotation in run.annotations:
                span = found.get(annotation.serial)
                start = offset if span is None else span.start
                found[annotation.serial] = AnnotationSpan(
                    annotation.kind, start, end, annotation.target, annotation.serial
                )
            offset = end
        offset += 1
    return sorted(found.values(), key=lambda span: (span.start, span.serial))
