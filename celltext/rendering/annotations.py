#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Annotation Span Tracking

Keeps one LIFO stack per inline category (link, emphasis, strong, code,
image). Categories are independent of each other: a link may close while
an emphasis opened inside it is still open. Within one category opens and
closes must pair up.

Tracker positions are in text_len() units of the owning renderer. Every
annotation carries a serial that is unique across renderers, so runs merged
from sub-renderers keep telling their spans apart.
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from celltext.contracts import UnbalancedAnnotationError

_serials = itertools.count(1)


class AnnotationKind(Enum):
    """Inline markup categories."""
    LINK = "link"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    CODE = "code"
    IMAGE = "image"


@dataclass(frozen=True)
class Annotation:
    """An open inline marker; `target` is the link href or image title."""
    kind: AnnotationKind
    target: Optional[str] = None
    serial: int = 0


@dataclass(frozen=True)
class AnnotationSpan:
    """A closed annotation covering [start, end) of the emitted text."""
    kind: AnnotationKind
    start: int
    end: int
    target: Optional[str] = None
    serial: int = 0


@dataclass
class _OpenSpan:
    serial: int
    annotation: Annotation
    start: int


@dataclass
class AnnotationTracker:
    """
    Per-renderer annotation state.

    Usage:
        tracker = AnnotationTracker()
        tracker.start(AnnotationKind.LINK, position=0, target="https://a")
        tracker.active()           # (Annotation(LINK, "https://a"),)
        tracker.end(AnnotationKind.LINK, position=5)
    """
    spans: List[AnnotationSpan] = field(default_factory=list)
    _stacks: Dict[AnnotationKind, List[_OpenSpan]] = field(
        init=False,
        default_factory=lambda: {kind: [] for kind in AnnotationKind}
    )
    _active: Tuple[Annotation, ...] = field(init=False, default=())

    def start(self, kind: AnnotationKind, position: int, target: Optional[str] = None) -> Annotation:
        """Open a span of `kind` at `position`."""
        annotation = Annotation(kind, target, next(_serials))
        self._stacks[kind].append(_OpenSpan(annotation.serial, annotation, position))
        self._refresh()
        return annotation

    def end(self, kind: AnnotationKind, position: int) -> AnnotationSpan:
        """
        Close the most recent open span of `kind`.

        Raises:
            UnbalancedAnnotationError: If no span of that kind is open
        """
        stack = self._stacks[kind]
        if not stack:
            raise UnbalancedAnnotationError(
                f"end_{kind.value}() called with no open {kind.value}",
                kind=kind.value,
            )
        opened = stack.pop()
        span = AnnotationSpan(kind, opened.start, position, opened.annotation.target, opened.serial)
        self.spans.append(span)
        self._refresh()
        return span

    def active(self) -> Tuple[Annotation, ...]:
        """Open annotations across all categories, in opening order."""
        return self._active

    def depths(self) -> Dict[AnnotationKind, int]:
        return {kind: len(stack) for kind, stack in self._stacks.items()}

    def check_depths(self, expected: Dict[AnnotationKind, int], where: str):
        """
        Raise unless every stack is back to the depth in `expected`.

        Raises:
            UnbalancedAnnotationError: Naming the first category that differs
        """
        for kind, stack in self._stacks.items():
            if len(stack) != expected.get(kind, 0):
                raise UnbalancedAnnotationError(
                    f"{kind.value} span left open at {where}",
                    kind=kind.value,
                )

    def _refresh(self):
        opened = [span for stack in self._stacks.values() for span in stack]
        opened.sort(key=lambda span: span.serial)
        self._active = tuple(span.annotation for span in opened)
