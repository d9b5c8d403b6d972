#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Renderer Contract Errors

Every error here means the caller drove a renderer out of order
(unmatched block, pre-region or annotation, bad width, oversized column,
reuse of a consumed renderer). None of them is recoverable: the layout
state is already out of sync when they are raised.

Version: 1.0.0
"""

from typing import Optional


class RenderContractError(Exception):
    """Base error for renderer contract violations"""
    pass


class UnbalancedBlockError(RenderContractError):
    """end_block() without a matching start_block(), or a block left open"""
    pass


class UnbalancedPreError(RenderContractError):
    """Pre-region counter went negative or was left open by a block"""
    pass


class UnbalancedAnnotationError(RenderContractError):
    """Annotation closed without being opened, or left open by a block"""

    def __init__(self, message: str, kind: Optional[str] = None):
        self.kind = kind
        super().__init__(message)


class InvalidWidthError(RenderContractError):
    """Width too small to place a single character"""

    def __init__(self, message: str, width: Optional[int] = None):
        self.width = width
        super().__init__(message)


class ColumnWidthMismatchError(RenderContractError):
    """A column emitted a line wider than the width it was built with"""

    def __init__(self, column: int, declared: int, width: int):
        self.column = column
        self.declared = declared
        self.width = width
        super().__init__(
            f"Column {column} emitted a line {width} cells wide "
            f"but was declared {declared} cells wide"
        )


class RendererConsumedError(RenderContractError):
    """Renderer used after being appended into a parent or finalized"""
    pass


# Short names used throughout the renderer documentation
UnbalancedBlock = UnbalancedBlockError
UnbalancedPre = UnbalancedPreError
UnbalancedAnnotation = UnbalancedAnnotationError
InvalidWidth = InvalidWidthError
ColumnWidthMismatch = ColumnWidthMismatchError
