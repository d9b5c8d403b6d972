#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Renderer Contracts Module

Error taxonomy shared by all renderer backends.

Usage:
    from celltext.contracts import UnbalancedBlockError

    try:
        renderer.end_block()
    except UnbalancedBlockError:
        ...
"""

from .errors import (
    RenderContractError,
    UnbalancedBlockError,
    UnbalancedPreError,
    UnbalancedAnnotationError,
    InvalidWidthError,
    ColumnWidthMismatchError,
    RendererConsumedError,
    UnbalancedBlock,
    UnbalancedPre,
    UnbalancedAnnotation,
    InvalidWidth,
    ColumnWidthMismatch,
)

__all__ = [
    'RenderContractError',
    'UnbalancedBlockError',
    'UnbalancedPreError',
    'UnbalancedAnnotationError',
    'InvalidWidthError',
    'ColumnWidthMismatchError',
    'RendererConsumedError',
    'UnbalancedBlock',
    'UnbalancedPre',
    'UnbalancedAnnotation',
    'InvalidWidth',
    'ColumnWidthMismatch',
]
