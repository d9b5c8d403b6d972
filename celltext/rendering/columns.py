#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Column Composer

Lays finished sub-renderer output side by side:

    text of column 0 │ text of column 1
    more text        │
    ─────────────────┴─────────────────

Rows are padded to each column's declared width, shorter columns get
blank rows, and a horizontal border closes the block. Junctions are drawn
on the border directly above the block (if any) and on the closing border.

With collapse, a column that itself starts or ends with a border (a
nested table) has that border folded into the surrounding one instead of
producing a second border row.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from celltext.contracts import ColumnWidthMismatchError
from config.constants import BORDER_VERTICAL
from config.logging_config import get_logger
from .lines import Annotations, BorderLine, RenderLine, TaggedLine

logger = get_logger(__name__)


@dataclass
class Column:
    """Lines of one finished sub-renderer and the width it was built with."""
    width: int
    lines: List[RenderLine] = field(default_factory=list)

    def check_width(self, index: int):
        """
        Raises:
            ColumnWidthMismatchError: If any line is wider than the column
        """
        for line in self.lines:
            if line.width > self.width:
                raise ColumnWidthMismatchError(index, self.width, line.width)


class ColumnComposer:
    """
    One-shot composition of a row of columns.

    Usage:
        composer = ColumnComposer(columns, collapse=False)
        rows = composer.compose(previous_border)
    """

    def __init__(self, columns: List[Column], collapse: bool, annotations: Annotations = ()):
        for index, column in enumerate(columns):
            column.check_width(index)
        self.columns = columns
        self.collapse = collapse
        self.annotations = annotations
        self._composed = False

    @property
    def total_width(self) -> int:
        """Sum of column widths plus one cell per separator."""
        if not self.columns:
            return 0
        return sum(column.width for column in self.columns) + len(self.columns) - 1

    def compose(self, previous: Optional[BorderLine] = None) -> List[RenderLine]:
        """
        Build the composite rows followed by the closing border.

        Args:
            previous: Border line directly above the block, updated in place
                with junction marks (and collapsed nested borders)

        Returns:
            Composite text lines, then the closing BorderLine
        """
        if self._composed:
            raise RuntimeError("ColumnComposer.compose() can only run once")
        self._composed = True

        if not self.columns:
            logger.debug("No columns to compose")
            return []

        closing = BorderLine.of_width(self.total_width)
        closing.collapsible = self.collapse

        pos = 0
        for column in self.columns[:-1]:
            if previous is not None:
                previous.join_below(pos + column.width)
            closing.join_above(pos + column.width)
            pos += column.width + 1

        # Vertical rules of nested tables whose bottom border was folded away
        extend_rules: List[List[int]] = [[] for _ in self.columns]
        if self.collapse:
            self._collapse_borders(previous, closing, extend_rules)

        height = max(len(column.lines) for column in self.columns)
        logger.debug(
            f"Composing {len(self.columns)} columns, {height} rows, "
            f"width {self.total_width}, collapse={self.collapse}"
        )

        last = len(self.columns) - 1
        rows: List[RenderLine] = []
        for row_no in range(height):
            row = TaggedLine()
            for col_no, column in enumerate(self.columns):
                if row_no < len(column.lines):
                    cell = column.lines[row_no]
                    if isinstance(cell, BorderLine):
                        cell = cell.to_tagged_line(self.annotations)
                    cell.pad_to(column.width)
                    row.consume(cell)
                else:
                    row.push_str(self._blank_cell(column.width, extend_rules[col_no]), self.annotations)
                if col_no != last:
                    row.push_str(BORDER_VERTICAL, self.annotations)
            rows.append(row)
        rows.append(closing)
        return rows

    def _collapse_borders(
        self,
        previous: Optional[BorderLine],
        closing: BorderLine,
        extend_rules: List[List[int]],
    ):
        pos = 0
        for column in self.columns:
            first = column.lines[0] if column.lines else None
            if previous is not None and isinstance(first, BorderLine) and not first.indent:
                previous.merge_from_below(column.lines.pop(0), pos)
            pos += column.width + 1

        pos = 0
        for col_no, column in enumerate(self.columns):
            last = column.lines[-1] if column.lines else None
            if isinstance(last, BorderLine) and not last.indent:
                column.lines.pop()
                closing.merge_from_above(last, pos)
                extend_rules[col_no] = last.rules_above()
            pos += column.width + 1

    @staticmethod
    def _blank_cell(width: int, rules: List[int]) -> str:
        cells = [' '] * width
        for x in rules:
            if x < width:
                cells[x] = BORDER_VERTICAL
        return ''.join(cells)
