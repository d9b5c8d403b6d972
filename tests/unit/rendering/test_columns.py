"""
Unit tests for side-by-side column composition (append_columns_with_borders)
"""
import logging

import pytest

from celltext.contracts import ColumnWidthMismatch, ColumnWidthMismatchError
from celltext.rendering import TextRenderer
from celltext.rendering.columns import Column, ColumnComposer
from celltext.rendering.lines import BorderLine


class TestBasicLayout:
    """Test padding, separators and the closing border."""

    def test_uneven_columns(self, make_column):
        renderer = TextRenderer(20)
        cols = [
            make_column(renderer, 3, ["a", "a"]),
            make_column(renderer, 3, ["b"] * 5),
            make_column(renderer, 3, ["c"] * 3),
        ]
        renderer.append_columns_with_borders(cols, False)
        lines = renderer.into_string().splitlines()

        assert len(lines) == 6
        assert lines[0] == "a  │b  │c  "
        assert lines[3] == "   │b  │   "
        assert lines[4] == "   │b  │   "
        assert lines[5] == "───┴───┴───"

    def test_rows_have_constant_width(self, make_column):
        renderer = TextRenderer(20)
        cols = [make_column(renderer, 4, ["ab", "abcd"]), make_column(renderer, 2, ["x"])]
        renderer.append_columns_with_borders(cols, False)
        widths = {line.width for line in renderer.into_lines()}
        assert widths == {7}

    def test_junctions_on_preceding_border(self, make_column):
        renderer = TextRenderer(11)
        renderer.add_horizontal_border()
        renderer.append_columns_with_borders(
            [make_column(renderer, 5, ["x"]), make_column(renderer, 5, ["y"])], False
        )
        assert renderer.into_string().splitlines() == [
            "─────┬─────",
            "x    │y    ",
            "─────┴─────",
        ]

    def test_single_column_has_no_separator(self, make_column):
        renderer = TextRenderer(10)
        renderer.append_columns_with_borders([make_column(renderer, 4, ["only"])], False)
        assert renderer.into_string() == "only\n────\n"

    def test_no_columns_is_a_no_op(self, renderer):
        renderer.append_columns_with_borders([], False)
        assert renderer.empty()

    def test_columns_are_consumed(self, renderer, make_column):
        col = make_column(renderer, 3, ["a"])
        renderer.append_columns_with_borders([col], False)
        assert col.consumed

    def test_same_renderer_twice(self, renderer, make_column):
        col = make_column(renderer, 3, ["a"])
        with pytest.raises(ValueError):
            renderer.append_columns_with_borders([col, col], False)


class TestWidthMismatch:
    """Test columns wider than declared."""

    def test_overwide_line_rejected(self, make_column):
        renderer = TextRenderer(20)
        cols = [make_column(renderer, 3, ["ok"]), make_column(renderer, 3, ["toolong"])]
        with pytest.raises(ColumnWidthMismatch) as exc_info:
            renderer.append_columns_with_borders(cols, False)
        assert exc_info.value.column == 1
        assert exc_info.value.declared == 3
        assert exc_info.value.width == 7

    def test_composer_checks_widths(self):
        with pytest.raises(ColumnWidthMismatchError):
            ColumnComposer([Column(2, [BorderLine.of_width(3)])], collapse=False)


class TestCollapse:
    """Test border collapsing for nested tables."""

    def test_trailing_border_merges_with_following_border(self, make_column):
        renderer = TextRenderer(3)
        renderer.append_columns_with_borders(
            [make_column(renderer, 1, ["A"]), make_column(renderer, 1, ["B"])], True
        )
        renderer.add_horizontal_border()
        assert renderer.into_string() == "A│B\n─┴─\n"

    def test_without_collapse_borders_stack(self, make_column):
        renderer = TextRenderer(3)
        renderer.append_columns_with_borders(
            [make_column(renderer, 1, ["A"]), make_column(renderer, 1, ["B"])], False
        )
        renderer.add_horizontal_border()
        assert renderer.into_string() == "A│B\n─┴─\n───\n"

    def _nested_table(self, outer, make_column):
        inner = outer.new_sub_renderer(5)
        inner.add_horizontal_border()
        inner.append_columns_with_borders(
            [make_column(inner, 2, ["x"]), make_column(inner, 2, ["y"])], True
        )
        return inner

    def test_nested_borders_fold_into_outer(self, make_column):
        outer = TextRenderer(11)
        outer.add_horizontal_border()
        inner = self._nested_table(outer, make_column)
        outer.append_columns_with_borders([inner, make_column(outer, 5, ["z"])], True)
        assert outer.into_string().splitlines() == [
            "──┬──┬─────",
            "x │y │z    ",
            "──┴──┴─────",
        ]

    def test_nested_rules_extend_into_padding(self, make_column):
        outer = TextRenderer(11)
        outer.add_horizontal_border()
        inner = self._nested_table(outer, make_column)
        outer.append_columns_with_borders([inner, make_column(outer, 5, ["z", "w"])], True)
        assert outer.into_string().splitlines() == [
            "──┬──┬─────",
            "x │y │z    ",
            "  │  │w    ",
            "──┴──┴─────",
        ]

    def test_nested_borders_kept_without_collapse(self, make_column):
        outer = TextRenderer(11)
        outer.add_horizontal_border()
        inner = self._nested_table(outer, make_column)
        outer.append_columns_with_borders([inner, make_column(outer, 5, ["z"])], False)
        lines = outer.into_string().splitlines()
        assert lines[0] == "─────┬─────"
        assert lines[1] == "──┬──│z    "
        assert len(lines) == 5


class TestComposer:
    """Test ColumnComposer directly."""

    def test_total_width(self):
        composer = ColumnComposer([Column(2), Column(5), Column(3)], collapse=False)
        assert composer.total_width == 12

    def test_compose_runs_once(self):
        composer = ColumnComposer([Column(1, [])], collapse=False)
        composer.compose()
        with pytest.raises(RuntimeError):
            composer.compose()


class TestOverflow:
    """Columns wider than the renderer are laid out anyway, with a warning."""

    def test_overflow_is_logged(self, make_column, caplog):
        renderer = TextRenderer(5)
        cols = [make_column(renderer, 3, ["a"]), make_column(renderer, 3, ["b"])]
        with caplog.at_level(logging.WARNING):
            renderer.append_columns_with_borders(cols, False)
        assert "only 5 are available" in caplog.text
        assert renderer.into_string().splitlines()[0] == "a  │b  "
