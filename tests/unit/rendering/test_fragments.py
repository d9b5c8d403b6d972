"""
Unit tests for fragment anchors (record_frag_start and FragmentRegistry)
"""
from celltext.rendering import TextRenderer
from celltext.rendering.fragments import FragmentPosition, FragmentRegistry


class TestRegistry:
    """Test FragmentRegistry bookkeeping."""

    def test_first_occurrence_wins(self):
        registry = FragmentRegistry()
        assert registry.record("a", FragmentPosition(0, 1))
        assert not registry.record("a", FragmentPosition(2, 5))
        assert registry.get("a") == FragmentPosition(0, 1)
        assert registry.duplicates == [("a", FragmentPosition(2, 5))]
        assert len(registry) == 1

    def test_unknown_name(self):
        registry = FragmentRegistry()
        assert registry.get("missing") is None
        assert "missing" not in registry


class TestRendererFragments:
    """Test anchor positions in rendered output."""

    def test_anchor_before_block_text(self, renderer):
        renderer.start_block()
        renderer.add_inline_text("Intro")
        renderer.end_block()
        renderer.start_block()
        renderer.record_frag_start("sec")
        renderer.add_inline_text("Section")
        renderer.end_block()
        rendered = renderer.into_rendered_text()

        assert rendered.text == "Intro\n\nSection\n"
        assert rendered.fragments.get("sec") == FragmentPosition(block=2, line=2)

    def test_anchor_mid_paragraph(self):
        renderer = TextRenderer(10)
        renderer.add_inline_text("alpha beta ")
        renderer.record_frag_start("gamma")
        renderer.add_inline_text("gamma")
        rendered = renderer.into_rendered_text()

        assert rendered.text == "alpha beta\ngamma\n"
        assert rendered.fragments.get("gamma").line == 1

    def test_anchor_does_not_affect_width(self, renderer):
        renderer.add_inline_text("ab")
        renderer.record_frag_start("mid")
        renderer.add_inline_text("cd")
        lines = renderer.into_lines()
        assert lines[0].text == "abcd"
        assert lines[0].width == 4

    def test_trailing_anchor_attaches_to_last_line(self, renderer):
        renderer.add_inline_text("text")
        renderer.new_line()
        renderer.record_frag_start("end")
        rendered = renderer.into_rendered_text()
        assert rendered.text == "text\n"
        assert rendered.fragments.get("end").line == 0

    def test_anchor_in_sub_renderer(self, renderer):
        renderer.add_inline_text("top")
        sub = renderer.new_sub_renderer(10)
        sub.record_frag_start("inner")
        sub.add_inline_text("x")
        renderer.append_subrender(sub, [])
        rendered = renderer.into_rendered_text()
        assert rendered.fragments.get("inner") == FragmentPosition(block=0, line=1)

    def test_duplicate_anchor_names(self, renderer):
        renderer.record_frag_start("dup")
        renderer.add_inline_text("one")
        renderer.new_line()
        renderer.record_frag_start("dup")
        renderer.add_inline_text("two")
        rendered = renderer.into_rendered_text()
        assert rendered.fragments.get("dup").line == 0
        assert len(rendered.fragments.duplicates) == 1

    def test_sub_renderer_anchor_counts_parent_blocks(self, renderer):
        """Anchor block indexes are document-wide after a merge."""
        for text in ("a", "b"):
            renderer.start_block()
            renderer.add_inline_text(text)
            renderer.end_block()
        sub = renderer.new_sub_renderer(10)
        sub.record_frag_start("x")
        sub.add_inline_text("c")
        renderer.append_subrender(sub, [])
        rendered = renderer.into_rendered_text()

        assert rendered.text == "a\n\nb\n\nc\n"
        assert rendered.fragments.get("x") == FragmentPosition(block=2, line=4)

    def test_blocks_after_merge_include_sub_blocks(self, renderer):
        sub = renderer.new_sub_renderer(10)
        sub.start_block()
        sub.add_inline_text("inner")
        sub.end_block()
        renderer.append_subrender(sub, [])
        renderer.start_block()
        renderer.record_frag_start("after")
        renderer.add_inline_text("outer")
        renderer.end_block()
        rendered = renderer.into_rendered_text()

        assert rendered.fragments.get("after").block == 2

    def test_column_anchors_rebased_in_order(self, renderer):
        renderer.start_block()
        renderer.add_inline_text("head")
        renderer.end_block()
        cols = []
        for name in ("left", "right"):
            col = renderer.new_sub_renderer(6)
            col.start_block()
            col.record_frag_start(name)
            col.add_inline_text(name)
            col.end_block()
            cols.append(col)
        renderer.append_columns_with_borders(cols, False)
        rendered = renderer.into_rendered_text()

        assert rendered.fragments.get("left") == FragmentPosition(block=2, line=2)
        assert rendered.fragments.get("right") == FragmentPosition(block=3, line=2)
