"""
Pytest configuration and shared fixtures for celltext tests.
"""
import sys
import pytest
from pathlib import Path
from typing import List

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from celltext.rendering import RawRenderer, TextRenderer


# ============================================================================
# Fixtures: Renderers
# ============================================================================

@pytest.fixture
def renderer() -> TextRenderer:
    """Layout renderer 20 cells wide."""
    return TextRenderer(width=20)


@pytest.fixture
def raw_renderer() -> RawRenderer:
    """Whitespace-collapsing baseline renderer."""
    return RawRenderer()


@pytest.fixture
def make_column():
    """Build a finished sub-renderer holding one verbatim line per entry."""
    def _make(parent: TextRenderer, width: int, lines: List[str]) -> TextRenderer:
        column = parent.new_sub_renderer(width)
        for line in lines:
            column.add_block_line(line)
        return column
    return _make


# ============================================================================
# Fixtures: Sample Data
# ============================================================================

@pytest.fixture
def sample_texts():
    """Sample paragraphs for wrapping tests."""
    return {
        "short": "Hello, world! This is a test.",
        "medium": (
            "Rendering nested documents to text means wrapping paragraphs, "
            "indenting quotes, and laying tables out side by side within "
            "a fixed number of terminal cells."
        ),
        "wide": "日本語のテキストも正しく折り返されます",
        "long_word": "pneumonoultramicroscopicsilicovolcanoconiosis",
    }
