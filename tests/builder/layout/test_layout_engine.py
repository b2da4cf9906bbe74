"""
Unit tests for the layout engine and layout config.
"""

import pytest

from exam_paper.builder.layout import (
    ComposerConfig,
    FlowDirection,
    Justify,
    PageConfig,
    Slot,
    flow_style,
    slot_for,
)
from exam_paper.core.models import LayoutMode


class TestFlowStyle:
    """Tests for flow_style()."""

    def test_flow_style_when_vertical_then_single_column(self):
        """Vertical blocks stack top-to-bottom."""
        # Act
        style = flow_style(LayoutMode.VERTICAL)

        # Assert
        assert style.direction is FlowDirection.COLUMN
        assert style.justify is Justify.FLEX_START
        assert style.columns == 1
        assert style.wrap

    def test_flow_style_when_horizontal_then_two_columns_space_between(self):
        """Horizontal blocks flow in rows of two, justified."""
        style = flow_style(LayoutMode.HORIZONTAL)

        assert style.direction is FlowDirection.ROW
        assert style.justify is Justify.SPACE_BETWEEN
        assert style.columns == 2
        assert style.block_width_fraction == pytest.approx(0.48)

    def test_flow_style_when_not_a_mode_then_raises_value_error(self):
        """Raw strings are not accepted by the engine."""
        with pytest.raises(ValueError):
            flow_style("vertical")


class TestSlotFor:
    """Tests for slot_for()."""

    def test_slot_for_when_vertical_then_one_row_per_question(self):
        """Every vertical question gets its own row."""
        slots = [slot_for(LayoutMode.VERTICAL, i) for i in range(3)]

        assert slots == [Slot(0, 0), Slot(1, 0), Slot(2, 0)]

    def test_slot_for_when_horizontal_then_two_per_row(self):
        """Horizontal questions fill rows left to right."""
        slots = [slot_for(LayoutMode.HORIZONTAL, i) for i in range(5)]

        assert slots == [Slot(0, 0), Slot(0, 1), Slot(1, 0), Slot(1, 1), Slot(2, 0)]

    def test_slot_for_when_negative_index_then_raises(self):
        """Indexes are 0-based and non-negative."""
        with pytest.raises(ValueError):
            slot_for(LayoutMode.VERTICAL, -1)


class TestLayoutConfigs:
    """Tests for ComposerConfig and PageConfig."""

    def test_init_when_defaults_then_printed_paper_style(self):
        """Defaults mirror the printed paper style."""
        config = ComposerConfig()

        assert config.footer_text == "End of Page"
        assert config.title_size == 16
        assert config.answer_color == "green"

    def test_init_when_non_positive_size_then_raises(self):
        """Font sizes must be positive."""
        with pytest.raises(ValueError, match="option_size"):
            ComposerConfig(option_size=0)

    def test_content_width_when_defaults_then_page_minus_padding(self):
        """content_width is the page width minus padding on both sides."""
        config = PageConfig()

        assert config.content_width == pytest.approx(config.page_width - 2 * config.padding)
