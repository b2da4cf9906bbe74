"""Tests for preview rasterisation."""

import pytest
from unittest.mock import MagicMock

from exam_paper.builder.layout import compose
from exam_paper.builder.output import PreviewRenderer, RenderFailure
from exam_paper.core.models import LayoutMode


class TestPreviewRenderer:
    """Tests for PreviewRenderer."""

    def test_render_when_description_then_rgb_page_image(self, sample_questions, sample_header):
        """The first page is rasterised at the requested DPI."""
        # Arrange
        description = compose(sample_questions, LayoutMode.VERTICAL, False, sample_header)

        # Act
        image = PreviewRenderer(dpi=36).render(description)

        # Assert
        assert image.mode == "RGB"
        # A4 is 595x842pt; at 36 DPI that is half size
        assert image.width == pytest.approx(298, abs=2)
        assert image.height == pytest.approx(421, abs=2)

    def test_render_when_not_a_pdf_then_raises_render_failure(self, sample_header):
        """Garbage from the document renderer is reported as RenderFailure."""
        # Arrange
        broken = MagicMock()
        broken.render.return_value = b"not a pdf"
        description = compose((), LayoutMode.VERTICAL, False, sample_header)

        # Act & Assert
        with pytest.raises(RenderFailure):
            PreviewRenderer(broken).render(description)

    def test_init_when_dpi_not_positive_then_raises(self):
        """DPI must be positive."""
        with pytest.raises(ValueError):
            PreviewRenderer(dpi=0)
