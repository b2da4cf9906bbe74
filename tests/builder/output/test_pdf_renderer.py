"""
Tests for the ReportLab PDF renderer.

Generated PDFs are inspected with PyMuPDF.
"""

import fitz
import pytest

from exam_paper.builder.layout import compose
from exam_paper.builder.output import PdfRenderer, RenderFailure
from exam_paper.core.models import HeaderMetadata, LayoutMode, Question


def _page_texts(data: bytes):
    with fitz.open(stream=data, filetype="pdf") as doc:
        return [page.get_text() for page in doc]


class TestPdfRenderer:
    """Tests for PdfRenderer.render()."""

    def test_render_when_questions_only_then_no_answer_text(self, sample_questions, sample_header):
        """The questions-only PDF never contains answer lines."""
        # Arrange
        description = compose(sample_questions, LayoutMode.VERTICAL, False, sample_header)

        # Act
        data = PdfRenderer().render(description)

        # Assert
        assert data[:5] == b"%PDF-"
        text = "".join(_page_texts(data))
        assert "Lincoln High" in text
        assert "Subject: Math" in text
        assert "1. 2+2=?" in text
        assert "A) 3" in text
        assert "Answer:" not in text

    def test_render_when_with_answers_then_answer_text_present(self, sample_questions, sample_header):
        """The answers PDF shows every answer."""
        description = compose(sample_questions, LayoutMode.HORIZONTAL, True, sample_header)

        text = "".join(_page_texts(PdfRenderer().render(description)))

        assert "Answer: 4" in text
        assert "Answer: Paris" in text

    def test_render_when_same_description_then_identical_bytes(self, sample_questions, sample_header):
        """Rendering is byte-for-byte reproducible."""
        description = compose(sample_questions, LayoutMode.VERTICAL, True, sample_header)
        renderer = PdfRenderer()

        assert renderer.render(description) == renderer.render(description)

    def test_render_when_empty_collection_then_single_page_with_footer(self, sample_header):
        """An empty paper still has a header and the footer."""
        description = compose((), LayoutMode.VERTICAL, False, sample_header)

        pages = _page_texts(PdfRenderer().render(description))

        assert len(pages) == 1
        assert "End of Page" in pages[0]

    def test_render_when_many_questions_then_footer_on_every_page(self, sample_header):
        """Long papers paginate; each page ends with the footer."""
        # Arrange
        questions = [
            Question(id=i, text=f"Question {i}", answer="x", options=("a", "b", "c"))
            for i in range(60)
        ]
        description = compose(questions, LayoutMode.VERTICAL, True, sample_header)

        # Act
        pages = _page_texts(PdfRenderer().render(description))

        # Assert
        assert len(pages) > 1
        assert all("End of Page" in page for page in pages)
        assert "Lincoln High" in pages[0]
        assert "Lincoln High" not in pages[1]
        assert "60. Question 59" in pages[-1]

    def test_render_when_watermark_then_drawn_on_each_page(self, sample_questions):
        """A non-empty watermark is drawn as page decoration."""
        header = HeaderMetadata(school_name="S", watermark="DRAFT")
        description = compose(sample_questions, LayoutMode.VERTICAL, False, header)

        with_mark = _page_texts(PdfRenderer().render(description))
        without_mark = _page_texts(PdfRenderer(draw_watermark=False).render(description))

        assert "DRAFT" in with_mark[0]
        assert "DRAFT" not in without_mark[0]

    def test_render_when_reportlab_fails_then_raises_render_failure(self, sample_questions, sample_header, monkeypatch):
        """Backend errors surface as RenderFailure."""
        # Arrange
        description = compose(sample_questions, LayoutMode.VERTICAL, False, sample_header)
        renderer = PdfRenderer()

        def explode(*args, **kwargs):
            raise RuntimeError("canvas broken")

        monkeypatch.setattr(renderer, "_render_to", explode)

        # Act & Assert
        with pytest.raises(RenderFailure, match="canvas broken"):
            renderer.render(description)
