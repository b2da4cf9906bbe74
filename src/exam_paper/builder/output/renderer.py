"""
Module: builder.output.renderer

Purpose:
    Render a PageDescription to PDF bytes using ReportLab.
    The header opens the first page, question blocks follow on the grid
    given by the layout engine, and the footer is drawn at the bottom
    margin of every page.

Key Classes:
    - DocumentRenderer: Protocol for rendering engines
    - PdfRenderer: ReportLab implementation
    - RenderFailure: Exception for engine failures

Dependencies:
    - reportlab: PDF generation
    - builder.layout.models: PageDescription
    - builder.output.fonts: Registered font family

Used By:
    - builder.controller: Dual export
    - builder.output.preview: Live preview rasterisation
"""

from __future__ import annotations

import io
import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Protocol, Tuple

from reportlab.lib import colors
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from exam_paper.builder.layout.config import PageConfig
from exam_paper.builder.layout.models import (
    Justify,
    PageDescription,
    QuestionBlock,
    TextLine,
    TextRole,
)

from .fonts import FontFamily, active_font_family

logger = logging.getLogger(__name__)

# Constants
LINE_LEADING = 1.2  # Line height as a multiple of font size
BASELINE_RISE = 0.2  # Baseline offset above the bottom of a line box
WATERMARK_FONT_SIZE = 60
WATERMARK_GRAY = 0.85
WATERMARK_ANGLE = 45
DOCUMENT_CREATOR = "exam-paper-preview"


class RenderFailure(Exception):
    """Rendering engine failed to produce a document."""
    pass


class DocumentRenderer(Protocol):
    """Turns a PageDescription into bytes of some document format."""

    extension: str

    def render(self, description: PageDescription) -> bytes:
        ...


class PdfRenderer:
    """
    ReportLab PDF renderer.

    Output is byte-for-byte reproducible for the same description
    (ReportLab invariant mode, fixed document metadata).

    Attributes:
        extension: File extension of produced documents
        page_config: Page geometry

    Example:
        >>> pdf_bytes = PdfRenderer().render(description)
        >>> pdf_bytes[:5]
        b'%PDF-'
    """

    extension = "pdf"

    def __init__(
        self,
        page_config: Optional[PageConfig] = None,
        *,
        title: str = "Exam Paper",
        draw_watermark: bool = True,
    ) -> None:
        self.page_config = page_config or PageConfig()
        self.title = title
        self.draw_watermark = draw_watermark

    def render(self, description: PageDescription) -> bytes:
        """
        Render description to PDF bytes.

        Raises:
            RenderFailure: If ReportLab fails
        """
        try:
            buffer = io.BytesIO()
            page_count = self._render_to(buffer, description)
        except Exception as e:
            raise RenderFailure(f"PDF rendering failed: {e}") from e

        data = buffer.getvalue()
        logger.info(
            f"Rendered {page_count} page(s), {description.question_count} questions "
            f"(answers={description.show_answers}, {len(data)} bytes)"
        )
        return data


    # ─────────────────────────────────────────────────────────────────────────
    # Page layout
    # ─────────────────────────────────────────────────────────────────────────

    def _render_to(self, buffer: io.BytesIO, description: PageDescription) -> int:
        config = self.page_config
        fonts = active_font_family()
        block_width = config.content_width * description.flow.block_width_fraction

        c = canvas.Canvas(buffer, pagesize=config.page_size, invariant=1)
        c.setTitle(self.title)
        c.setCreator(DOCUMENT_CREATOR)
        c.setAuthor("")
        c.setSubject("")

        page_count = 1
        self._begin_page(c, description, fonts)

        top_of_page = config.page_height - config.padding
        content_bottom = self._footer_top(description) + config.block_spacing
        y = self._draw_header(c, description, fonts, top_of_page)

        for row, blocks in _group_rows(description.questions).items():
            row_height = max(self._block_height(block, fonts, block_width) for block in blocks)

            if y - row_height < content_bottom and y < top_of_page:
                # Row does not fit: finish this page and continue on the next
                self._draw_footer(c, description, fonts)
                c.showPage()
                page_count += 1
                self._begin_page(c, description, fonts)
                y = top_of_page

            if y - row_height < content_bottom:
                logger.warning(
                    f"Question row {row} overflows the page: "
                    f"{row_height:.0f}pt needed, {y - content_bottom:.0f}pt available"
                )

            for block in blocks:
                x = self._block_x(block, description, block_width)
                self._draw_block(c, block, fonts, x, y, block_width)
            y -= row_height

        self._draw_footer(c, description, fonts)
        c.showPage()
        c.save()
        return page_count

    def _begin_page(
        self,
        c: canvas.Canvas,
        description: PageDescription,
        fonts: FontFamily,
    ) -> None:
        """Start a page: white background, then the watermark underneath content."""
        config = self.page_config
        c.setFillColor(colors.white)
        c.rect(0, 0, config.page_width, config.page_height, stroke=0, fill=1)
        if self.draw_watermark and description.watermark:
            _draw_watermark(c, description.watermark, config, fonts)

    def _draw_header(
        self,
        c: canvas.Canvas,
        description: PageDescription,
        fonts: FontFamily,
        y: float,
    ) -> float:
        """Draw the header lines centred; returns the y below the header."""
        config = self.page_config
        for line in description.header.lines:
            size = line.style.font_size
            y -= size * LINE_LEADING
            _apply_style(c, line, fonts)
            c.drawCentredString(config.page_width / 2, y + size * BASELINE_RISE, line.text)
        return y - config.header_spacing

    def _draw_block(
        self,
        c: canvas.Canvas,
        block: QuestionBlock,
        fonts: FontFamily,
        x: float,
        y: float,
        width: float,
    ) -> None:
        """Draw one question block with its top edge at y."""
        for line in block.lines:
            size = line.style.font_size
            _apply_style(c, line, fonts)
            for fragment in _wrap(line.text, _font_for(line, fonts), size, width):
                y -= size * LINE_LEADING
                c.drawString(x, y + size * BASELINE_RISE, fragment)
            y -= self._spacing_after(line)

    def _draw_footer(
        self,
        c: canvas.Canvas,
        description: PageDescription,
        fonts: FontFamily,
    ) -> None:
        """Footer text centred in the bottom margin under a thin rule."""
        config = self.page_config
        line = description.footer.line
        rule_y = self._footer_top(description)

        c.saveState()
        c.setStrokeColor(colors.black)
        c.setLineWidth(1)
        c.line(config.footer_inset, rule_y, config.page_width - config.footer_inset, rule_y)
        _apply_style(c, line, fonts)
        c.drawCentredString(config.page_width / 2, config.footer_offset, line.text)
        c.restoreState()

    # ─────────────────────────────────────────────────────────────────────────
    # Measurement
    # ─────────────────────────────────────────────────────────────────────────

    def _footer_top(self, description: PageDescription) -> float:
        """Y of the footer rule; content must stay above it."""
        config = self.page_config
        size = description.footer.line.style.font_size
        return config.footer_offset + size * LINE_LEADING + config.footer_padding

    def _block_x(
        self,
        block: QuestionBlock,
        description: PageDescription,
        block_width: float,
    ) -> float:
        config = self.page_config
        column = block.slot.column
        columns = description.flow.columns
        if column == 0 or columns < 2:
            return config.padding
        if description.flow.justify is Justify.SPACE_BETWEEN:
            # First block flush left, last flush right, gaps shared evenly
            gap = (config.content_width - columns * block_width) / (columns - 1)
            return config.padding + column * (block_width + gap)
        return config.padding + column * block_width

    def _block_height(self, block: QuestionBlock, fonts: FontFamily, width: float) -> float:
        height = 0.0
        for line in block.lines:
            size = line.style.font_size
            fragments = _wrap(line.text, _font_for(line, fonts), size, width)
            height += len(fragments) * size * LINE_LEADING
            height += self._spacing_after(line)
        return height + self.page_config.block_spacing

    def _spacing_after(self, line: TextLine) -> float:
        if line.role is TextRole.PROMPT:
            return self.page_config.prompt_spacing
        if line.role is TextRole.OPTION:
            return self.page_config.option_spacing
        return 0.0


def _group_rows(blocks: Tuple[QuestionBlock, ...]) -> Dict[int, List[QuestionBlock]]:
    """Group blocks by grid row, preserving input order."""
    rows: Dict[int, List[QuestionBlock]] = OrderedDict()
    for block in blocks:
        rows.setdefault(block.slot.row, []).append(block)
    return rows


def _font_for(line: TextLine, fonts: FontFamily) -> str:
    return fonts.bold if line.style.bold else fonts.regular


def _apply_style(c: canvas.Canvas, line: TextLine, fonts: FontFamily) -> None:
    c.setFont(_font_for(line, fonts), line.style.font_size)
    c.setFillColor(colors.toColor(line.style.color))


def _wrap(text: str, font: str, size: float, width: float) -> List[str]:
    """Wrap text to width; an empty string still occupies one line."""
    return simpleSplit(text, font, size, width) or [""]


def _draw_watermark(
    c: canvas.Canvas,
    text: str,
    config: PageConfig,
    fonts: FontFamily,
) -> None:
    """Faint diagonal text across the middle of the page."""
    c.saveState()
    c.setFillGray(WATERMARK_GRAY)
    c.setFont(fonts.bold, WATERMARK_FONT_SIZE)
    c.translate(config.page_width / 2, config.page_height / 2)
    c.rotate(WATERMARK_ANGLE)
    c.drawCentredString(0, 0, text)
    c.restoreState()
