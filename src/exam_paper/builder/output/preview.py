"""
Module: builder.output.preview

Purpose:
    Live-preview rasterisation. Renders a PageDescription through the
    document renderer and rasterises the result with PyMuPDF so a GUI
    can show it as an image.

Key Classes:
    - PreviewRenderer: PageDescription -> PIL images

Dependencies:
    - fitz (PyMuPDF): PDF rasterisation
    - PIL.Image: Image handling
    - builder.output.renderer: PdfRenderer

Used By:
    - host.preview_host: PreviewPane
"""

from __future__ import annotations

import logging
from typing import List, Optional

import fitz
from PIL import Image

from exam_paper.builder.layout.models import PageDescription

from .renderer import DocumentRenderer, PdfRenderer, RenderFailure

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_PREVIEW_DPI = 72


class PreviewRenderer:
    """
    Rasterises page descriptions for on-screen preview.

    Example:
        >>> image = PreviewRenderer(dpi=50).render(description)
        >>> image.mode
        'RGB'
    """

    def __init__(
        self,
        renderer: Optional[DocumentRenderer] = None,
        *,
        dpi: int = DEFAULT_PREVIEW_DPI,
    ) -> None:
        if dpi <= 0:
            raise ValueError(f"dpi must be positive: {dpi}")
        self.renderer = renderer or PdfRenderer()
        self.dpi = dpi

    def render(self, description: PageDescription) -> Image.Image:
        """
        Render the first page of a description to an RGB image.

        Raises:
            RenderFailure: If rendering or rasterisation fails
        """
        return self.render_pages(description, max_pages=1)[0]

    def render_pages(
        self,
        description: PageDescription,
        *,
        max_pages: Optional[int] = None,
    ) -> List[Image.Image]:
        """
        Render pages of a description to RGB images.

        Args:
            description: Page description to preview
            max_pages: Stop after this many pages (None = all)

        Raises:
            RenderFailure: If rendering or rasterisation fails
        """
        data = self.renderer.render(description)
        matrix = fitz.Matrix(self.dpi / 72.0, self.dpi / 72.0)

        images: List[Image.Image] = []
        try:
            with fitz.open(stream=data, filetype="pdf") as doc:
                for page in doc:
                    if max_pages is not None and len(images) >= max_pages:
                        break
                    pix = page.get_pixmap(matrix=matrix, alpha=False)
                    images.append(Image.frombytes("RGB", (pix.width, pix.height), pix.samples))
        except Exception as e:
            raise RenderFailure(f"Preview rasterisation failed: {e}") from e

        if not images:
            raise RenderFailure("Rendered document has no pages")

        logger.debug(f"Rasterised {len(images)} preview page(s) at {self.dpi} DPI")
        return images
