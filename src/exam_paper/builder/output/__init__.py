"""
Module: builder.output

Purpose:
    Rendering and delivery of exam papers.
    Converts PageDescriptions to PDF bytes using ReportLab, rasterises
    previews with PyMuPDF and saves artifacts to disk.

Key Classes:
    - PdfRenderer: PageDescription -> PDF bytes
    - PreviewRenderer: PageDescription -> PIL image
    - DirectoryDeliverer: Artifact -> file

Key Functions:
    - register_fonts(): One-time font registration

Dependencies:
    - reportlab: PDF generation
    - fitz (PyMuPDF): Preview rasterisation
    - PIL: Image handling

Used By:
    - builder.controller: Pipeline orchestration
    - host.preview_host: Live preview
"""

from .fonts import FontFamily, register_fonts, active_font_family
from .renderer import DocumentRenderer, PdfRenderer, RenderFailure
from .preview import PreviewRenderer
from .delivery import (
    Variant,
    ExportArtifact,
    Deliverer,
    DirectoryDeliverer,
    DeliveryFailure,
)

__all__ = [
    "FontFamily",
    "register_fonts",
    "active_font_family",
    "DocumentRenderer",
    "PdfRenderer",
    "RenderFailure",
    "PreviewRenderer",
    "Variant",
    "ExportArtifact",
    "Deliverer",
    "DirectoryDeliverer",
    "DeliveryFailure",
]
