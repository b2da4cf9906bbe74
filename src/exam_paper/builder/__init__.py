"""
Module: builder

Purpose:
    Composition and dual export of exam papers.
    Composes a question collection into two page descriptions (answers
    hidden / shown), renders both to PDF and delivers them under fixed
    filenames.

Key Functions:
    - compose(): Build the page description of one variant
    - export_pair(): Render and deliver both variants

Key Classes:
    - ExportConfig: Configuration for exporting
    - ExportResult: Artifacts, deliveries and failures of one export

Dependencies:
    - reportlab: PDF generation
    - fitz (PyMuPDF): Preview rasterisation
    - exam_paper.core.models: Question, HeaderMetadata, LayoutMode

Used By:
    - exam_paper.host.preview_host: Preview and export actions
    - exam_paper.cli: Command line export
"""

from .config import ExportConfig
from .layout import compose, ComposerConfig, PageDescription, CompositionError
from .loading import coerce_questions, load_questions, LoaderError, MissingInputError
from .controller import (
    export_pair,
    export_pair_async,
    ExportResult,
    VariantFailure,
    ExportCancelled,
)

__all__ = [
    # Config
    "ExportConfig",
    "ComposerConfig",
    # Composition
    "compose",
    "PageDescription",
    "CompositionError",
    # Loading
    "coerce_questions",
    "load_questions",
    "LoaderError",
    "MissingInputError",
    # Controller
    "export_pair",
    "export_pair_async",
    "ExportResult",
    "VariantFailure",
    "ExportCancelled",
]
