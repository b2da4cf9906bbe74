"""
Module: builder.layout

Purpose:
    Page composition for exam papers.
    Converts questions and header metadata into an engine-agnostic
    page description.

Key Functions:
    - compose(): Main entry point for composition
    - flow_style(): Flow style for a layout mode
    - slot_for(): Grid slot of a question
    - option_letter(): Bounded option lettering

Key Classes:
    - ComposerConfig / PageConfig: Configuration
    - PageDescription: Composed paper variant
    - CompositionError: Question cannot be composed

Used By:
    - builder.controller: Dual export
    - host.preview_host: Live preview
"""

from .config import ComposerConfig, PageConfig, OptionOverflow, FOOTER_TEXT
from .models import (
    FlowDirection,
    Justify,
    FlowStyle,
    Slot,
    TextRole,
    TextLine,
    HeaderBlock,
    QuestionBlock,
    FooterBlock,
    PageDescription,
)
from .engine import flow_style, slot_for
from .lettering import option_letter, CompositionError
from .composer import compose, compose_question

__all__ = [
    # Config
    "ComposerConfig",
    "PageConfig",
    "OptionOverflow",
    "FOOTER_TEXT",
    # Models
    "FlowDirection",
    "Justify",
    "FlowStyle",
    "Slot",
    "TextRole",
    "TextLine",
    "HeaderBlock",
    "QuestionBlock",
    "FooterBlock",
    "PageDescription",
    # Functions
    "flow_style",
    "slot_for",
    "option_letter",
    "compose",
    "compose_question",
    # Errors
    "CompositionError",
]
