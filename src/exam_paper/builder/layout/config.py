"""
Module: builder.layout.config

Purpose:
    Configuration for the document composer and the page geometry used
    when a page description is rendered.

Key Classes:
    - OptionOverflow: Policy for option lists beyond the A-Z range
    - ComposerConfig: Immutable composition settings
    - PageConfig: Immutable page geometry

Dependencies:
    - dataclasses (std)
    - reportlab: A4 page size

Used By:
    - builder.layout.composer: Text and style settings
    - builder.output.renderer: Page geometry
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

from reportlab.lib.pagesizes import A4


FOOTER_TEXT = "End of Page"
MAX_LETTERED_OPTIONS = 26


class OptionOverflow(Enum):
    """
    What to do with a question carrying more than 26 options.

    Attributes:
        REJECT: Raise CompositionError (both variants fail alike).
        EXTEND: Keep lettering spreadsheet-style: ..., Z, AA, AB, ...
    """

    REJECT = auto()
    EXTEND = auto()


@dataclass(frozen=True)
class ComposerConfig:
    """
    Settings for composing a page description (immutable).

    Font sizes are in points and mirror the printed paper style:
    16pt bold school name, 12pt subject/date and prompts, 10pt
    options, answers and footer.

    Attributes:
        footer_text: Literal printed at the bottom of every page
        option_overflow: Policy beyond MAX_LETTERED_OPTIONS
        title_size: School name size
        subtitle_size: Subject/date size
        question_size: Question prompt size
        option_size: Option line size
        answer_size: Answer line size
        footer_size: Footer size
        answer_color: Colour name of the answer line
    """

    footer_text: str = FOOTER_TEXT
    option_overflow: OptionOverflow = OptionOverflow.REJECT

    title_size: float = 16
    subtitle_size: float = 12
    question_size: float = 12
    option_size: float = 10
    answer_size: float = 10
    footer_size: float = 10
    answer_color: str = "green"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for name in ("title_size", "subtitle_size", "question_size",
                     "option_size", "answer_size", "footer_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive: {getattr(self, name)}")


@dataclass(frozen=True)
class PageConfig:
    """
    Page geometry for rendering (immutable, points).

    Attributes:
        page_size: (width, height), A4 by default
        padding: Page padding on every side
        header_spacing: Gap below the header block
        footer_offset: Distance of the footer from the page bottom
        footer_inset: Left/right inset of the footer rule
        footer_padding: Gap between the footer rule and its text
        block_spacing: Vertical gap after each question block
        prompt_spacing: Gap after the question prompt
        option_spacing: Gap after each option line

    Example:
        >>> config = PageConfig()
        >>> round(config.content_width)
        555
    """

    page_size: Tuple[float, float] = A4
    padding: float = 20
    header_spacing: float = 20
    footer_offset: float = 30
    footer_inset: float = 40
    footer_padding: float = 10
    block_spacing: float = 10
    prompt_spacing: float = 5
    option_spacing: float = 3

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        width, height = self.page_size
        if width <= 0 or height <= 0:
            raise ValueError(f"page_size must be positive: {self.page_size}")
        if self.content_width <= 0:
            raise ValueError("Padding exceeds page width")

    @property
    def page_width(self) -> float:
        return self.page_size[0]

    @property
    def page_height(self) -> float:
        return self.page_size[1]

    @property
    def content_width(self) -> float:
        """Width available for content (excluding padding)."""
        return self.page_width - 2 * self.padding
