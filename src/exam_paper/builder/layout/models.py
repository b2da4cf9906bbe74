"""
Module: builder.layout.models

Purpose:
    Data models for the page description tree.
    Immutable dataclasses describing header, question blocks and footer,
    independent of the engine that eventually draws them.

Key Classes:
    - FlowStyle: Flow direction, wrapping and justification of blocks
    - Slot: Grid position of a question block
    - TextLine: A line of text with its style
    - HeaderBlock / QuestionBlock / FooterBlock: Tree nodes
    - PageDescription: Complete description of one paper variant

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.engine: Creates FlowStyle and Slot
    - builder.layout.composer: Creates PageDescription
    - builder.output.renderer: Draws PageDescription
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from exam_paper.core.models import LayoutMode


class FlowDirection(Enum):
    """Main axis along which question blocks are laid out."""

    COLUMN = "column"
    ROW = "row"


class Justify(Enum):
    """Distribution of blocks along the main axis."""

    FLEX_START = "flex-start"
    SPACE_BETWEEN = "space-between"


class Align(Enum):
    LEFT = "left"
    CENTER = "center"


class TextRole(Enum):
    """What a line of text is, for renderers and tests."""

    TITLE = "title"
    SUBTITLE = "subtitle"
    PROMPT = "prompt"
    OPTION = "option"
    ANSWER = "answer"
    FOOTER = "footer"


@dataclass(frozen=True)
class FlowStyle:
    """
    Layout style of the question area (immutable).

    Attributes:
        direction: COLUMN stacks blocks, ROW places them side by side
        wrap: Whether blocks wrap onto the next row/column
        justify: How free space is distributed between blocks
        columns: Number of blocks per row
        block_width_fraction: Block width relative to content width
    """

    direction: FlowDirection
    wrap: bool
    justify: Justify
    columns: int
    block_width_fraction: float = 0.48


@dataclass(frozen=True)
class Slot:
    """
    Grid position of a question block.

    Example:
        >>> Slot(row=1, column=0)
        Slot(row=1, column=0)
    """

    row: int
    column: int


@dataclass(frozen=True)
class TextStyle:
    font_size: float
    bold: bool = False
    align: Align = Align.LEFT
    color: str = "black"


@dataclass(frozen=True)
class TextLine:
    """A single line (or wrapped paragraph) of text."""

    text: str
    role: TextRole
    style: TextStyle


@dataclass(frozen=True)
class HeaderBlock:
    """
    Header at the top of the first page.

    Always holds exactly three lines: school name, subject, date.
    """

    school_name: TextLine
    subject: TextLine
    date: TextLine

    @property
    def lines(self) -> Tuple[TextLine, ...]:
        return (self.school_name, self.subject, self.date)


@dataclass(frozen=True)
class QuestionBlock:
    """
    One rendered question.

    Attributes:
        question_id: Identifier of the source question
        number: 1-based display number
        slot: Grid position from the layout engine
        prompt: "<number>. <text>" line
        options: Lettered option lines in input order
        answer: Answer line, None when answers are hidden
    """

    question_id: object
    number: int
    slot: Slot
    prompt: TextLine
    options: Tuple[TextLine, ...] = ()
    answer: Optional[TextLine] = None

    @property
    def lines(self) -> Tuple[TextLine, ...]:
        """All lines in drawing order."""
        tail = (self.answer,) if self.answer is not None else ()
        return (self.prompt,) + self.options + tail


@dataclass(frozen=True)
class FooterBlock:
    """Fixed footer anchored to the bottom margin of every page."""

    line: TextLine


@dataclass(frozen=True)
class PageDescription:
    """
    Engine-agnostic description of one paper variant.

    Produced fresh by compose() and never mutated afterwards.

    Attributes:
        layout: Layout mode it was composed for
        flow: Flow style of the question area
        header: Header block
        questions: Question blocks in input order
        footer: Footer block
        show_answers: Whether answer lines are present
        watermark: Watermark text carried from the header metadata

    Example:
        >>> description.question_count
        3
    """

    layout: LayoutMode
    flow: FlowStyle
    header: HeaderBlock
    questions: Tuple[QuestionBlock, ...]
    footer: FooterBlock
    show_answers: bool = False
    watermark: str = ""

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def row_count(self) -> int:
        """Number of grid rows used by question blocks."""
        if not self.questions:
            return 0
        return max(block.slot.row for block in self.questions) + 1

    def without_answers(self) -> PageDescription:
        """Copy of this description with every answer line removed."""
        return replace(
            self,
            show_answers=False,
            questions=tuple(replace(block, answer=None) for block in self.questions),
        )

    def iter_lines(self):
        """Yield every text line in drawing order (header, blocks, footer)."""
        yield from self.header.lines
        for block in self.questions:
            yield from block.lines
        yield self.footer.line
