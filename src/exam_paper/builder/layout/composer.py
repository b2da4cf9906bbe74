"""
Module: builder.layout.composer

Purpose:
    Compose a PageDescription from questions, layout mode, answer
    visibility and header metadata. Pure: no I/O, output depends only
    on the arguments.

Key Functions:
    - compose(): Build the description of one paper variant
    - compose_question(): Build one question block

Dependencies:
    - exam_paper.core.models: Question, HeaderMetadata, LayoutMode
    - builder.layout.engine: Flow style and slots
    - builder.layout.lettering: Option letters

Used By:
    - builder.controller: Dual export
    - host.preview_host: Live preview panes
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from exam_paper.core.models import HeaderMetadata, LayoutMode, Question

from .config import ComposerConfig
from .engine import flow_style, slot_for
from .lettering import check_option_count, option_letter
from .models import (
    Align,
    FooterBlock,
    HeaderBlock,
    PageDescription,
    QuestionBlock,
    TextLine,
    TextRole,
    TextStyle,
)

logger = logging.getLogger(__name__)

DEFAULT_COMPOSER_CONFIG = ComposerConfig()


def compose(
    questions: Optional[Sequence[Question]],
    layout: LayoutMode,
    show_answers: bool,
    header: Optional[HeaderMetadata],
    *,
    config: Optional[ComposerConfig] = None,
) -> PageDescription:
    """
    Build the page description of one paper variant.

    Questions keep their input order and are numbered from 1. The
    header always carries school name, subject and date (blank values
    are kept, never dropped). Answer lines are added only when
    show_answers is True, so the two variants of the same input differ
    in nothing else.

    Args:
        questions: Questions in display order (None is treated as empty)
        layout: Layout mode
        show_answers: Whether to add an answer line to every question
        header: Header metadata (None is treated as all-blank)
        config: Composer settings

    Returns:
        New PageDescription

    Raises:
        CompositionError: If a question has more options than can be
            lettered under the configured overflow policy

    Example:
        >>> description = compose([q], LayoutMode.VERTICAL, False, header)
        >>> description.questions[0].prompt.text
        '1. 2+2=?'
    """
    config = config or DEFAULT_COMPOSER_CONFIG
    questions = tuple(questions or ())
    header = header if header is not None else HeaderMetadata()

    # Validate every question first so that both variants fail alike
    for question in questions:
        check_option_count(question.id, question.option_count, config.option_overflow)

    blocks: List[QuestionBlock] = [
        compose_question(question, index, layout, show_answers, config)
        for index, question in enumerate(questions)
    ]

    description = PageDescription(
        layout=layout,
        flow=flow_style(layout),
        header=_compose_header(header, config),
        questions=tuple(blocks),
        footer=FooterBlock(
            line=TextLine(
                text=config.footer_text,
                role=TextRole.FOOTER,
                style=TextStyle(font_size=config.footer_size, align=Align.CENTER),
            )
        ),
        show_answers=show_answers,
        watermark=header.watermark,
    )

    logger.debug(
        f"Composed {len(blocks)} question blocks "
        f"(layout={layout.value}, answers={show_answers})"
    )
    return description


def compose_question(
    question: Question,
    index: int,
    layout: LayoutMode,
    show_answers: bool,
    config: Optional[ComposerConfig] = None,
) -> QuestionBlock:
    """
    Build the block for the question at a 0-based index.

    Args:
        question: Question to render
        index: Position in the collection (display number is index + 1)
        layout: Layout mode, used for the grid slot
        show_answers: Whether to append the answer line
        config: Composer settings

    Returns:
        QuestionBlock with prompt, lettered options and optional answer
    """
    config = config or DEFAULT_COMPOSER_CONFIG
    number = index + 1

    option_style = TextStyle(font_size=config.option_size)
    options = tuple(
        TextLine(
            text=f"{option_letter(i, config.option_overflow)}) {option}",
            role=TextRole.OPTION,
            style=option_style,
        )
        for i, option in enumerate(question.options)
    )

    answer = None
    if show_answers:
        answer = TextLine(
            text=f"Answer: {question.answer}",
            role=TextRole.ANSWER,
            style=TextStyle(font_size=config.answer_size, color=config.answer_color),
        )

    return QuestionBlock(
        question_id=question.id,
        number=number,
        slot=slot_for(layout, index),
        prompt=TextLine(
            text=f"{number}. {question.text}",
            role=TextRole.PROMPT,
            style=TextStyle(font_size=config.question_size),
        ),
        options=options,
        answer=answer,
    )


def _compose_header(header: HeaderMetadata, config: ComposerConfig) -> HeaderBlock:
    """Header lines in fixed order: school name, subject, date."""
    subtitle = TextStyle(font_size=config.subtitle_size, align=Align.CENTER)
    return HeaderBlock(
        school_name=TextLine(
            text=header.school_name,
            role=TextRole.TITLE,
            style=TextStyle(font_size=config.title_size, bold=True, align=Align.CENTER),
        ),
        subject=TextLine(text=f"Subject: {header.subject}", role=TextRole.SUBTITLE, style=subtitle),
        date=TextLine(text=f"Date: {header.date}", role=TextRole.SUBTITLE, style=subtitle),
    )
