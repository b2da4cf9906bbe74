"""
Module: snapshot

Purpose:
    The (questions, layout, header) triple captured once per preview or
    export cycle. Every render of a cycle reads the same snapshot.

Key Classes:
    - ExportSnapshot: Immutable render input
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from .header import HeaderMetadata
from .layout_mode import LayoutMode
from .questions import Question


@dataclass(frozen=True)
class ExportSnapshot:
    """
    Immutable render input.

    Attributes:
        questions: Questions in display order
        layout: Layout mode
        header: Header metadata
    """

    questions: Tuple[Question, ...] = ()
    layout: LayoutMode = LayoutMode.VERTICAL
    header: HeaderMetadata = HeaderMetadata()

    @classmethod
    def capture(
        cls,
        questions: Optional[Iterable[Question]],
        layout: Union[LayoutMode, str] = LayoutMode.VERTICAL,
        header: Optional[HeaderMetadata] = None,
    ) -> ExportSnapshot:
        """Freeze the given state into a snapshot."""
        return cls(
            questions=tuple(questions or ()),
            layout=LayoutMode.parse(layout),
            header=header if header is not None else HeaderMetadata(),
        )

    @property
    def question_count(self) -> int:
        return len(self.questions)
