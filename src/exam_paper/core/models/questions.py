"""
Module: questions

Purpose:
    Provides the Question dataclass - the record handed over by the
    upstream question-selection step. Immutable; the composer only reads it.

Key Functions:
    - Question.has_options: Whether the question is multiple choice
    - Question.to_dict() / Question.from_dict(): Serialization

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.composer
    - builder.loading.loader
    - host.preview_host
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union


QuestionId = Union[int, str]


@dataclass(frozen=True)
class Question:
    """
    One exam item (immutable).

    Attributes:
        id: Identifier, unique within a collection
        text: Question prompt
        answer: Answer text (only shown in the answers variant)
        options: Ordered option strings, empty for open questions

    Example:
        >>> q = Question(id=1, text="2+2=?", answer="4", options=("3", "4", "5"))
        >>> q.has_options
        True
    """

    id: QuestionId
    text: str = ""
    answer: str = ""
    options: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Normalise fields on construction."""
        # Frozen: go through object.__setattr__ to coerce lists to tuples
        if not isinstance(self.options, tuple):
            object.__setattr__(self, "options", tuple(self.options or ()))
        if self.text is None:
            object.__setattr__(self, "text", "")
        if self.answer is None:
            object.__setattr__(self, "answer", "")

    @property
    def has_options(self) -> bool:
        """True when the question carries multiple-choice options."""
        return len(self.options) > 0

    @property
    def option_count(self) -> int:
        return len(self.options)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to dictionary for JSON storage.

        Options are omitted for open questions.

        Returns:
            Dict representation
        """
        d: Dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "answer": self.answer,
        }
        if self.options:
            d["options"] = list(self.options)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Question:
        """
        Deserialize from dictionary.

        Args:
            data: Dict with "id", "text", optional "options" and "answer"

        Returns:
            Question instance

        Raises:
            KeyError: If "id" is missing
            ValueError: If "options" is not a list
        """
        options: Optional[Any] = data.get("options")
        if options is not None and not isinstance(options, (list, tuple)):
            raise ValueError(
                f"options must be a list, got {type(options).__name__}"
            )
        return cls(
            id=data["id"],
            text=_as_text(data.get("text")),
            answer=_as_text(data.get("answer")),
            options=tuple(_as_text(opt) for opt in (options or ())),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Question({self.id!r}, options={len(self.options)})"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
