"""
Module: builder.layout.lettering

Purpose:
    Option letters for multiple-choice questions: 0 -> A, 1 -> B, ...
    Bounded to A-Z unless the EXTEND overflow policy is chosen.

Key Functions:
    - option_letter(): Letter for an option index
    - check_option_count(): Validate a question before composing
"""

from __future__ import annotations

import string

from .config import MAX_LETTERED_OPTIONS, OptionOverflow


LETTERS = string.ascii_uppercase


class CompositionError(Exception):
    """Question record cannot be composed into a page description."""
    pass


def option_letter(index: int, overflow: OptionOverflow = OptionOverflow.REJECT) -> str:
    """
    Letter for the option at a 0-based index.

    Args:
        index: Option position
        overflow: Policy for index >= 26

    Returns:
        "A".."Z"; beyond that "AA", "AB", ... under EXTEND

    Raises:
        CompositionError: If index is out of range under REJECT
        ValueError: If index is negative

    Example:
        >>> option_letter(2)
        'C'
        >>> option_letter(27, OptionOverflow.EXTEND)
        'AB'
    """
    if index < 0:
        raise ValueError(f"option index must be non-negative: {index}")
    if index < MAX_LETTERED_OPTIONS:
        return LETTERS[index]
    if overflow is OptionOverflow.REJECT:
        raise CompositionError(
            f"Option index {index} exceeds lettering range A-Z "
            f"({MAX_LETTERED_OPTIONS} options max)"
        )

    # Bijective base-26, same as spreadsheet column names
    letters = ""
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = LETTERS[rem] + letters
    return letters


def check_option_count(
    question_id: object,
    count: int,
    overflow: OptionOverflow = OptionOverflow.REJECT,
) -> None:
    """
    Validate a question's option count against the overflow policy.

    Raises:
        CompositionError: If count exceeds 26 under REJECT
    """
    if count > MAX_LETTERED_OPTIONS and overflow is OptionOverflow.REJECT:
        raise CompositionError(
            f"Question {question_id!r} has {count} options; "
            f"at most {MAX_LETTERED_OPTIONS} can be lettered"
        )
