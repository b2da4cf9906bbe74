"""
Module: builder.loading.loader

Purpose:
    Accept the question collection handed over by question selection.
    An absent collection degrades to an empty one; a JSON file can be
    loaded for headless use.

Key Functions:
    - coerce_questions(): Normalise an upstream collection
    - load_questions(): Load a collection from a JSON file

Key Classes:
    - MissingInputError: Collection absent (recovered locally)
    - LoaderError: Collection unreadable or malformed

Dependencies:
    - json (std)
    - exam_paper.core.models: Question

Used By:
    - host.preview_host: Questions received at construction
    - cli: Questions file argument
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from exam_paper.core.models import Question

logger = logging.getLogger(__name__)


class MissingInputError(Exception):
    """Question collection was not supplied."""
    pass


class LoaderError(Exception):
    """Error loading a question collection."""
    pass


QuestionLike = Union[Question, Mapping[str, Any]]


def coerce_questions(raw: Optional[Iterable[QuestionLike]]) -> Tuple[Question, ...]:
    """
    Normalise an upstream question collection.

    Args:
        raw: Questions, question dicts, or None

    Returns:
        Tuple of Questions in input order; empty when raw is None

    Raises:
        LoaderError: If an entry is neither a Question nor a mapping
            with an "id", or a field has the wrong type
    """
    try:
        return _coerce_required(raw)
    except MissingInputError:
        logger.debug("No question collection supplied, using an empty one")
        return ()


def load_questions(path: Path) -> Tuple[Question, ...]:
    """
    Load a question collection from a JSON file.

    Accepts a top-level list of question dicts or an object with a
    "questions" list.

    Args:
        path: JSON file

    Returns:
        Tuple of Questions in file order

    Raises:
        LoaderError: If the file cannot be read, is not valid JSON,
            has the wrong shape, or repeats a question id

    Example:
        >>> questions = load_questions(Path("questions.json"))
        >>> questions[0].text
        '2+2=?'
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LoaderError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LoaderError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("questions")
    if not isinstance(data, list):
        raise LoaderError(f"{path} must contain a list of questions")

    questions = coerce_questions(data)
    _check_unique_ids(questions)

    logger.info(f"Loaded {len(questions)} questions from {path}")
    return questions


def _coerce_required(raw: Optional[Iterable[QuestionLike]]) -> Tuple[Question, ...]:
    if raw is None:
        raise MissingInputError("question collection is absent")

    questions: List[Question] = []
    for index, item in enumerate(raw):
        if isinstance(item, Question):
            questions.append(item)
        elif isinstance(item, Mapping):
            try:
                questions.append(Question.from_dict(dict(item)))
            except KeyError as e:
                raise LoaderError(f"Question #{index + 1} is missing field {e}") from e
            except (TypeError, ValueError) as e:
                raise LoaderError(f"Question #{index + 1} is malformed: {e}") from e
        else:
            raise LoaderError(
                f"Question #{index + 1} has unsupported type {type(item).__name__}"
            )
    return tuple(questions)


def _check_unique_ids(questions: Iterable[Question]) -> None:
    seen = set()
    for question in questions:
        if question.id in seen:
            raise LoaderError(f"Duplicate question id: {question.id!r}")
        seen.add(question.id)
