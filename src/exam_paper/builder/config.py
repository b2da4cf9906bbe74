"""
Module: builder.config

Purpose:
    Configuration dataclass for the dual export. Immutable
    configuration with validation on construction.

Key Classes:
    - ExportConfig: Filenames, worker count and composer settings

Dependencies:
    - dataclasses (std)

Used By:
    - builder.controller: Dual export
    - cli: Command line options
"""

from __future__ import annotations

from dataclasses import dataclass, field

from exam_paper.builder.layout.config import ComposerConfig


QUESTIONS_ONLY_STEM = "questions_only"
WITH_ANSWERS_STEM = "questions_with_answers"


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for exporting a paper pair (immutable).

    The filename stems are part of the external contract: they never
    depend on header metadata.

    Attributes:
        questions_only_stem: Filename stem of the no-answers variant
        with_answers_stem: Filename stem of the answers variant
        max_workers: Threads used for the two renders (1 = sequential)
        poll_interval: Seconds between cancellation checks while waiting
        composer: Composer settings shared by both variants

    Example:
        >>> config = ExportConfig()
        >>> config.filename_for(show_answers=True, extension="pdf")
        'questions_with_answers.pdf'
    """

    questions_only_stem: str = QUESTIONS_ONLY_STEM
    with_answers_stem: str = WITH_ANSWERS_STEM
    max_workers: int = 2
    poll_interval: float = 0.05
    composer: ComposerConfig = field(default_factory=ComposerConfig)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.questions_only_stem or not self.with_answers_stem:
            raise ValueError("filename stems must not be empty")
        if self.questions_only_stem == self.with_answers_stem:
            raise ValueError(
                f"filename stems must differ: {self.questions_only_stem!r}"
            )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1: {self.max_workers}")
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive: {self.poll_interval}")

    def filename_for(self, *, show_answers: bool, extension: str) -> str:
        """Fixed filename of a variant."""
        stem = self.with_answers_stem if show_answers else self.questions_only_stem
        return f"{stem}.{extension.lstrip('.')}"
