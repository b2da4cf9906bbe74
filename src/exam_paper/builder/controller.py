"""
Module: builder.controller

Purpose:
    Orchestrate the dual export of an exam paper.
    Snapshot → Compose ×2 → Render ×2 (concurrent) → Join → Deliver ×2

Key Functions:
    - export_pair(): Main entry point (thread pool)
    - export_pair_async(): asyncio variant with task cancellation

Key Classes:
    - ExportResult: Complete export result
    - VariantFailure: One failed stage of one variant
    - ExportCancelled: Export abandoned before delivery

Dependencies:
    - concurrent.futures (std): Two independent render futures
    - builder.layout: Composition
    - builder.output: Rendering and delivery

Used By:
    - host.preview_host: Export action
    - cli: Headless export
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from exam_paper.core.models import ExportSnapshot, HeaderMetadata, LayoutMode, Question

from .config import ExportConfig
from .layout import PageDescription, compose
from .output import (
    Deliverer,
    DocumentRenderer,
    ExportArtifact,
    PdfRenderer,
    Variant,
)

logger = logging.getLogger(__name__)

# Delivery order is part of the contract: no-answers first
VARIANTS: Tuple[Variant, ...] = (Variant.QUESTIONS_ONLY, Variant.WITH_ANSWERS)


class ExportCancelled(Exception):
    """Export was abandoned before delivery completed."""
    pass


@dataclass(frozen=True)
class VariantFailure:
    """
    A failed stage of one variant.

    Attributes:
        variant: Variant that failed
        stage: "compose", "render" or "deliver"
        error: The exception raised by that stage
    """

    variant: Variant
    stage: str
    error: BaseException

    @property
    def message(self) -> str:
        return f"{self.variant.value}: {self.stage} failed: {self.error}"


@dataclass(frozen=True)
class ExportResult:
    """
    Complete export result (immutable).

    Attributes:
        artifacts: Successfully rendered artifacts, keyed by variant
        delivered: Where each delivered artifact ended up, keyed by variant
        failures: Failed stages, in the order they were observed
        delivery_attempted: False when no deliverer was supplied
        elapsed: Wall time in seconds

    Example:
        >>> result = export_pair(questions, LayoutMode.VERTICAL, header, deliverer=d)
        >>> result.completed
        True
        >>> [a.filename for a in result.pair]
        ['questions_only.pdf', 'questions_with_answers.pdf']
    """

    artifacts: Dict[Variant, ExportArtifact] = field(default_factory=dict)
    delivered: Dict[Variant, Optional[Path]] = field(default_factory=dict)
    failures: Tuple[VariantFailure, ...] = ()
    delivery_attempted: bool = True
    elapsed: float = 0.0

    @property
    def pair(self) -> Tuple[Optional[ExportArtifact], Optional[ExportArtifact]]:
        """(no-answers, with-answers) artifacts; None for a failed variant."""
        return (
            self.artifacts.get(Variant.QUESTIONS_ONLY),
            self.artifacts.get(Variant.WITH_ANSWERS),
        )

    @property
    def completed(self) -> bool:
        """Both variants rendered and (when a deliverer was given) delivered."""
        if self.failures or len(self.artifacts) != len(VARIANTS):
            return False
        if self.delivery_attempted:
            return len(self.delivered) == len(VARIANTS)
        return True

    @property
    def error_summary(self) -> str:
        return "; ".join(f.message for f in self.failures)


def export_pair(
    questions: Optional[Sequence[Question]],
    layout: Union[LayoutMode, str],
    header: Optional[HeaderMetadata],
    *,
    renderer: Optional[DocumentRenderer] = None,
    deliverer: Optional[Deliverer] = None,
    config: Optional[ExportConfig] = None,
    cancel_event: Optional[threading.Event] = None,
    on_complete: Optional[Callable[[ExportResult], None]] = None,
) -> ExportResult:
    """
    Export the no-answers and with-answers variants of one paper.

    Pipeline:
    1. Capture an immutable snapshot of (questions, layout, header)
    2. Compose both variants
    3. Render both variants as independent futures
    4. Join both renders
    5. Deliver each rendered variant in turn (no-answers first)
    6. Call on_complete when both were delivered

    A failure in one variant never aborts the other: it is recorded in
    ExportResult.failures and that variant is not delivered.

    Args:
        questions: Questions in display order (None is treated as empty)
        layout: Layout mode or its form value
        header: Header metadata (None is treated as all-blank)
        renderer: Rendering engine (PdfRenderer by default)
        deliverer: Save/download primitive (None = render only)
        config: Export configuration
        cancel_event: When set, the export is abandoned before delivery
        on_complete: Called with the result after both deliveries

    Returns:
        ExportResult with artifacts, delivery paths and failures

    Raises:
        ExportCancelled: If cancel_event was set before delivery finished

    Example:
        >>> result = export_pair(
        ...     questions,
        ...     LayoutMode.VERTICAL,
        ...     HeaderMetadata(school_name="Lincoln High"),
        ...     deliverer=DirectoryDeliverer(Path("out")),
        ... )
        >>> result.completed
        True
    """
    config = config or ExportConfig()
    renderer = renderer or PdfRenderer()
    cancel_event = cancel_event or threading.Event()
    start_time = time.perf_counter()

    snapshot = ExportSnapshot.capture(questions, layout, header)
    logger.info(
        f"Starting export of {snapshot.question_count} questions "
        f"(layout={snapshot.layout.value})"
    )

    failures: List[VariantFailure] = []

    # 1-2. Compose
    descriptions = _compose_variants(snapshot, config, failures)

    # 3-4. Render concurrently, join before any delivery
    rendered = _render_variants(descriptions, renderer, config, cancel_event, failures)
    artifacts = _to_artifacts(rendered, renderer, config)

    # 5. Deliver
    delivered: Dict[Variant, Optional[Path]] = {}
    if deliverer is not None:
        delivered = _deliver_variants(artifacts, deliverer, cancel_event, failures)

    result = ExportResult(
        artifacts=artifacts,
        delivered=delivered,
        failures=tuple(failures),
        delivery_attempted=deliverer is not None,
        elapsed=time.perf_counter() - start_time,
    )
    _log_outcome(result)

    # 6. Signal completion
    if result.completed and on_complete is not None:
        on_complete(result)

    return result


async def export_pair_async(
    questions: Optional[Sequence[Question]],
    layout: Union[LayoutMode, str],
    header: Optional[HeaderMetadata],
    *,
    renderer: Optional[DocumentRenderer] = None,
    deliverer: Optional[Deliverer] = None,
    config: Optional[ExportConfig] = None,
    on_complete: Optional[Callable[[ExportResult], None]] = None,
) -> ExportResult:
    """
    asyncio variant of export_pair().

    The two renders run as tasks joined with gather(). Cancelling the
    awaiting task cancels the join, or stops delivery before the next
    artifact; nothing is delivered afterwards.

    Raises:
        asyncio.CancelledError: If the awaiting task is cancelled
    """
    config = config or ExportConfig()
    renderer = renderer or PdfRenderer()
    start_time = time.perf_counter()

    snapshot = ExportSnapshot.capture(questions, layout, header)
    failures: List[VariantFailure] = []
    descriptions = _compose_variants(snapshot, config, failures)

    variants = list(descriptions)
    outcomes = await asyncio.gather(
        *(asyncio.to_thread(renderer.render, descriptions[v]) for v in variants),
        return_exceptions=True,
    )

    rendered: Dict[Variant, bytes] = {}
    for variant, outcome in zip(variants, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.error(f"Rendering {variant.value} failed: {outcome}")
            failures.append(VariantFailure(variant, "render", outcome))
        else:
            rendered[variant] = outcome

    artifacts = _to_artifacts(rendered, renderer, config)

    delivered: Dict[Variant, Optional[Path]] = {}
    if deliverer is not None:
        # The worker thread outlives a cancelled await; the event stops it
        # before the next delivery
        cancel_event = threading.Event()
        try:
            delivered = await asyncio.to_thread(
                _deliver_variants, artifacts, deliverer, cancel_event, failures
            )
        except asyncio.CancelledError:
            cancel_event.set()
            logger.warning("Export cancelled; remaining deliveries abandoned")
            raise

    result = ExportResult(
        artifacts=artifacts,
        delivered=delivered,
        failures=tuple(failures),
        delivery_attempted=deliverer is not None,
        elapsed=time.perf_counter() - start_time,
    )
    _log_outcome(result)

    if result.completed and on_complete is not None:
        on_complete(result)
    return result


def _compose_variants(
    snapshot: ExportSnapshot,
    config: ExportConfig,
    failures: List[VariantFailure],
) -> Dict[Variant, PageDescription]:
    """Compose both variants from the same snapshot."""
    descriptions: Dict[Variant, PageDescription] = {}
    for variant in VARIANTS:
        try:
            descriptions[variant] = compose(
                snapshot.questions,
                snapshot.layout,
                variant.show_answers,
                snapshot.header,
                config=config.composer,
            )
        except Exception as e:
            logger.error(f"Composing {variant.value} failed: {e}")
            failures.append(VariantFailure(variant, "compose", e))
    return descriptions


def _render_variants(
    descriptions: Dict[Variant, PageDescription],
    renderer: DocumentRenderer,
    config: ExportConfig,
    cancel_event: threading.Event,
    failures: List[VariantFailure],
) -> Dict[Variant, bytes]:
    """
    Render every composed variant as an independent future.

    Waits for all futures, checking cancel_event between polls.

    Raises:
        ExportCancelled: If cancel_event is set while waiting
    """
    if not descriptions:
        return {}

    executor = ThreadPoolExecutor(
        max_workers=min(config.max_workers, len(descriptions)),
        thread_name_prefix="export-render",
    )
    futures: Dict[Variant, Future] = {
        variant: executor.submit(renderer.render, description)
        for variant, description in descriptions.items()
    }

    try:
        pending = set(futures.values())
        while pending:
            if cancel_event.is_set():
                raise ExportCancelled("Export cancelled while rendering")
            _, pending = wait(pending, timeout=config.poll_interval)
    except ExportCancelled:
        for future in futures.values():
            future.cancel()
        executor.shutdown(wait=False, cancel_futures=True)
        logger.warning("Export cancelled; in-flight renders abandoned")
        raise
    executor.shutdown(wait=True)

    rendered: Dict[Variant, bytes] = {}
    for variant in VARIANTS:
        future = futures.get(variant)
        if future is None:
            continue
        try:
            rendered[variant] = future.result()
        except Exception as e:
            logger.error(f"Rendering {variant.value} failed: {e}")
            failures.append(VariantFailure(variant, "render", e))
    return rendered


def _to_artifacts(
    rendered: Dict[Variant, bytes],
    renderer: DocumentRenderer,
    config: ExportConfig,
) -> Dict[Variant, ExportArtifact]:
    return {
        variant: ExportArtifact(
            variant=variant,
            filename=config.filename_for(
                show_answers=variant.show_answers,
                extension=renderer.extension,
            ),
            data=data,
        )
        for variant, data in rendered.items()
    }


def _deliver_variants(
    artifacts: Dict[Variant, ExportArtifact],
    deliverer: Deliverer,
    cancel_event: threading.Event,
    failures: List[VariantFailure],
) -> Dict[Variant, Optional[Path]]:
    """
    Deliver rendered artifacts in contract order.

    A failed delivery is recorded and does not stop the next one.

    Raises:
        ExportCancelled: If cancel_event is set before a delivery
    """
    delivered: Dict[Variant, Optional[Path]] = {}
    for variant in VARIANTS:
        artifact = artifacts.get(variant)
        if artifact is None:
            continue  # Render failed: never deliver a partial artifact
        if cancel_event.is_set():
            raise ExportCancelled(f"Export cancelled before delivering {artifact.filename}")
        try:
            delivered[variant] = deliverer.deliver(artifact)
        except Exception as e:
            logger.error(f"Delivering {artifact.filename} failed: {e}")
            failures.append(VariantFailure(variant, "deliver", e))
    return delivered


def _log_outcome(result: ExportResult) -> None:
    if result.completed:
        logger.info(f"Export completed in {result.elapsed:.2f}s")
    else:
        logger.warning(
            f"Export finished with {len(result.failures)} failure(s) "
            f"in {result.elapsed:.2f}s: {result.error_summary}"
        )
