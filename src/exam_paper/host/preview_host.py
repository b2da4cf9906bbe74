"""
Module: host.preview_host

Purpose:
    Single source of truth for the preview screen. Owns the layout mode
    and header metadata, feeds two live preview panes (answers hidden /
    shown) and the export action from the same state.

Key Classes:
    - PreviewPane: Recomposes one variant on every state change
    - PreviewHost: Editable state, previews and export

Dependencies:
    - PySide6.QtCore: QObject and signals
    - exam_paper.builder: compose(), export_pair()

Used By:
    - GUI front ends and the tests; form inputs call the setters
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional, Tuple, Union

from PIL import Image
from PySide6.QtCore import QObject, Signal

from exam_paper.builder import (
    ExportCancelled,
    ExportConfig,
    ExportResult,
    coerce_questions,
    compose,
    export_pair,
)
from exam_paper.builder.layout import ComposerConfig, CompositionError, PageDescription
from exam_paper.builder.output import (
    Deliverer,
    DocumentRenderer,
    PreviewRenderer,
    RenderFailure,
)
from exam_paper.core.models import ExportSnapshot, HeaderMetadata, LayoutMode, Question

logger = logging.getLogger(__name__)


class PreviewPane(QObject):
    """
    Live preview of one paper variant.

    Every refresh is an independent composition of the given snapshot;
    nothing is cached between refreshes.
    """

    descriptionChanged = Signal(object)
    imageChanged = Signal(object)
    previewFailed = Signal(str)

    def __init__(
        self,
        show_answers: bool,
        *,
        composer_config: Optional[ComposerConfig] = None,
        preview_renderer: Optional[PreviewRenderer] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.show_answers = show_answers
        self.composer_config = composer_config
        self.preview_renderer = preview_renderer
        self.description: Optional[PageDescription] = None
        self.image: Optional[Image.Image] = None
        self.snapshot: Optional[ExportSnapshot] = None
        self.error: Optional[str] = None

    def refresh(self, snapshot: ExportSnapshot) -> None:
        """Recompose (and optionally rasterise) this variant."""
        self.snapshot = snapshot
        try:
            description = compose(
                snapshot.questions,
                snapshot.layout,
                self.show_answers,
                snapshot.header,
                config=self.composer_config,
            )
        except CompositionError as e:
            self._fail(f"Preview unavailable: {e}")
            return

        self.description = description
        self.error = None
        self.descriptionChanged.emit(description)

        if self.preview_renderer is None:
            return
        try:
            self.image = self.preview_renderer.render(description)
        except RenderFailure as e:
            self._fail(f"Preview rendering failed: {e}")
            return
        self.imageChanged.emit(self.image)

    def _fail(self, message: str) -> None:
        logger.warning(message)
        self.description = None
        self.image = None
        self.error = message
        self.previewFailed.emit(message)


class PreviewHost(QObject):
    """
    Owns preview state and drives preview and export.

    State is the layout mode (default VERTICAL) and the header metadata
    (all fields blank). The question collection is received once at
    construction; None degrades to an empty collection.

    Signals:
        stateChanged(ExportSnapshot): After every effective edit
        exportFinished(ExportResult): After every export attempt
        exportFailed(str): User-visible failure summary
        navigateAway(): Both artifacts delivered; leave the preview

    Example:
        >>> host = PreviewHost(questions, deliverer=DirectoryDeliverer(out))
        >>> host.set_header_field("schoolName", "Lincoln High")
        >>> host.set_layout("horizontal")
        >>> host.export().completed
        True
    """

    stateChanged = Signal(object)
    exportFinished = Signal(object)
    exportFailed = Signal(str)
    navigateAway = Signal()

    def __init__(
        self,
        questions: Optional[Iterable[Union[Question, dict]]] = None,
        *,
        renderer: Optional[DocumentRenderer] = None,
        deliverer: Optional[Deliverer] = None,
        export_config: Optional[ExportConfig] = None,
        preview_renderer: Optional[PreviewRenderer] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._questions: Tuple[Question, ...] = coerce_questions(questions)
        self._layout = LayoutMode.VERTICAL
        self._header = HeaderMetadata()

        self.renderer = renderer
        self.deliverer = deliverer
        self.export_config = export_config or ExportConfig()
        self._cancel_event = threading.Event()
        self._closed = False

        composer_config = self.export_config.composer
        self.preview_without_answers = PreviewPane(
            False,
            composer_config=composer_config,
            preview_renderer=preview_renderer,
            parent=self,
        )
        self.preview_with_answers = PreviewPane(
            True,
            composer_config=composer_config,
            preview_renderer=preview_renderer,
            parent=self,
        )

        # Both panes hang off the same signal, so they refresh in the same cycle
        snapshot = self.snapshot()
        for pane in self.panes:
            self.stateChanged.connect(pane.refresh)
            pane.refresh(snapshot)

        logger.debug(f"Preview host ready with {len(self._questions)} questions")

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    @property
    def layout(self) -> LayoutMode:
        return self._layout

    @property
    def header(self) -> HeaderMetadata:
        return self._header

    @property
    def panes(self) -> Tuple[PreviewPane, PreviewPane]:
        return (self.preview_without_answers, self.preview_with_answers)

    def snapshot(self) -> ExportSnapshot:
        """Current (questions, layout, header) triple."""
        return ExportSnapshot(
            questions=self._questions,
            layout=self._layout,
            header=self._header,
        )

    def set_layout(self, layout: Union[LayoutMode, str]) -> None:
        """
        Select the layout mode (radio input).

        Raises:
            ValueError: If layout is not a known mode
        """
        mode = LayoutMode.parse(layout)
        if mode is self._layout:
            return
        self._layout = mode
        self._emit_state()

    def set_header_field(self, name: str, value: Optional[str]) -> None:
        """
        Update one header field (text input).

        Args:
            name: "schoolName", "subject", "date" or "watermark"
            value: New text, accepted as-is

        Raises:
            KeyError: If name is not a header field
        """
        self.set_header(self._header.with_field(name, value))

    def set_header(self, header: HeaderMetadata) -> None:
        """Replace all header fields at once."""
        if header == self._header:
            return
        self._header = header
        self._emit_state()

    def _emit_state(self) -> None:
        snapshot = self.snapshot()
        logger.debug(
            f"Preview state changed (layout={snapshot.layout.value}, "
            f"school={snapshot.header.school_name!r})"
        )
        self.stateChanged.emit(snapshot)

    # ─────────────────────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────────────────────

    def export(self, deliverer: Optional[Deliverer] = None) -> Optional[ExportResult]:
        """
        Export both variants of the current state.

        Emits exportFinished with the result, exportFailed when any
        variant failed, and navigateAway once both were delivered.
        The export can be retried without touching the state.

        Args:
            deliverer: Overrides the deliverer given at construction

        Returns:
            ExportResult, or None if the host was closed mid-export

        Raises:
            ValueError: If no deliverer is available
        """
        deliverer = deliverer or self.deliverer
        if deliverer is None:
            raise ValueError("No deliverer configured for export")
        if self._closed:
            logger.warning("Export requested after the preview host was closed")
            return None

        snapshot = self.snapshot()
        try:
            result = export_pair(
                snapshot.questions,
                snapshot.layout,
                snapshot.header,
                renderer=self.renderer,
                deliverer=deliverer,
                config=self.export_config,
                cancel_event=self._cancel_event,
            )
        except ExportCancelled as e:
            logger.info(f"Export abandoned: {e}")
            return None

        self.exportFinished.emit(result)
        if result.completed:
            self.navigateAway.emit()
        else:
            self.exportFailed.emit(f"Export failed: {result.error_summary}")
        return result

    def export_in_background(self, deliverer: Optional[Deliverer] = None) -> threading.Thread:
        """
        Run export() on a worker thread.

        Results arrive through the exportFinished / exportFailed /
        navigateAway signals.
        """
        def run_export() -> None:
            try:
                self.export(deliverer)
            except Exception as e:
                logger.exception("Unexpected export error")
                self.exportFailed.emit(f"Unexpected error: {e}")

        thread = threading.Thread(target=run_export, name="preview-export", daemon=True)
        thread.start()
        return thread

    def close(self) -> None:
        """Tear down: abandon any in-flight export."""
        self._closed = True
        self._cancel_event.set()
        logger.debug("Preview host closed")
