"""
Module: builder.session

Purpose:
    Own the current ReportDocument and route every change through the
    reducer. Wires uploads to background focal-point detection and the
    enhance action to the content enhancer.

Key Classes:
    - ReportSession: Single-owner report state

Concurrency:
    Only the thread that owns the session reduces the document. Detection
    workers post commands into an inbox queue; ``process_pending()``
    applies them in arrival order. Completions are addressed by image id,
    so removals never misroute a late result.

Dependencies:
    - queue (std): Worker -> owner inbox
    - builder.state: Commands and reducer
    - builder.focal.service: Background detection
    - builder.images: Ingestion and theme colours
    - builder.layout: compose_report

Used By:
    - builder.controller: build_report()
    - report_toolkit.cli
"""

from __future__ import annotations

import logging
import queue
import random
from datetime import date
from typing import Any, Callable, List, Optional

from report_toolkit.core.models import (
    FocalPoint,
    ImageEntry,
    ImageSource,
    LayoutMode,
    ReportDocument,
)

from .focal.service import FocalPointDetector, FocalPointService
from .images.palette import extract_theme_color, random_theme_color
from .layout import LayoutConfig, ReportLayout, compose_report
from .services.enhancer import ContentEnhancer
from .state import (
    AddImage,
    ApplyEnhancement,
    Command,
    EnhancedContent,
    MarkProcessing,
    MoveImage,
    RemoveImage,
    SetFocalPoint,
    SetOrientation,
    SetThemeColor,
    UpdateFields,
    reduce,
)

logger = logging.getLogger(__name__)

Listener = Callable[[ReportDocument], None]


class ReportSession:
    """
    Mutable holder of an immutable report document.

    Usage:
        with ReportSession(detector=detector) as session:
            image_id = session.add_image(source)
            session.set_orientation("tall")
            session.wait_for_detections(timeout=30)
            layout = session.layout()

    Attributes:
        document: Current document version
        is_enhancing: True while the enhancer call is running
    """

    def __init__(
        self,
        document: Optional[ReportDocument] = None,
        *,
        detector: Optional[FocalPointDetector] = None,
        enhancer: Optional[ContentEnhancer] = None,
        layout_config: Optional[LayoutConfig] = None,
        max_workers: int = 4,
        detection_timeout_s: float = 30.0,
    ) -> None:
        self._document = document or ReportDocument()
        self._inbox: "queue.Queue[Command]" = queue.Queue()
        self._listeners: List[Listener] = []
        self._enhancer = enhancer
        self.layout_config = layout_config or LayoutConfig()
        self.is_enhancing = False
        self._detection: Optional[FocalPointService] = None
        if detector is not None:
            self._detection = FocalPointService(
                detector,
                post=self._inbox.put,
                max_workers=max_workers,
                timeout_s=detection_timeout_s,
            )

    @property
    def document(self) -> ReportDocument:
        return self._document

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new document; returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def dispatch(self, command: Command) -> ReportDocument:
        """Apply ``command`` on the owner thread and notify listeners on change."""
        previous = self._document
        self._document = reduce(previous, command)
        if self._document is not previous:
            for listener in list(self._listeners):
                listener(self._document)
        return self._document

    def process_pending(self) -> int:
        """Apply commands posted by background workers. Returns how many."""
        applied = 0
        while True:
            try:
                command = self._inbox.get_nowait()
            except queue.Empty:
                return applied
            self.dispatch(command)
            applied += 1

    # -- images ---------------------------------------------------------

    def add_image(self, source: ImageSource, focal_point: Any = None) -> str:
        """
        Add an uploaded image and start automatic detection.

        A ``focal_point`` given here is a manual placement and skips
        detection. Returns the new image id.
        """
        point = None
        if focal_point is not None:
            point = FocalPoint.from_mapping(focal_point)
            if point is None and isinstance(focal_point, (tuple, list)) and len(focal_point) == 2:
                point = FocalPoint.coerce(*focal_point)
        entry = ImageEntry.create(source, focal_point=point)

        theme_color = None
        if self._document.image_count == 0:
            theme_color = extract_theme_color(source)

        self.dispatch(AddImage(entry, theme_color=theme_color))
        logger.info(f"Added image {entry.id} ({source.name or source.mime_type}, {source.width}x{source.height})")

        if self._detection is not None and not entry.manual:
            self.dispatch(MarkProcessing(entry.id))
            self._detection.submit(entry)
        return entry.id

    def remove_image(self, image_id: str) -> ReportDocument:
        return self.dispatch(RemoveImage(image_id))

    def move_image(self, image_id: str, index: int) -> ReportDocument:
        return self.dispatch(MoveImage(image_id, index))

    def set_focal_point(self, image_id: str, point: Any) -> ReportDocument:
        return self.dispatch(SetFocalPoint(image_id, point))

    def wait_for_detections(self, timeout: Optional[float] = None) -> ReportDocument:
        """Wait for in-flight detections, then apply their results."""
        if self._detection is not None:
            self._detection.wait_all(timeout)
        self.process_pending()
        return self._document

    # -- form -----------------------------------------------------------

    def set_orientation(self, mode: LayoutMode | str) -> ReportDocument:
        return self.dispatch(SetOrientation(mode))

    def set_theme_color(self, color: str) -> ReportDocument:
        return self.dispatch(SetThemeColor(color))

    def randomize_theme_color(self, rng: Optional[random.Random] = None) -> ReportDocument:
        return self.dispatch(SetThemeColor(random_theme_color(rng)))

    def update_fields(
        self,
        *,
        title: Optional[str] = None,
        program_date: Optional[date] = None,
        description: Optional[str] = None,
        objective: Optional[str] = None,
        impact: Optional[str] = None,
        organisation: Optional[str] = None,
        location: Optional[str] = None,
    ) -> ReportDocument:
        return self.dispatch(UpdateFields(
            title=title,
            program_date=program_date,
            description=description,
            objective=objective,
            impact=impact,
            organisation=organisation,
            location=location,
        ))

    def enhance(self) -> Optional[EnhancedContent]:
        """
        Rewrite the text fields with the content enhancer.

        Does nothing without an enhancer or when title/description are
        empty. On failure the fields are left unchanged and the busy flag
        is cleared so the action can be retried.
        """
        doc = self._document
        if self._enhancer is None or not doc.title.strip() or not doc.description.strip():
            return None

        self.is_enhancing = True
        try:
            content = self._enhancer.enhance(doc.title, doc.description)
        except Exception as e:
            logger.warning(f"Content enhancement failed: {e}")
            content = None
        finally:
            self.is_enhancing = False

        self.dispatch(ApplyEnhancement(content))
        return content

    # -- layout ---------------------------------------------------------

    def layout(self) -> ReportLayout:
        """Compose the current document (pure, safe to call every render)."""
        return compose_report(self._document, self.layout_config)

    def close(self) -> None:
        if self._detection is not None:
            self._detection.shutdown(wait=False)

    def __enter__(self) -> "ReportSession":
        return self

    def __exit__(self, *args) -> None:
        self.close()
