"""
Module: builder.controller

Purpose:
    Orchestrate the complete report building pipeline.
    Detect -> Enhance -> Compose -> Render -> Verify

Key Functions:
    - build_report(): Main entry point for building a report
    - create_session(): Session wired to the Gemini collaborators

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - builder.session: Report state and detection
    - builder.layout: Composition
    - builder.output: PDF rendering and verification
    - builder.services.gemini: AI collaborators

Used By:
    - report_toolkit.cli: Command line
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from report_toolkit.core.models import ReportDocument

from .config import BuilderConfig
from .images import ImageLoadError
from .layout import ReportLayout, compose_report
from .output import RenderError, render_preview_png, render_to_pdf, verify_single_page
from .services.enhancer import ContentEnhancer
from .services.gemini import GeminiContentEnhancer, GeminiFocalPointDetector, create_client
from .session import ReportSession

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        pdf_path: Path to generated report PDF
        preview_path: PNG preview (if requested)
        layout: Layout that was rendered
        page_count: Pages in the PDF (always 1)
        metadata: Build metadata dictionary
        warnings: Any warnings during build

    Example:
        >>> result = build_report(session, config)
        >>> print(f"{result.layout.plan.shape} grid, {result.page_count} page")
    """
    pdf_path: Path
    preview_path: Optional[Path]
    layout: ReportLayout
    page_count: int
    metadata: dict
    warnings: tuple[str, ...]


def create_session(
    config: BuilderConfig,
    document: Optional[ReportDocument] = None,
    *,
    detect: bool = False,
    enhance: bool = False,
) -> ReportSession:
    """
    Create a session, optionally wired to Gemini detection/enhancement.

    Example:
        >>> session = create_session(BuilderConfig.from_env(), detect=True)
    """
    detector = None
    enhancer = None
    if detect or enhance:
        client = create_client(config.gemini_api_key, timeout_s=config.detection_timeout_s)
        if detect:
            detector = GeminiFocalPointDetector(client, model=config.gemini_model)
        if enhance:
            enhancer = GeminiContentEnhancer(
                client,
                model=config.gemini_model,
                language=config.enhancement_language,
            )
    return ReportSession(
        document,
        detector=detector,
        enhancer=enhancer,
        layout_config=config.layout,
        max_workers=config.max_detection_workers,
        detection_timeout_s=config.detection_timeout_s,
    )


def build_report(
    source: Union[ReportSession, ReportDocument],
    config: Optional[BuilderConfig] = None,
    *,
    enhance: bool = False,
    enhancer: Optional[ContentEnhancer] = None,
) -> BuildResult:
    """
    Build a one-page report PDF.

    Pipeline:
    1. Wait for outstanding focal-point detections (timeouts -> center)
    2. (Optional) Enhance the text fields
    3. Compose the gallery layout
    4. Render to PDF
    5. Verify exactly one page of the configured size
    6. (Optional) Export a PNG preview

    Args:
        source: Live session, or a document to build as-is
        config: Build configuration
        enhance: Run the content enhancer before rendering
        enhancer: Enhancer for a bare document (sessions carry their own)

    Returns:
        BuildResult with paths and metadata

    Raises:
        BuildError: If rendering or verification fails
    """
    config = config or BuilderConfig()
    start_time = time.perf_counter()

    if isinstance(source, ReportSession):
        session = source
    else:
        session = ReportSession(source, enhancer=enhancer, layout_config=config.layout)

    # 1. Detections
    session.wait_for_detections(config.detection_timeout_s)

    # 2. Enhancement
    if enhance:
        logger.info("Enhancing report text...")
        if session.enhance() is None:
            logger.info("Enhancement unavailable; keeping original text")

    document = session.document
    logger.info(
        f"Building report '{document.title}' with {document.image_count} images "
        f"({document.orientation.value} layout)"
    )

    # 3. Compose
    layout = compose_report(document, config.layout)
    warnings = list(layout.warnings)
    logger.info(
        f"Gallery: {layout.plan.columns}x{layout.plan.rows}, "
        f"{len(layout.cells)} shown, {len(layout.hidden_ids)} held back"
    )

    # 4. Render
    try:
        pdf_path = render_to_pdf(layout, config.pdf_path, config.layout, dpi=config.render_dpi)
    except (RenderError, ImageLoadError) as e:
        raise BuildError(f"Failed to render report: {e}") from e

    # 5. Verify
    try:
        page_count = verify_single_page(pdf_path, config.layout)
    except RenderError as e:
        raise BuildError(f"Rendered report failed verification: {e}") from e

    # 6. Preview
    preview_path = None
    if config.export_preview:
        preview_path = render_preview_png(pdf_path, config.preview_path)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Report built in {elapsed:.2f}s: {pdf_path}")

    metadata = _build_metadata(document, layout, elapsed)
    _write_metadata(config.metadata_path, metadata)

    return BuildResult(
        pdf_path=pdf_path,
        preview_path=preview_path,
        layout=layout,
        page_count=page_count,
        metadata=metadata,
        warnings=tuple(warnings),
    )


def _build_metadata(document: ReportDocument, layout: ReportLayout, elapsed: float) -> dict:
    """
    Build metadata dictionary for a generated report.

    Example:
        >>> _build_metadata(doc, layout, 0.4)["grid"]
        {'columns': 2, 'rows': 1}
    """
    return {
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "title": document.title,
        "program_date": document.program_date.isoformat(),
        "document_version": document.version,
        "orientation": document.orientation.value,
        "theme_color": document.theme_color,
        "image_count": document.image_count,
        "visible_images": len(layout.cells),
        "hidden_images": len(layout.hidden_ids),
        "grid": {"columns": layout.plan.columns, "rows": layout.plan.rows},
        "focal_points": {
            cell.image_id: {
                "x": document.get(cell.image_id).effective_focal_point.x,
                "y": document.get(cell.image_id).effective_focal_point.y,
                "object_position": cell.transform.object_position,
                "scale": round(cell.transform.scale, 4),
            }
            for cell in layout.cells
        },
        "warnings": list(layout.warnings),
        "elapsed_s": round(elapsed, 3),
    }


def _write_metadata(metadata_path: Path, metadata: dict) -> None:
    """
    Write metadata JSON beside the PDF.

    Raises:
        BuildError: If writing fails
    """
    try:
        with open(metadata_path, "w") as f:
            json.dump(metadata, f, indent=2)
        logger.debug(f"Wrote metadata to {metadata_path}")
    except OSError as e:
        raise BuildError(f"Failed to write metadata: {e}") from e
