"""
Module: builder.output.preview

Purpose:
    Post-render checks and previews using PyMuPDF: confirm the PDF is
    exactly one page of the configured size and rasterise it to PNG.

Key Functions:
    - verify_single_page(): Raise RenderError unless one page of the right size
    - render_preview_png(): Rasterise the page for on-screen preview

Dependencies:
    - fitz (PyMuPDF): PDF inspection and rasterisation

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import logging
from pathlib import Path

import fitz

from report_toolkit.builder.layout.config import LayoutConfig

from .renderer import RenderError

logger = logging.getLogger(__name__)

POINTS_PER_MM = 72 / 25.4
# PDF media boxes are stored with limited precision
SIZE_TOLERANCE_PT = 0.5


def verify_single_page(pdf_path: Path, config: LayoutConfig) -> int:
    """
    Check that ``pdf_path`` holds exactly one page of the configured size.

    Returns:
        Page count (always 1 on success)

    Raises:
        RenderError: If the file is unreadable, has another page count, or
            the page size differs from the configuration
    """
    try:
        doc = fitz.open(str(pdf_path))
    except Exception as e:
        raise RenderError(f"Cannot open rendered PDF {pdf_path}: {e}") from e

    try:
        if doc.page_count != 1:
            raise RenderError(f"Expected exactly one page, found {doc.page_count}")
        rect = doc[0].rect
        expected_w = config.page_width * POINTS_PER_MM
        expected_h = config.page_height * POINTS_PER_MM
        if abs(rect.width - expected_w) > SIZE_TOLERANCE_PT or abs(rect.height - expected_h) > SIZE_TOLERANCE_PT:
            raise RenderError(
                f"Page size {rect.width:.1f}x{rect.height:.1f}pt does not match "
                f"{expected_w:.1f}x{expected_h:.1f}pt"
            )
        return doc.page_count
    finally:
        doc.close()


def render_preview_png(pdf_path: Path, png_path: Path, dpi: int = 96) -> Path:
    """
    Rasterise the first page of ``pdf_path`` to ``png_path``.

    Returns:
        ``png_path``
    """
    png_path = Path(png_path)
    png_path.parent.mkdir(parents=True, exist_ok=True)
    with fitz.open(str(pdf_path)) as doc:
        pix = doc[0].get_pixmap(dpi=dpi)
        pix.save(str(png_path))
    logger.info(f"Saved preview {png_path} ({pix.width}x{pix.height})")
    return png_path
