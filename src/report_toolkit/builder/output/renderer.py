"""
Module: builder.output.renderer

Purpose:
    Render a ReportLayout to a single-page PDF using ReportLab.
    Fixed blocks (header, title, summary, gallery heading, footer) are
    drawn at the heights from LayoutConfig; gallery cells are drawn at the
    positions computed by the composer with their images cover-cropped
    around the focal point.

Key Functions:
    - render_to_pdf(): Main rendering function

Dependencies:
    - reportlab: PDF generation
    - PIL: Cell images
    - builder.layout.models: ReportLayout, GalleryCell
    - builder.images: open_image, cover_crop, hex_to_rgb

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from PIL import Image
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from report_toolkit.builder.images import cover_crop, hex_to_rgb, open_image
from report_toolkit.builder.layout.config import LayoutConfig
from report_toolkit.builder.layout.models import GalleryCell, ReportLayout
from report_toolkit.core.models import ReportDocument

logger = logging.getLogger(__name__)

# Constants
DEFAULT_DPI = 200
MM_PER_INCH = 25.4

PRIMARY_TEXT = (0.118, 0.161, 0.231)    # slate-800
SECONDARY_TEXT = (0.278, 0.333, 0.412)  # slate-600
MUTED_TEXT = (0.580, 0.639, 0.722)      # slate-400
RULE_COLOR = (0.886, 0.910, 0.941)      # slate-200

# Generator footer
FOOTER_FONT_SIZE = 6


class RenderError(Exception):
    """PDF could not be produced as exactly one page."""
    pass


def _get_footer_text() -> str:
    """Get generator footer text with current version number."""
    try:
        from report_toolkit import __version__
        version = __version__
    except ImportError:
        version = "unknown"
    return f"Generated with Program Report Builder v{version}"


def format_program_date(value: date) -> str:
    """
    Long-form date as printed on the report.

    Example:
        >>> format_program_date(date(2026, 10, 7))
        '7 October 2026'
    """
    return f"{value.day} {value.strftime('%B %Y')}"


def render_to_pdf(
    layout: ReportLayout,
    output_path: Path,
    config: Optional[LayoutConfig] = None,
    *,
    dpi: int = DEFAULT_DPI,
    show_footer: bool = True,
) -> Path:
    """
    Render the layout to a one-page PDF file.

    Args:
        layout: Composed report layout
        output_path: Path to write PDF
        config: Layout configuration the layout was composed with
        dpi: Pixel density for cropped gallery images
        show_footer: Draw the small generator line at the page bottom

    Returns:
        ``output_path``

    Raises:
        RenderError: If the PDF cannot be written

    Example:
        >>> render_to_pdf(compose_report(doc), Path("output/report.pdf"))
    """
    config = config or LayoutConfig()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    page_size = (config.page_width * mm, config.page_height * mm)
    document = layout.document
    c = canvas.Canvas(str(output_path), pagesize=page_size)
    c.setTitle(document.title or "Program report")

    accent = hex_to_rgb(document.theme_color)
    page = _Page(c, config)

    _draw_header(page, document, accent)
    _draw_title(page, document, accent)
    _draw_summary(page, document, accent)
    _draw_gallery_heading(page)
    if layout.is_empty:
        _draw_placeholder(page, layout, accent)
    else:
        _draw_gallery(page, layout, dpi)
    _draw_signature_footer(page, document, accent)
    if show_footer:
        _draw_generator_footer(page)

    c.showPage()
    try:
        c.save()
    except OSError as e:
        raise RenderError(f"Cannot write PDF {output_path}: {e}") from e

    logger.info(f"Rendered report with {len(layout.cells)} images to {output_path}")
    return output_path


class _Page:
    """Canvas wrapper taking top-left millimetre coordinates."""

    def __init__(self, c: canvas.Canvas, config: LayoutConfig) -> None:
        self.c = c
        self.config = config

    def y(self, top_mm: float, height_mm: float = 0.0) -> float:
        """ReportLab y (points, bottom-left origin) of a box's bottom edge."""
        return (self.config.page_height - top_mm - height_mm) * mm

    @property
    def left(self) -> float:
        return self.config.padding

    @property
    def width(self) -> float:
        return self.config.content_width

    @property
    def header_top(self) -> float:
        return self.config.padding

    @property
    def title_top(self) -> float:
        return self.header_top + self.config.header_height

    @property
    def summary_top(self) -> float:
        return self.title_top + self.config.title_height

    @property
    def gallery_heading_top(self) -> float:
        return self.summary_top + self.config.summary_height

    @property
    def footer_top(self) -> float:
        return self.config.page_height - self.config.padding - self.config.footer_height


def _fit_lines(text: str, font: str, size: float, width_pt: float, max_lines: int) -> List[str]:
    """Wrap ``text`` to ``width_pt`` and truncate to ``max_lines`` with an ellipsis."""
    lines = simpleSplit(text or "", font, size, width_pt)
    if len(lines) <= max_lines:
        return lines
    kept = lines[:max_lines]
    last = kept[-1]
    while last and simpleSplit(last + "…", font, size, width_pt) != [last + "…"]:
        last = last[:-1].rstrip()
    kept[-1] = last + "…"
    return kept


def _draw_header(page: _Page, document: ReportDocument, accent) -> None:
    c = page.c
    top = page.header_top
    height = page.config.header_height

    c.setFillColorRGB(*PRIMARY_TEXT)
    c.setFont("Helvetica-Bold", 18)
    c.drawString(page.left * mm, page.y(top + 9), (document.organisation or "").upper())

    c.setFillColorRGB(*SECONDARY_TEXT)
    c.setFont("Helvetica-Bold", 7)
    c.drawString(page.left * mm, page.y(top + 15), (document.location or "").upper())

    # Accent badge
    c.setFillColorRGB(*accent)
    c.circle((page.left + page.width - 6) * mm, page.y(top + 8), 6 * mm, stroke=0, fill=1)

    c.setStrokeColorRGB(*RULE_COLOR)
    c.setLineWidth(0.6)
    rule_y = page.y(top + height - 2)
    c.line(page.left * mm, rule_y, (page.left + page.width) * mm, rule_y)


def _draw_title(page: _Page, document: ReportDocument, accent) -> None:
    c = page.c
    top = page.title_top
    center_x = (page.left + page.width / 2) * mm

    size = 26
    lines = _fit_lines(
        (document.title or "Program title").upper(),
        "Helvetica-BoldOblique",
        size,
        page.width * mm,
        max_lines=2,
    )
    c.setFillColorRGB(*PRIMARY_TEXT)
    c.setFont("Helvetica-BoldOblique", size)
    baseline = top + 11
    for line in lines:
        c.drawCentredString(center_x, page.y(baseline), line)
        baseline += 10

    date_text = format_program_date(document.program_date)
    c.setFont("Helvetica-Bold", 9)
    text_width = c.stringWidth(date_text, "Helvetica-Bold", 9)
    pill_width = text_width + 14 * mm
    pill_top = top + page.config.title_height - 10
    c.setFillColorRGB(1, 1, 1)
    c.setStrokeColorRGB(*RULE_COLOR)
    c.roundRect(center_x - pill_width / 2, page.y(pill_top, 7), pill_width, 7 * mm, 3.5 * mm, stroke=1, fill=1)
    c.setFillColorRGB(*accent)
    c.circle(center_x - pill_width / 2 + 4 * mm, page.y(pill_top + 3.5), 1.2 * mm, stroke=0, fill=1)
    c.setFillColorRGB(*SECONDARY_TEXT)
    c.drawCentredString(center_x + 2 * mm, page.y(pill_top + 4.7), date_text)


def _draw_summary(page: _Page, document: ReportDocument, accent) -> None:
    c = page.c
    top = page.summary_top
    height = page.config.summary_height - 6
    gap = 6
    half = (page.width - gap) / 2

    # Executive summary card
    c.setFillColorRGB(1, 1, 1)
    c.setStrokeColorRGB(*RULE_COLOR)
    c.roundRect(page.left * mm, page.y(top, height), half * mm, height * mm, 6 * mm, stroke=1, fill=1)
    c.setFillColorRGB(*accent)
    c.setFont("Helvetica-Bold", 7)
    c.drawString((page.left + 6) * mm, page.y(top + 8), "EXECUTIVE SUMMARY")

    c.setFillColorRGB(*SECONDARY_TEXT)
    c.setFont("Helvetica-Oblique", 10)
    lines = _fit_lines(f"“{document.description}”", "Helvetica-Oblique", 10, (half - 12) * mm, max_lines=6)
    baseline = top + 14
    for line in lines:
        c.drawString((page.left + 6) * mm, page.y(baseline), line)
        baseline += 4.6

    # Objective / impact
    column_left = page.left + half + gap
    column_width = half - 14
    for offset, label, text in (
        (0, "MAIN OBJECTIVE", document.objective),
        (height / 2, "MAIN IMPACT", document.impact),
    ):
        block_top = top + offset
        c.setFillColorRGB(*accent)
        c.roundRect(column_left * mm, page.y(block_top + 2, 10), 10 * mm, 10 * mm, 3 * mm, stroke=0, fill=1)
        c.setFillColorRGB(*MUTED_TEXT)
        c.setFont("Helvetica-Bold", 6)
        c.drawString((column_left + 14) * mm, page.y(block_top + 5), label)
        c.setFillColorRGB(*PRIMARY_TEXT)
        c.setFont("Helvetica-Bold", 11)
        text_lines = _fit_lines(text, "Helvetica-Bold", 11, column_width * mm, max_lines=3)
        baseline = block_top + 10
        for line in text_lines:
            c.drawString((column_left + 14) * mm, page.y(baseline), line)
            baseline += 4.8


def _draw_gallery_heading(page: _Page) -> None:
    c = page.c
    middle = page.gallery_heading_top + page.config.gallery_heading_height / 2
    label = "EVENT GALLERY"
    c.setFont("Helvetica-Bold", 7)
    label_width = c.stringWidth(label, "Helvetica-Bold", 7) / mm
    center = page.left + page.width / 2

    c.setFillColorRGB(*SECONDARY_TEXT)
    c.drawCentredString(center * mm, page.y(middle + 1), label)
    c.setStrokeColorRGB(*RULE_COLOR)
    c.setLineWidth(0.5)
    c.line(page.left * mm, page.y(middle), (center - label_width / 2 - 4) * mm, page.y(middle))
    c.line((center + label_width / 2 + 4) * mm, page.y(middle), (page.left + page.width) * mm, page.y(middle))


def _draw_placeholder(page: _Page, layout: ReportLayout, accent) -> None:
    c = page.c
    top = layout.gallery_top + 4
    height = layout.gallery_height - 8

    c.saveState()
    c.setStrokeColorRGB(*RULE_COLOR)
    c.setLineWidth(1.2)
    c.setDash(4, 3)
    c.roundRect(page.left * mm, page.y(top, height), page.width * mm, height * mm, 10 * mm, stroke=1, fill=0)
    c.restoreState()

    center_x = (page.left + page.width / 2) * mm
    middle = top + height / 2
    c.setFillColorRGB(*accent)
    c.circle(center_x, page.y(middle - 8), 7 * mm, stroke=0, fill=1)
    c.setFillColorRGB(*MUTED_TEXT)
    c.setFont("Helvetica-Bold", 11)
    c.drawCentredString(center_x, page.y(middle + 6), "AWAITING PHOTOS")
    c.setFont("Helvetica", 7)
    c.drawCentredString(center_x, page.y(middle + 11), "Upload 3+ high-resolution photos")


def _cell_pixels(cell: GalleryCell, dpi: int) -> tuple[int, int]:
    return (
        max(1, round(cell.width / MM_PER_INCH * dpi)),
        max(1, round(cell.height / MM_PER_INCH * dpi)),
    )


def _draw_gallery(page: _Page, layout: ReportLayout, dpi: int) -> None:
    c = page.c
    decoded: Dict[str, Image.Image] = {}

    for cell in layout.cells:
        entry = layout.document.get(cell.image_id)
        if entry is None:
            logger.warning(f"Layout references missing image {cell.image_id}")
            continue
        if cell.image_id not in decoded:
            decoded[cell.image_id] = open_image(entry.source)
        cropped = cover_crop(decoded[cell.image_id], cell.transform, _cell_pixels(cell, dpi))

        x = cell.x * mm
        y = page.y(cell.y, cell.height)
        w = cell.width * mm
        h = cell.height * mm

        c.saveState()
        path = c.beginPath()
        path.roundRect(x, y, w, h, 5 * mm)
        c.clipPath(path, stroke=0, fill=0)
        c.drawImage(ImageReader(cropped), x, y, width=w, height=h)

        # Caption strip
        c.setFillColorRGB(0.06, 0.09, 0.16)
        c.setFillAlpha(0.55)
        c.rect(x, y, w, 7 * mm, stroke=0, fill=1)
        c.setFillAlpha(1)
        c.setFillColorRGB(1, 1, 1)
        c.setFont("Helvetica-Bold", 6)
        c.drawString(x + 4 * mm, y + 2.6 * mm, f"VISUAL RECORD #{cell.index + 1}")
        c.restoreState()


def _draw_signature_footer(page: _Page, document: ReportDocument, accent) -> None:
    c = page.c
    top = page.footer_top + 4

    c.setStrokeColorRGB(*accent)
    c.setLineWidth(0.8)
    c.line(page.left * mm, page.y(top), (page.left + 60) * mm, page.y(top))

    c.setFillColorRGB(*SECONDARY_TEXT)
    c.setFont("Helvetica-Bold", 6)
    c.drawString(page.left * mm, page.y(top + 5), "PREPARED BY")

    c.setStrokeColorRGB(*RULE_COLOR)
    c.line(page.left * mm, page.y(top + 15), (page.left + 45) * mm, page.y(top + 15))

    c.setFillColorRGB(*PRIMARY_TEXT)
    c.setFont("Helvetica-Bold", 9)
    c.drawString(page.left * mm, page.y(top + 19), "PROGRAM COORDINATOR")

    affiliation = " · ".join(part for part in (document.organisation, document.location) if part)
    if affiliation:
        c.setFillColorRGB(*SECONDARY_TEXT)
        c.setFont("Helvetica", 6)
        c.drawString(page.left * mm, page.y(top + 23), affiliation.upper())


def _draw_generator_footer(page: _Page) -> None:
    """Small centred generator line inside the bottom padding."""
    c = page.c
    c.saveState()
    c.setFont("Helvetica", FOOTER_FONT_SIZE)
    c.setFillColorRGB(0.6, 0.6, 0.6)
    c.drawCentredString(
        page.config.page_width / 2 * mm,
        page.y(page.config.page_height - page.config.padding / 2),
        _get_footer_text(),
    )
    c.restoreState()
