"""
Module: builder.layout.fit

Purpose:
    Check that header, body, gallery and footer fit on exactly one page.
    The gallery gets the height left after the fixed blocks; when it would
    overflow, the fix is always to show fewer images, never to shrink text
    or add a page.

Key Functions:
    - validate_page_fit(): Fit check plus the image count that would fit
    - rows_that_fit(): Whole rows that fit in a given height

Dependencies:
    - builder.layout.models: PageFit

Used By:
    - builder.layout.composer: Truncates the image set on overflow
"""

from __future__ import annotations

import math

from .config import DEFAULT_CAPACITY, DEFAULT_GALLERY_GAP_MM, DEFAULT_MIN_CELL_HEIGHT_MM
from .models import PageFit

# Float slack when comparing millimetre heights
FIT_TOLERANCE = 1e-6


def rows_that_fit(available_height: float, row_height: float, row_gap: float = 0.0) -> int:
    """
    Number of whole rows of ``row_height`` separated by ``row_gap``.

    Example:
        >>> rows_that_fit(121, 24, 5)
        4
    """
    if row_height <= 0:
        return 0
    if available_height + FIT_TOLERANCE < row_height:
        return 0
    return int(math.floor((available_height + row_gap + FIT_TOLERANCE) / (row_height + row_gap)))


def validate_page_fit(
    header_height: float,
    body_height: float,
    gallery_height: float,
    footer_height: float,
    page_height: float,
    *,
    columns: int = 1,
    row_height: float = DEFAULT_MIN_CELL_HEIGHT_MM,
    row_gap: float = DEFAULT_GALLERY_GAP_MM,
    capacity: int = DEFAULT_CAPACITY,
) -> PageFit:
    """
    Check whether all blocks fit within one page.

    Args:
        header_height: Fixed header block
        body_height: Fixed title/summary blocks
        gallery_height: Height the gallery would need
        footer_height: Fixed footer block
        page_height: Usable page height
        columns: Grid columns, used for the image count that fits
        row_height: Smallest allowed gallery row height (default 24mm)
        row_gap: Gap between gallery rows (default 5mm)
        capacity: Page capacity cap

    Returns:
        PageFit. ``max_images_if_overflow`` is always the number of images
        the remaining height can hold at ``row_height``, capped by capacity.

    Example:
        >>> fit = validate_page_fit(22, 96, 150, 28, 267,
        ...                         columns=1, row_height=24, row_gap=5)
        >>> fit.fits, fit.max_images_if_overflow
        (False, 4)
    """
    available = page_height - header_height - body_height - footer_height
    fits = gallery_height <= available + FIT_TOLERANCE

    rows = rows_that_fit(available, row_height, row_gap)
    max_images = min(max(0, capacity), max(1, columns) * rows)

    return PageFit(
        fits=fits,
        max_images_if_overflow=max_images,
        available_height=max(0.0, available),
    )
