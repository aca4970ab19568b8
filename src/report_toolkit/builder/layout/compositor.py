"""
Module: builder.layout.compositor

Purpose:
    Map a focal point onto a cover-cropped cell.

    The image is scaled so it fully covers the cell and the overflowing
    axis is cropped. The crop window is centred on the focal point where
    possible and saturates at the image edge otherwise. The result is an
    ``object-position`` pair, where p% places the window's leading edge
    at p/100 * (1 - visible_fraction) of the source extent.

Key Functions:
    - compute_transform(): Focal point + aspect ratios -> CropTransform
    - visible_fraction(): Share of each source axis that survives the crop

Dependencies:
    - builder.layout.models: CropTransform
    - core.models.focal: coerce_percentage

Used By:
    - builder.layout.composer: Per-cell transforms
    - builder.images.cropper: Pixel crop boxes
"""

from __future__ import annotations

import math
from typing import Any

from report_toolkit.core.models.focal import CENTER_PERCENT, coerce_percentage

from .models import CropTransform


def _valid_ratio(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        # Ratios beyond float range are as unusable as infinite ones
        return False
    return math.isfinite(number) and number > 0


def _focal_coordinates(focal_point: Any) -> tuple[float, float]:
    """Extract (x, y) from a FocalPoint, mapping, pair or None."""
    if focal_point is None:
        return (CENTER_PERCENT, CENTER_PERCENT)
    if hasattr(focal_point, "x") and hasattr(focal_point, "y"):
        raw_x, raw_y = focal_point.x, focal_point.y
    elif hasattr(focal_point, "get"):
        raw_x, raw_y = focal_point.get("x"), focal_point.get("y")
    else:
        try:
            raw_x, raw_y = focal_point
        except (TypeError, ValueError):
            return (CENTER_PERCENT, CENTER_PERCENT)
    return (coerce_percentage(raw_x), coerce_percentage(raw_y))


def visible_fraction(cell_aspect_ratio: float, image_aspect_ratio: float) -> tuple[float, float]:
    """
    Fraction of the source width and height visible under cover scaling.

    Example:
        >>> visible_fraction(1.0, 2.0)   # wide image in a square cell
        (0.5, 1.0)
    """
    if image_aspect_ratio > cell_aspect_ratio:
        return (cell_aspect_ratio / image_aspect_ratio, 1.0)
    return (1.0, image_aspect_ratio / cell_aspect_ratio)


def _axis_position(focal_percent: float, fraction: float) -> float:
    """object-position percentage for one axis."""
    if fraction >= 1.0:
        return CENTER_PERCENT
    focal = focal_percent / 100.0
    leading_edge = min(max(focal - fraction / 2.0, 0.0), 1.0 - fraction)
    return min(100.0, max(0.0, leading_edge / (1.0 - fraction) * 100.0))


def compute_transform(
    focal_point: Any,
    cell_aspect_ratio: float,
    image_aspect_ratio: float,
) -> CropTransform:
    """
    Compute the crop transform that keeps ``focal_point`` visible.

    Never raises. Out-of-range focal values are clamped, NaN/None/non-numeric
    values count as 50. When either aspect ratio is unusable there is no
    geometry to crop against, so the clamped focal point is returned as-is.

    Args:
        focal_point: FocalPoint, {"x", "y"} mapping, (x, y) pair or None
        cell_aspect_ratio: Cell width / height
        image_aspect_ratio: Source image width / height

    Returns:
        CropTransform with positions in [0, 100] and scale >= 1

    Example:
        >>> t = compute_transform(FocalPoint(10, 10), 1.0, 2.0)
        >>> (t.position_x, t.position_y)
        (0.0, 50.0)
    """
    focal_x, focal_y = _focal_coordinates(focal_point)

    if not (_valid_ratio(cell_aspect_ratio) and _valid_ratio(image_aspect_ratio)):
        return CropTransform(focal_x, focal_y, 1.0)

    cell_ratio = float(cell_aspect_ratio)
    image_ratio = float(image_aspect_ratio)
    fraction_x, fraction_y = visible_fraction(cell_ratio, image_ratio)
    scale = max(image_ratio / cell_ratio, cell_ratio / image_ratio)

    return CropTransform(
        position_x=_axis_position(focal_x, fraction_x),
        position_y=_axis_position(focal_y, fraction_y),
        scale=scale,
    )
