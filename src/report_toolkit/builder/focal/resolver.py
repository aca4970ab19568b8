"""
Module: builder.focal.resolver

Purpose:
    Decide the focal point for an image from a manual placement, an
    automatic detector result, or the center default.

Key Functions:
    - resolve(): Precedence rules for one image
    - apply_detection(): New ImageEntry after a detection completes
    - as_focal_point(): Coerce any point-like value

Precedence:
    1. A manual point passed in now
    2. A manual point already stored on the entry (terminal)
    3. A well-formed detector result, clamped to [0, 100]
    4. The entry's previously resolved point
    5. Center (50, 50)

    Malformed detector results count as failure and fall back to center.

Dependencies:
    - core.models: FocalPoint, ImageEntry

Used By:
    - builder.state.reducer: SetFocalPoint / ApplyDetection
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional

from report_toolkit.core.models import FocalPoint, ImageEntry, ProcessingStatus

logger = logging.getLogger(__name__)


def as_focal_point(value: Any) -> FocalPoint:
    """
    Coerce a FocalPoint, ``{"x", "y"}`` mapping or ``(x, y)`` pair.

    Never raises; anything unusable becomes center.

    Example:
        >>> as_focal_point((120, "n/a"))
        FocalPoint(x=100.0, y=50.0)
    """
    parsed = FocalPoint.from_mapping(value)
    if parsed is not None:
        return parsed
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return FocalPoint.coerce(value[0], value[1])
    return FocalPoint.center()


def resolve(
    entry: ImageEntry,
    detector_result: Any = None,
    manual_point: Any = None,
) -> FocalPoint:
    """
    Resolve the focal point for ``entry``.

    Args:
        entry: Image entry being resolved
        detector_result: Raw detector response or None
        manual_point: User placement or None

    Returns:
        FocalPoint, never None

    Example:
        >>> resolve(entry, detector_result={"x": 30, "y": 40}).as_tuple()
        (30.0, 40.0)
    """
    if manual_point is not None:
        return as_focal_point(manual_point)
    if entry.manual and entry.focal_point is not None:
        return entry.focal_point
    if detector_result is not None:
        detected = FocalPoint.from_mapping(detector_result)
        if detected is not None:
            return detected
        return FocalPoint.center()
    if entry.focal_point is not None:
        return entry.focal_point
    return FocalPoint.center()


def apply_detection(entry: ImageEntry, result: Any) -> ImageEntry:
    """
    Entry after automatic detection finished with ``result``.

    Manual entries are returned unchanged. A missing or malformed result
    resolves to center with status FAILED.
    """
    if entry.manual:
        return entry

    detected: Optional[FocalPoint] = FocalPoint.from_mapping(result) if result is not None else None
    if detected is None:
        logger.warning(f"Focal point detection failed for image {entry.id}; using center")
        return replace(entry, focal_point=FocalPoint.center(), status=ProcessingStatus.FAILED)

    return replace(
        entry,
        focal_point=resolve(entry, detector_result=detected),
        status=ProcessingStatus.RESOLVED,
    )
