"""
Module: focal

Purpose:
    Provides the FocalPoint dataclass - a normalized (x%, y%) anchor marking
    the subject that must stay visible when an image is cover-cropped.

Key Functions:
    - FocalPoint.center(): The (50, 50) default
    - FocalPoint.coerce(x, y): Build a point from untrusted values, never raises
    - FocalPoint.from_mapping(obj): Parse a detector response
    - coerce_percentage(value): Clamp a single coordinate

Dependencies:
    - dataclasses (std)
    - math (std)

Used By:
    - core.models.images.ImageEntry
    - builder.focal.resolver
    - builder.layout.compositor
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any, Optional

CENTER_PERCENT = 50.0
MIN_PERCENT = 0.0
MAX_PERCENT = 100.0


def coerce_percentage(value: Any) -> float:
    """
    Convert an untrusted coordinate to a percentage in [0, 100].

    Non-numeric values, None and NaN become 50 (center). Infinite values
    and integers too large for a float clamp to the nearest bound.
    Booleans are rejected as non-numeric.

    Example:
        >>> coerce_percentage(120)
        100.0
        >>> coerce_percentage(float("nan"))
        50.0
        >>> coerce_percentage("30")
        30.0
        >>> coerce_percentage(-10**400)
        0.0
    """
    if value is None or isinstance(value, bool):
        return CENTER_PERCENT
    try:
        number = float(value)
    except OverflowError:
        return MAX_PERCENT if value > 0 else MIN_PERCENT
    except (TypeError, ValueError):
        return CENTER_PERCENT
    if math.isnan(number):
        return CENTER_PERCENT
    return min(MAX_PERCENT, max(MIN_PERCENT, number))


@dataclass(frozen=True, slots=True)
class FocalPoint:
    """
    Normalized focal coordinate (immutable).

    Attributes:
        x: Horizontal position, percent of image width from the left edge
        y: Vertical position, percent of image height from the top edge

    Invariants:
        - 0 <= x <= 100
        - 0 <= y <= 100

    Example:
        >>> FocalPoint(30, 40).x
        30
        >>> FocalPoint.coerce(-5, "abc")
        FocalPoint(x=0.0, y=50.0)
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        """Validate coordinates on construction."""
        for name, value in (("x", self.x), ("y", self.y)):
            if not (MIN_PERCENT <= value <= MAX_PERCENT):
                raise ValueError(f"FocalPoint.{name} must be within [0, 100]: {value!r}")

    @classmethod
    def center(cls) -> "FocalPoint":
        """Return the (50, 50) center point."""
        return cls(CENTER_PERCENT, CENTER_PERCENT)

    @classmethod
    def coerce(cls, x: Any, y: Any) -> "FocalPoint":
        """Build a point from untrusted values, clamping and defaulting."""
        return cls(coerce_percentage(x), coerce_percentage(y))

    @classmethod
    def from_mapping(cls, obj: Any) -> Optional["FocalPoint"]:
        """
        Parse a detector response of the form ``{"x": .., "y": ..}``.

        Returns None when the response is malformed (not a mapping or a
        key is missing). Present but out-of-range or non-numeric values
        are coerced rather than rejected.
        """
        if isinstance(obj, FocalPoint):
            return obj
        if not isinstance(obj, Mapping):
            return None
        if "x" not in obj or "y" not in obj:
            return None
        return cls.coerce(obj.get("x"), obj.get("y"))

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)
