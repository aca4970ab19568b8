"""
Core Models Package

Immutable, validated data models that serve as the single source of truth
for a report.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. Any change produces a
new instance, so a document handed to the layout engine or the renderer
can never be altered by a focal-point detection finishing on another
thread.
"""

from .focal import FocalPoint, coerce_percentage
from .images import ImageEntry, ImageSource, ProcessingStatus, new_image_id
from .document import DEFAULT_THEME_COLOR, LayoutMode, ReportDocument

__all__ = [
    "FocalPoint",
    "coerce_percentage",
    "ImageEntry",
    "ImageSource",
    "ProcessingStatus",
    "new_image_id",
    "DEFAULT_THEME_COLOR",
    "LayoutMode",
    "ReportDocument",
]
