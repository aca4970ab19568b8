"""
Module: builder.focal

Purpose:
    Focal-point resolution: manual placements, automatic detection and
    the center fallback.

Key Functions:
    - resolve(): Precedence rules for one image
    - apply_detection(): Entry after a detection completes

Key Classes:
    - FocalPointDetector: Detector collaborator protocol
    - FocalPointService: Background detection queue
"""

from .resolver import apply_detection, as_focal_point, resolve
from .service import FocalPointDetector, FocalPointService

__all__ = [
    "apply_detection",
    "as_focal_point",
    "resolve",
    "FocalPointDetector",
    "FocalPointService",
]
