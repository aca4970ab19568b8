"""
Program Report Builder Core Package

Shared data models for the report builder. The models are the single
source of truth for everything the layout engine and renderer consume.
"""

from .models import (
    FocalPoint,
    ImageEntry,
    ImageSource,
    LayoutMode,
    ProcessingStatus,
    ReportDocument,
)

__all__ = [
    "FocalPoint",
    "ImageEntry",
    "ImageSource",
    "LayoutMode",
    "ProcessingStatus",
    "ReportDocument",
]
