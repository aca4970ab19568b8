"""
Module: builder.layout

Purpose:
    Gallery layout and focal-point cropping for the single-page report.
    Converts a report document into positioned, cropped gallery cells.

Key Functions:
    - compose_report(): Main entry point for layout
    - plan_grid(): Grid shape for an image count and layout mode
    - compute_transform(): Crop offset that keeps a focal point visible
    - validate_page_fit(): One-page fit check

Key Classes:
    - LayoutConfig: Page geometry and gallery policy
    - GridPlan: Column/row shape
    - CropTransform: object-position crop offset
    - ReportLayout: Final layout

Used By:
    - builder.controller: Main build controller
    - builder.output.renderer: PDF rendering
"""

from .config import LayoutConfig
from .models import CropTransform, GalleryCell, GridPlan, PageFit, ReportLayout
from .planner import plan_grid, select_visible
from .compositor import compute_transform
from .fit import validate_page_fit
from .composer import compose_report

__all__ = [
    # Config
    "LayoutConfig",
    # Models
    "CropTransform",
    "GalleryCell",
    "GridPlan",
    "PageFit",
    "ReportLayout",
    # Functions
    "plan_grid",
    "select_visible",
    "compute_transform",
    "validate_page_fit",
    "compose_report",
]
