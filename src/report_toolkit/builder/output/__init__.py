"""
Module: builder.output

Purpose:
    Single-page PDF rendering and post-render checks.

Key Functions:
    - render_to_pdf(): Draw a ReportLayout with ReportLab
    - verify_single_page(): Confirm one page of the configured size
    - render_preview_png(): PNG preview of the page
"""

from .renderer import RenderError, format_program_date, render_to_pdf
from .preview import render_preview_png, verify_single_page

__all__ = [
    "RenderError",
    "format_program_date",
    "render_to_pdf",
    "render_preview_png",
    "verify_single_page",
]
