"""
Module: builder

Purpose:
    Report building pipeline: turns a report document with uploaded
    photos into a single-page PDF, keeping each photo's subject in view.

Key Functions:
    - build_report(): Main entry point for report generation
    - create_session(): Session wired to the Gemini collaborators

Key Classes:
    - BuilderConfig: Configuration for building
    - LayoutConfig: Page geometry and gallery policy
    - ReportSession: Owner of the current report document

Dependencies:
    - PIL: Image handling
    - reportlab: PDF generation
    - fitz (PyMuPDF): PDF verification and previews
    - google-genai: Focal-point detection and text enhancement

Used By:
    - report_toolkit.cli: Command line interface
"""

from .config import BuilderConfig
from .layout import LayoutConfig, compose_report
from .session import ReportSession
from .controller import build_report, create_session, BuildResult, BuildError

__all__ = [
    # Config
    "BuilderConfig",
    "LayoutConfig",
    # Layout
    "compose_report",
    # Session
    "ReportSession",
    # Controller
    "build_report",
    "create_session",
    "BuildResult",
    "BuildError",
]
