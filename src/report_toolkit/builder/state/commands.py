"""
Module: builder.state.commands

Purpose:
    Command types that describe every change to a ReportDocument.
    Commands are plain immutable values; builder.state.reducer applies them.

Key Classes:
    - AddImage, RemoveImage, MoveImage: Image list changes
    - SetFocalPoint: Manual focal point (always wins)
    - MarkProcessing, ApplyDetection: Automatic detection lifecycle
    - SetOrientation, SetThemeColor: Layout/appearance
    - UpdateFields, ApplyEnhancement: Form text

Dependencies:
    - dataclasses (std)
    - core.models

Used By:
    - builder.state.reducer
    - builder.session.ReportSession
    - builder.focal.service.FocalPointService
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Union

from report_toolkit.core.models import ImageEntry, LayoutMode


@dataclass(frozen=True)
class EnhancedContent:
    """Rewritten report text returned by the content enhancer."""

    title: str
    description: str
    objective: str
    impact: str


@dataclass(frozen=True)
class AddImage:
    """
    Append an uploaded image.

    Attributes:
        entry: New image entry (id assigned at upload)
        theme_color: Colour extracted from the image; applied only when
            the report had no images before
    """

    entry: ImageEntry
    theme_color: Optional[str] = None


@dataclass(frozen=True)
class RemoveImage:
    image_id: str


@dataclass(frozen=True)
class MoveImage:
    """Move an image to ``index`` in display order (clamped)."""

    image_id: str
    index: int


@dataclass(frozen=True)
class SetFocalPoint:
    """User-placed focal point. Terminal until the user edits it again."""

    image_id: str
    point: Any


@dataclass(frozen=True)
class MarkProcessing:
    """Automatic detection has started for an image."""

    image_id: str


@dataclass(frozen=True)
class ApplyDetection:
    """
    Automatic detection finished.

    Attributes:
        image_id: Target image
        result: Raw detector response, or None on failure/timeout
    """

    image_id: str
    result: Any = None


@dataclass(frozen=True)
class SetOrientation:
    mode: Union[LayoutMode, str]


@dataclass(frozen=True)
class SetThemeColor:
    color: str


@dataclass(frozen=True)
class UpdateFields:
    """Edit form fields; None leaves a field unchanged."""

    title: Optional[str] = None
    program_date: Optional[date] = None
    description: Optional[str] = None
    objective: Optional[str] = None
    impact: Optional[str] = None
    organisation: Optional[str] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class ApplyEnhancement:
    """Enhancer result; None means failure and leaves fields unchanged."""

    content: Optional[EnhancedContent]


Command = Union[
    AddImage,
    RemoveImage,
    MoveImage,
    SetFocalPoint,
    MarkProcessing,
    ApplyDetection,
    SetOrientation,
    SetThemeColor,
    UpdateFields,
    ApplyEnhancement,
]
