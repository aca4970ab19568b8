"""
Module: images

Purpose:
    Provides the ImageSource and ImageEntry dataclasses - an uploaded
    photograph and its focal-point state within a report.

Key Classes:
    - ProcessingStatus: Lifecycle of automatic focal-point detection
    - ImageSource: Decoded bytes plus natural pixel dimensions
    - ImageEntry: One image slot in the report, addressed by stable id

Dependencies:
    - dataclasses (std)
    - enum (std)
    - uuid (std)
    - .focal.FocalPoint

Used By:
    - core.models.document.ReportDocument
    - builder.focal: Focal point resolution
    - builder.images.provider: Creates ImageSource
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from .focal import FocalPoint


class ProcessingStatus(str, Enum):
    """Automatic focal-point detection state for an image."""

    PENDING = "pending"
    PROCESSING = "processing"
    RESOLVED = "resolved"
    FAILED = "failed"


def new_image_id() -> str:
    """Stable identity assigned once at upload time."""
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class ImageSource:
    """
    Decoded image supplied by the ingestion layer (immutable).

    Attributes:
        data: Encoded image bytes (PNG, JPEG, ...)
        mime_type: MIME type such as "image/jpeg"
        width: Natural width in pixels (after EXIF orientation)
        height: Natural height in pixels (after EXIF orientation)
        name: Optional display name, usually the file name

    Example:
        >>> src = ImageSource(b"...", "image/png", 400, 300)
        >>> src.aspect_ratio
        1.3333333333333333
    """

    data: bytes = field(repr=False)
    mime_type: str
    width: int
    height: int
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive: {self.width}x{self.height}"
            )

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height


@dataclass(frozen=True, slots=True)
class ImageEntry:
    """
    One uploaded image in the report (immutable).

    Attributes:
        id: Stable identity, never reused or shifted by removals
        source: Decoded image
        focal_point: Crop anchor, None until resolved
        status: Automatic detection state
        manual: True once the user has placed the focal point by hand

    Invariants:
        - manual implies focal_point is not None

    Example:
        >>> entry = ImageEntry.create(source)
        >>> entry.status
        <ProcessingStatus.PENDING: 'pending'>
        >>> entry.effective_focal_point
        FocalPoint(x=50.0, y=50.0)
    """

    id: str
    source: ImageSource
    focal_point: Optional[FocalPoint] = None
    status: ProcessingStatus = ProcessingStatus.PENDING
    manual: bool = False

    def __post_init__(self) -> None:
        if self.manual and self.focal_point is None:
            raise ValueError(f"Manual image entry {self.id} has no focal point")

    @classmethod
    def create(
        cls,
        source: ImageSource,
        *,
        image_id: Optional[str] = None,
        focal_point: Optional[FocalPoint] = None,
    ) -> "ImageEntry":
        """
        Create a new entry for a freshly uploaded image.

        A focal point given here counts as a manual placement.
        """
        if focal_point is not None:
            return cls(
                id=image_id or new_image_id(),
                source=source,
                focal_point=focal_point,
                status=ProcessingStatus.RESOLVED,
                manual=True,
            )
        return cls(id=image_id or new_image_id(), source=source)

    @property
    def aspect_ratio(self) -> float:
        return self.source.aspect_ratio

    @property
    def is_processing(self) -> bool:
        """True while automatic detection is in flight."""
        return self.status is ProcessingStatus.PROCESSING

    @property
    def effective_focal_point(self) -> FocalPoint:
        """Focal point used for rendering; never None."""
        return self.focal_point if self.focal_point is not None else FocalPoint.center()

    def with_manual_point(self, point: FocalPoint) -> "ImageEntry":
        return replace(self, focal_point=point, status=ProcessingStatus.RESOLVED, manual=True)

    def with_status(self, status: ProcessingStatus) -> "ImageEntry":
        return replace(self, status=status)
