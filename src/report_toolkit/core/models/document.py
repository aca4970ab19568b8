"""
Module: document

Purpose:
    Provides the ReportDocument dataclass - the complete, immutable state of
    one report: form fields, layout mode, and the image arena.

Key Classes:
    - LayoutMode: Gallery orientation (wide or tall)
    - ReportDocument: Report value replaced wholesale on every change

Dependencies:
    - dataclasses (std)
    - datetime (std)
    - types.MappingProxyType (std)
    - .images.ImageEntry

Used By:
    - builder.state.reducer: Produces new documents from commands
    - builder.layout.composer: Reads visible images
    - builder.output.renderer: Reads form fields

Storage:
    Images live in an arena keyed by stable id (``entries``) with a separate
    ordered tuple of ids (``order``) for display. Removing an image never
    shifts the identity of any other image.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from .images import ImageEntry

DEFAULT_THEME_COLOR = "#4f46e5"


class LayoutMode(str, Enum):
    """Gallery orientation."""

    WIDE = "wide"
    TALL = "tall"

    @classmethod
    def parse(cls, value: "str | LayoutMode") -> "LayoutMode":
        """
        Parse a mode name, accepting the UI labels as aliases.

        Example:
            >>> LayoutMode.parse("horizontal")
            <LayoutMode.WIDE: 'wide'>
        """
        if isinstance(value, LayoutMode):
            return value
        normalized = str(value).strip().lower()
        aliases = {"horizontal": cls.WIDE, "vertical": cls.TALL}
        if normalized in aliases:
            return aliases[normalized]
        return cls(normalized)


def _freeze(entries: Mapping[str, ImageEntry]) -> Mapping[str, ImageEntry]:
    return MappingProxyType(dict(entries))


@dataclass(frozen=True)
class ReportDocument:
    """
    Complete report state (immutable).

    Attributes:
        title: Program title
        program_date: Date the program took place
        description: Short executive summary
        objective: Main objective statement
        impact: Main impact statement
        organisation: Organisation name printed in the page header
        location: Location line printed under the organisation
        theme_color: Accent colour as "#rrggbb"
        orientation: Gallery layout mode
        entries: Image arena keyed by id (read-only mapping)
        order: Display order of image ids
        version: Incremented by the reducer on every change

    Invariants:
        - set(order) == set(entries)
        - order has no duplicates

    Example:
        >>> doc = ReportDocument(title="Sports Day")
        >>> doc.image_count
        0
    """

    title: str = ""
    program_date: date = field(default_factory=date.today)
    description: str = ""
    objective: str = ""
    impact: str = ""
    organisation: str = ""
    location: str = ""
    theme_color: str = DEFAULT_THEME_COLOR
    orientation: LayoutMode = LayoutMode.WIDE
    entries: Mapping[str, ImageEntry] = field(default_factory=lambda: _freeze({}))
    order: tuple[str, ...] = ()
    version: int = 0

    def __post_init__(self) -> None:
        """Validate arena/order consistency and freeze the arena."""
        if not isinstance(self.entries, MappingProxyType):
            object.__setattr__(self, "entries", _freeze(self.entries))
        if len(set(self.order)) != len(self.order):
            raise ValueError("Duplicate image ids in display order")
        if set(self.order) != set(self.entries):
            raise ValueError("Display order does not match image arena")

    @property
    def images(self) -> tuple[ImageEntry, ...]:
        """All image entries in display order."""
        return tuple(self.entries[image_id] for image_id in self.order)

    @property
    def image_count(self) -> int:
        return len(self.order)

    def get(self, image_id: str) -> Optional[ImageEntry]:
        """Look up an entry by id, None if it has been removed."""
        return self.entries.get(image_id)

    def __contains__(self, image_id: object) -> bool:
        return image_id in self.entries

    def visible_images(self, capacity: int) -> tuple[ImageEntry, ...]:
        """The first ``capacity`` entries in display order."""
        return self.images[: max(0, capacity)]

    def hidden_images(self, capacity: int) -> tuple[ImageEntry, ...]:
        """Entries kept in the document but beyond page capacity."""
        return self.images[max(0, capacity):]

    @property
    def pending_images(self) -> tuple[ImageEntry, ...]:
        """Entries still waiting on automatic detection."""
        return tuple(entry for entry in self.images if entry.is_processing)
