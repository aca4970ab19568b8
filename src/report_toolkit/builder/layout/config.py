"""
Module: builder.layout.config

Purpose:
    Configuration for the report layout engine.
    Defines page dimensions, fixed block heights, gallery cell policy
    and page capacity.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.composer: Gallery geometry
    - builder.output.renderer: Block positions
"""

from __future__ import annotations

from dataclasses import dataclass


# A4 portrait in millimetres
DEFAULT_PAGE_WIDTH_MM = 210.0
DEFAULT_PAGE_HEIGHT_MM = 297.0
DEFAULT_CAPACITY = 6
DEFAULT_GALLERY_GAP_MM = 5.0
DEFAULT_MIN_CELL_HEIGHT_MM = 24.0


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    All lengths are millimetres. The page is split top to bottom into
    fixed-height blocks (header, title, summary, gallery heading, footer);
    the gallery gets whatever height remains.

    Attributes:
        page_width: Page width
        page_height: Page height
        padding: Inner page padding on every side
        header_height: Organisation header block
        title_height: Title and date block
        summary_height: Summary / objective / impact block
        gallery_heading_height: "Event gallery" heading strip
        footer_height: Signature footer block
        gallery_gap: Gap between gallery cells (both axes)
        wide_cell_aspect: Cell width/height ratio in wide mode
        tall_cell_aspect: Cell width/height ratio in tall mode
        min_cell_height: Smallest readable cell height
        capacity: Maximum number of images ever rendered

    Example:
        >>> config = LayoutConfig()
        >>> round(config.gallery_available_height, 1)
        121.0
    """

    # Page dimensions
    page_width: float = DEFAULT_PAGE_WIDTH_MM
    page_height: float = DEFAULT_PAGE_HEIGHT_MM
    padding: float = 15.0

    # Fixed blocks
    header_height: float = 22.0
    title_height: float = 38.0
    summary_height: float = 48.0
    gallery_heading_height: float = 10.0
    footer_height: float = 28.0

    # Gallery
    gallery_gap: float = DEFAULT_GALLERY_GAP_MM
    wide_cell_aspect: float = 4 / 3
    tall_cell_aspect: float = 16 / 9
    min_cell_height: float = DEFAULT_MIN_CELL_HEIGHT_MM
    capacity: int = DEFAULT_CAPACITY

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.capacity < 1:
            raise ValueError(f"capacity must be at least 1: {self.capacity}")
        if self.wide_cell_aspect <= 0 or self.tall_cell_aspect <= 0:
            raise ValueError("Cell aspect ratios must be positive")
        if self.min_cell_height <= 0:
            raise ValueError(f"min_cell_height must be positive: {self.min_cell_height}")
        if self.gallery_gap < 0:
            raise ValueError(f"gallery_gap must be non-negative: {self.gallery_gap}")
        if self.content_width <= 0:
            raise ValueError("Padding exceeds page width")
        if self.gallery_available_height < self.min_cell_height:
            raise ValueError(
                "Fixed blocks leave no room for a gallery row: "
                f"{self.gallery_available_height:.1f}mm available, "
                f"{self.min_cell_height:.1f}mm needed"
            )

    @property
    def content_width(self) -> float:
        """Width available for content (excluding padding)."""
        return self.page_width - 2 * self.padding

    @property
    def content_height(self) -> float:
        """Height available for content (excluding padding)."""
        return self.page_height - 2 * self.padding

    @property
    def body_height(self) -> float:
        """Title, summary and gallery heading blocks combined."""
        return self.title_height + self.summary_height + self.gallery_heading_height

    @property
    def gallery_top(self) -> float:
        """Distance from the page top to the gallery region."""
        return self.padding + self.header_height + self.body_height

    @property
    def gallery_available_height(self) -> float:
        """Height left for the gallery once fixed blocks are reserved."""
        return self.content_height - self.header_height - self.body_height - self.footer_height
