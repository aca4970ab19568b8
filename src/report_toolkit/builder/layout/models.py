"""
Module: builder.layout.models

Purpose:
    Data models for gallery layout.
    Immutable dataclasses for grid plans, crop transforms, placed cells
    and the final single-page layout.

Key Classes:
    - GridPlan: Column/row shape of the gallery
    - CropTransform: object-position style crop offset for one image
    - PageFit: Outcome of the page fit check
    - GalleryCell: One image positioned on the page
    - ReportLayout: Final layout output

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.planner: Creates GridPlans
    - builder.layout.compositor: Creates CropTransforms
    - builder.layout.composer: Creates ReportLayouts
    - builder.output.renderer: Consumes ReportLayouts
"""

from __future__ import annotations

from dataclasses import dataclass, field

from report_toolkit.core.models import LayoutMode, ReportDocument


@dataclass(frozen=True)
class GridPlan:
    """
    Gallery grid shape (immutable, derived, never persisted).

    Attributes:
        columns: Number of columns
        rows: Number of rows
        cell_aspect_ratio: Width/height of every cell
        image_count: Images placed in the grid (already capped)
        orientation: Layout mode the plan was made for
        is_placeholder: True for the "no images yet" empty state

    Example:
        >>> plan = GridPlan(columns=3, rows=2, cell_aspect_ratio=4/3,
        ...                 image_count=5, orientation=LayoutMode.WIDE)
        >>> plan.cell_count, plan.empty_cells
        (6, 1)
    """

    columns: int
    rows: int
    cell_aspect_ratio: float
    image_count: int
    orientation: LayoutMode
    is_placeholder: bool = False

    @property
    def cell_count(self) -> int:
        """Total grid cells (1 for the placeholder)."""
        return self.columns * self.rows

    @property
    def empty_cells(self) -> int:
        """Trailing cells with no image."""
        if self.is_placeholder:
            return 0
        return self.cell_count - self.image_count

    @property
    def shape(self) -> tuple[int, int]:
        return (self.columns, self.rows)

    def cell_position(self, index: int) -> tuple[int, int]:
        """(column, row) of the image at ``index``, row-major."""
        if not 0 <= index < self.image_count:
            raise IndexError(f"Cell index {index} outside plan of {self.image_count} images")
        return (index % self.columns, index // self.columns)


@dataclass(frozen=True)
class CropTransform:
    """
    Rendering transform for a cover-cropped image.

    Attributes:
        position_x: Horizontal object-position percentage (0-100)
        position_y: Vertical object-position percentage (0-100)
        scale: Cover overflow ratio, >= 1.0

    Example:
        >>> CropTransform(0.0, 50.0, 2.0).object_position
        '0% 50%'
    """

    position_x: float
    position_y: float
    scale: float = 1.0

    @property
    def object_position(self) -> str:
        """CSS ``object-position`` value."""
        return f"{self.position_x:g}% {self.position_y:g}%"


@dataclass(frozen=True)
class PageFit:
    """
    Result of checking whether the page content fits one page.

    Attributes:
        fits: True if the gallery fits in the space left by fixed blocks
        max_images_if_overflow: Most images the remaining space can hold
        available_height: Height left for the gallery
    """

    fits: bool
    max_images_if_overflow: int
    available_height: float


@dataclass(frozen=True)
class GalleryCell:
    """
    An image positioned on the page.

    Coordinates are millimetres from the page's top-left corner.

    Attributes:
        image_id: Stable id of the ImageEntry shown
        index: Display index (0-based)
        column: Grid column
        row: Grid row
        x: Left edge
        y: Top edge
        width: Cell width
        height: Cell height
        transform: Crop transform for the image
    """

    image_id: str
    index: int
    column: int
    row: int
    x: float
    y: float
    width: float
    height: float
    transform: CropTransform

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class ReportLayout:
    """
    Final single-page layout with diagnostics.

    Attributes:
        document: The document version this layout was computed from
        plan: Grid plan actually used
        cells: Placed gallery cells in display order
        fit: Page fit result for the chosen plan
        gallery_top: Top of the gallery region
        gallery_height: Height reserved for the gallery region
        hidden_ids: Ids of images kept in the document but not rendered
        warnings: Diagnostic messages
    """

    document: ReportDocument
    plan: GridPlan
    cells: tuple[GalleryCell, ...]
    fit: PageFit
    gallery_top: float
    gallery_height: float
    hidden_ids: tuple[str, ...] = ()
    warnings: list[str] = field(default_factory=list)

    @property
    def visible_ids(self) -> tuple[str, ...]:
        return tuple(cell.image_id for cell in self.cells)

    @property
    def is_empty(self) -> bool:
        """True when the gallery shows the empty-state placeholder."""
        return self.plan.is_placeholder

    @property
    def page_count(self) -> int:
        """Always one: overflow is resolved by truncation."""
        return 1
