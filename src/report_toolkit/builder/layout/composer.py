"""
Module: builder.layout.composer

Purpose:
    Compose the single-page gallery layout for a report document.
    Runs planner -> page fit check -> compositor and places each visible
    image into a cell with its crop transform.

Key Functions:
    - compose_report(): Main entry point for layout

Algorithm:
    1. Take the first ``capacity`` images in display order
    2. Plan the grid for that count
    3. Size cells to the column width at the plan's aspect ratio; if the
       rows are too tall for the gallery region, shrink cells uniformly
    4. If cells would drop below ``min_cell_height`` the page overflows:
       reduce the image count to what fits and re-plan
    5. Centre the grid in the gallery region and compute crop transforms

Dependencies:
    - builder.layout.planner: plan_grid
    - builder.layout.fit: validate_page_fit
    - builder.layout.compositor: compute_transform

Used By:
    - builder.controller: Main build controller
    - builder.output.renderer: Draws the composed layout
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from report_toolkit.core.models import ImageEntry, ReportDocument

from .compositor import compute_transform
from .config import LayoutConfig
from .fit import validate_page_fit
from .models import GalleryCell, GridPlan, ReportLayout
from .planner import plan_grid

logger = logging.getLogger(__name__)


def compose_report(
    document: ReportDocument,
    config: Optional[LayoutConfig] = None,
) -> ReportLayout:
    """
    Lay out the report's gallery on one fixed-size page.

    Pure and deterministic: the same document and config always give the
    same layout.

    Args:
        document: Report document to lay out
        config: Layout configuration (defaults to A4)

    Returns:
        ReportLayout with placed cells, the plan used and any warnings

    Example:
        >>> layout = compose_report(doc)
        >>> layout.plan.shape
        (3, 2)
    """
    config = config or LayoutConfig()
    warnings: List[str] = []

    images = document.images
    count = min(len(images), config.capacity)
    if len(images) > config.capacity:
        message = (
            f"{len(images)} images exceed page capacity of {config.capacity}; "
            f"showing the first {config.capacity}"
        )
        warnings.append(message)
        logger.info(message)

    while True:
        plan = plan_grid(count, document.orientation, config.capacity, config)
        if plan.is_placeholder:
            fit = validate_page_fit(
                config.header_height,
                config.body_height,
                config.gallery_available_height,
                config.footer_height,
                config.content_height,
                row_height=config.min_cell_height,
                row_gap=config.gallery_gap,
                capacity=config.capacity,
            )
            break

        cell_width, cell_height = _cell_size(plan, config)
        needed_height = _grid_height(plan, max(cell_height, config.min_cell_height), config)
        fit = validate_page_fit(
            config.header_height,
            config.body_height,
            needed_height,
            config.footer_height,
            config.content_height,
            columns=plan.columns,
            row_height=config.min_cell_height,
            row_gap=config.gallery_gap,
            capacity=config.capacity,
        )
        if fit.fits:
            break

        reduced = min(fit.max_images_if_overflow, count - 1)
        message = (
            f"{plan.columns}x{plan.rows} grid overflows the page; "
            f"reducing gallery from {count} to {reduced} images"
        )
        warnings.append(message)
        logger.warning(message)
        count = reduced

    visible = images[:count]
    hidden_ids = tuple(entry.id for entry in images[count:])

    if plan.is_placeholder:
        cells: tuple[GalleryCell, ...] = ()
        gallery_height = config.gallery_available_height
    else:
        cells = _place_cells(visible, plan, cell_width, cell_height, config)
        gallery_height = _grid_height(plan, cell_height, config)

    logger.debug(
        f"Composed {len(cells)} cells as {plan.columns}x{plan.rows} "
        f"({document.orientation.value}), {len(hidden_ids)} hidden"
    )

    return ReportLayout(
        document=document,
        plan=plan,
        cells=cells,
        fit=fit,
        gallery_top=config.gallery_top,
        gallery_height=gallery_height,
        hidden_ids=hidden_ids,
        warnings=warnings,
    )


def _cell_size(plan: GridPlan, config: LayoutConfig) -> tuple[float, float]:
    """
    Cell (width, height) for a plan.

    Cells take the full column width at the plan's aspect ratio, shrinking
    uniformly when the rows would not fit the gallery region.
    """
    gap = config.gallery_gap
    column_width = (config.content_width - gap * (plan.columns - 1)) / plan.columns
    natural_height = column_width / plan.cell_aspect_ratio
    fitted_height = (config.gallery_available_height - gap * (plan.rows - 1)) / plan.rows

    if natural_height <= fitted_height:
        return (column_width, natural_height)
    return (fitted_height * plan.cell_aspect_ratio, fitted_height)


def _grid_height(plan: GridPlan, row_height: float, config: LayoutConfig) -> float:
    return plan.rows * row_height + config.gallery_gap * (plan.rows - 1)


def _place_cells(
    entries: Sequence[ImageEntry],
    plan: GridPlan,
    cell_width: float,
    cell_height: float,
    config: LayoutConfig,
) -> tuple[GalleryCell, ...]:
    """Position cells row-major, grid centred in the gallery region."""
    gap = config.gallery_gap
    grid_width = plan.columns * cell_width + gap * (plan.columns - 1)
    grid_height = _grid_height(plan, cell_height, config)
    origin_x = config.padding + (config.content_width - grid_width) / 2
    origin_y = config.gallery_top + (config.gallery_available_height - grid_height) / 2
    cell_aspect = cell_width / cell_height

    cells = []
    for index, entry in enumerate(entries):
        column, row = plan.cell_position(index)
        cells.append(GalleryCell(
            image_id=entry.id,
            index=index,
            column=column,
            row=row,
            x=origin_x + column * (cell_width + gap),
            y=origin_y + row * (cell_height + gap),
            width=cell_width,
            height=cell_height,
            transform=compute_transform(
                entry.effective_focal_point,
                cell_aspect,
                entry.aspect_ratio,
            ),
        ))
    return tuple(cells)
