"""
Module: builder.layout.planner

Purpose:
    Choose the gallery grid shape for a bounded set of images.

Key Functions:
    - plan_grid(): Grid shape for an image count and layout mode
    - select_visible(): First N items that fit the page capacity

Algorithm:
    Fixed lookup table, not aspect-ratio packing, so the same inputs
    always produce the same page:

    | mode | images | columns | rows            |
    |------|--------|---------|-----------------|
    | tall | > 0    | 1       | count           |
    | wide | 1-2    | 2       | 1               |
    | wide | 3      | 3       | 1               |
    | wide | 4      | 2       | 2               |
    | wide | >= 5   | 3       | ceil(count / 3) |

    Counts above capacity are planned as capacity. Zero images produce
    the placeholder plan.

Dependencies:
    - builder.layout.config: LayoutConfig
    - builder.layout.models: GridPlan

Used By:
    - builder.layout.composer: Gallery composition
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, TypeVar

from report_toolkit.core.models import LayoutMode

from .config import DEFAULT_CAPACITY, LayoutConfig
from .models import GridPlan

T = TypeVar("T")


def select_visible(items: Sequence[T], capacity: int = DEFAULT_CAPACITY) -> tuple[T, ...]:
    """
    Return the first ``capacity`` items in list order.

    Example:
        >>> select_visible(list("abcdefgh"), 6)
        ('a', 'b', 'c', 'd', 'e', 'f')
    """
    return tuple(items[: max(0, capacity)])


def plan_grid(
    image_count: int,
    orientation: LayoutMode | str,
    capacity: int = DEFAULT_CAPACITY,
    config: Optional[LayoutConfig] = None,
) -> GridPlan:
    """
    Plan the gallery grid for ``image_count`` images.

    Args:
        image_count: Number of images in the report (may exceed capacity)
        orientation: Wide or tall layout mode
        capacity: Maximum images placed in the grid
        config: Layout configuration supplying cell aspect ratios

    Returns:
        GridPlan for min(image_count, capacity) images, or the
        placeholder plan when there are no images.

    Example:
        >>> plan_grid(5, LayoutMode.WIDE).shape
        (3, 2)
        >>> plan_grid(2, LayoutMode.TALL).shape
        (1, 2)
    """
    config = config or LayoutConfig(capacity=max(1, capacity))
    mode = LayoutMode.parse(orientation)
    count = min(max(0, int(image_count)), max(0, capacity))

    if mode is LayoutMode.TALL:
        aspect = config.tall_cell_aspect
    else:
        aspect = config.wide_cell_aspect

    if count == 0:
        return GridPlan(
            columns=1,
            rows=1,
            cell_aspect_ratio=aspect,
            image_count=0,
            orientation=mode,
            is_placeholder=True,
        )

    columns, rows = _grid_shape(count, mode)
    return GridPlan(
        columns=columns,
        rows=rows,
        cell_aspect_ratio=aspect,
        image_count=count,
        orientation=mode,
    )


def _grid_shape(count: int, mode: LayoutMode) -> tuple[int, int]:
    """Lookup table for (columns, rows); count is already capped and > 0."""
    if mode is LayoutMode.TALL:
        return (1, count)
    if count <= 2:
        return (2, 1)
    if count == 3:
        return (3, 1)
    if count == 4:
        return (2, 2)
    return (3, math.ceil(count / 3))
