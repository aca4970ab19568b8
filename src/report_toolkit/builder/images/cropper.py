"""
Module: builder.images.cropper

Purpose:
    Apply a CropTransform to a source image: compute the pixel crop box
    for a cell and produce the cover-cropped cell image.

Key Functions:
    - crop_box(): Pixel box (left, top, right, bottom) inside the source
    - cover_crop(): Crop and resize a PIL image to fill a cell

Dependencies:
    - PIL: Image manipulation
    - builder.layout.compositor: visible_fraction

Used By:
    - builder.output.renderer: Gallery cell images
"""

from __future__ import annotations

from typing import Tuple

from PIL import Image

from report_toolkit.builder.layout.compositor import visible_fraction
from report_toolkit.builder.layout.models import CropTransform

Box = Tuple[int, int, int, int]


def crop_box(
    transform: CropTransform,
    image_size: Tuple[int, int],
    cell_aspect_ratio: float,
) -> Box:
    """
    Pixel region of the source that is visible in the cell.

    The window has the cell's aspect ratio and covers the full extent of
    the source on its constrained axis. ``position_x``/``position_y``
    place its leading edge at p% of the leftover space, the same as CSS
    ``object-position``.

    Args:
        transform: Crop transform from the compositor
        image_size: Source (width, height) in pixels
        cell_aspect_ratio: Cell width / height

    Returns:
        (left, top, right, bottom) within the image bounds

    Raises:
        ValueError: If the image size or aspect ratio is not positive

    Example:
        >>> crop_box(CropTransform(0.0, 50.0), (400, 200), 1.0)
        (0, 0, 200, 200)
    """
    width, height = image_size
    if width <= 0 or height <= 0:
        raise ValueError(f"Image size must be positive: {image_size}")
    if cell_aspect_ratio <= 0:
        raise ValueError(f"Cell aspect ratio must be positive: {cell_aspect_ratio}")

    fraction_x, fraction_y = visible_fraction(cell_aspect_ratio, width / height)
    crop_width = max(1, min(width, round(width * fraction_x)))
    crop_height = max(1, min(height, round(height * fraction_y)))

    left = round((width - crop_width) * transform.position_x / 100.0)
    top = round((height - crop_height) * transform.position_y / 100.0)
    left = min(max(0, left), width - crop_width)
    top = min(max(0, top), height - crop_height)

    return (left, top, left + crop_width, top + crop_height)


def cover_crop(
    image: Image.Image,
    transform: CropTransform,
    cell_size: Tuple[int, int],
) -> Image.Image:
    """
    Crop ``image`` per ``transform`` and resize it to exactly ``cell_size``.

    Returns:
        New image of size ``cell_size`` (never letterboxed)

    Example:
        >>> cell = cover_crop(photo, transform, (600, 450))
        >>> cell.size
        (600, 450)
    """
    cell_width, cell_height = cell_size
    if cell_width <= 0 or cell_height <= 0:
        raise ValueError(f"Cell size must be positive: {cell_size}")

    box = crop_box(transform, image.size, cell_width / cell_height)
    return image.crop(box).resize((cell_width, cell_height), Image.Resampling.LANCZOS)
