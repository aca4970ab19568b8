"""
Module: builder.images

Purpose:
    Image ingestion, theme colours and cover cropping for the report
    gallery.

Key Functions:
    - load_image_source(): Read an uploaded file
    - extract_theme_color(): Average colour of a photo
    - cover_crop(): Crop a photo to fill a gallery cell

Dependencies:
    - PIL: Image manipulation
    - numpy: Colour averaging

Used By:
    - builder.session: Upload handling
    - builder.output.renderer: Cell images
"""

from .provider import (
    ImageLoadError,
    image_source_from_bytes,
    image_source_from_data_url,
    load_image_source,
    open_image,
    to_data_url,
)
from .palette import extract_theme_color, hex_to_rgb, normalize_hex_color, random_theme_color
from .cropper import cover_crop, crop_box

__all__ = [
    "ImageLoadError",
    "image_source_from_bytes",
    "image_source_from_data_url",
    "load_image_source",
    "open_image",
    "to_data_url",
    "extract_theme_color",
    "hex_to_rgb",
    "normalize_hex_color",
    "random_theme_color",
    "cover_crop",
    "crop_box",
]
