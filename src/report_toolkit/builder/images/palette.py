"""
Module: builder.images.palette

Purpose:
    Theme colour helpers: average colour of an uploaded photo and a
    random vivid accent.

Key Functions:
    - extract_theme_color(): Mean RGB of an image as "#rrggbb"
    - random_theme_color(): hsl(random hue, 70%, 50%) as "#rrggbb"
    - hex_to_rgb(): Parse "#rrggbb" to floats in [0, 1]
    - normalize_hex_color(): Validate and canonicalise a colour string

Dependencies:
    - numpy: Pixel averaging
    - PIL: Downsampling
    - colorsys (std)

Used By:
    - builder.session: Theme colour on first upload / randomise
    - builder.output.renderer: Accent colour
"""

from __future__ import annotations

import colorsys
import random
from typing import Optional

import numpy as np
from PIL import Image

from report_toolkit.core.models import DEFAULT_THEME_COLOR, ImageSource

from .provider import open_image

# Downsample before averaging; the mean of a thumbnail is close enough
SAMPLE_SIZE = (64, 64)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def normalize_hex_color(color: str) -> str:
    """
    Canonical lower-case "#rrggbb" form of a hex colour.

    Raises:
        ValueError: If ``color`` is not "#rgb" or "#rrggbb"
    """
    value = color.strip().lstrip("#").lower() if isinstance(color, str) else ""
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6 or any(ch not in "0123456789abcdef" for ch in value):
        raise ValueError(f"Invalid hex colour: {color!r}")
    return "#" + value


def hex_to_rgb(color: str) -> tuple[float, float, float]:
    """
    Parse "#rrggbb" into (r, g, b) floats in [0, 1].

    Falls back to the default theme colour for malformed input.
    """
    value = color.strip().lstrip("#") if isinstance(color, str) else ""
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    try:
        r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return hex_to_rgb(DEFAULT_THEME_COLOR)
    if len(value) != 6:
        return hex_to_rgb(DEFAULT_THEME_COLOR)
    return (r / 255.0, g / 255.0, b / 255.0)


def extract_theme_color(source: ImageSource | Image.Image) -> str:
    """
    Average colour of an image.

    Example:
        >>> extract_theme_color(Image.new("RGB", (10, 10), (255, 0, 0)))
        '#ff0000'
    """
    img = source if isinstance(source, Image.Image) else open_image(source)
    sample = img.convert("RGB")
    sample.thumbnail(SAMPLE_SIZE)
    pixels = np.asarray(sample, dtype=np.float64).reshape(-1, 3)
    r, g, b = np.rint(pixels.mean(axis=0)).astype(int).tolist()
    return rgb_to_hex(r, g, b)


def random_theme_color(rng: Optional[random.Random] = None) -> str:
    """Vivid accent: random hue at 70% saturation, 50% lightness."""
    rng = rng or random.Random()
    hue = rng.randrange(360) / 360.0
    r, g, b = colorsys.hls_to_rgb(hue, 0.5, 0.7)
    return rgb_to_hex(round(r * 255), round(g * 255), round(b * 255))
