"""
Tests for builder.images.palette
"""
import random

import pytest
from PIL import Image

from report_toolkit.builder.images import (
    extract_theme_color,
    hex_to_rgb,
    normalize_hex_color,
    random_theme_color,
)
from report_toolkit.core.models import DEFAULT_THEME_COLOR


def test_extract_theme_color_solid(make_source):
    assert extract_theme_color(make_source(50, 40, color=(255, 0, 0))) == "#ff0000"


def test_extract_theme_color_averages():
    img = Image.new("RGB", (2, 1))
    img.putpixel((0, 0), (0, 0, 0))
    img.putpixel((1, 0), (200, 100, 50))
    assert extract_theme_color(img) == "#643219"


def test_random_theme_color_is_seeded():
    first = random_theme_color(random.Random(7))
    assert first == random_theme_color(random.Random(7))
    assert normalize_hex_color(first) == first


def test_random_theme_color_is_vivid():
    r, g, b = hex_to_rgb(random_theme_color(random.Random(3)))
    # hsl lightness 50%: max + min == 1
    assert max(r, g, b) + min(r, g, b) == pytest.approx(1.0, abs=0.01)


def test_hex_to_rgb():
    assert hex_to_rgb("#ff8000") == pytest.approx((1.0, 128 / 255, 0.0))
    assert hex_to_rgb("#fff") == (1.0, 1.0, 1.0)


@pytest.mark.parametrize("value", ["", "zzzzzz", "#12345", None])
def test_hex_to_rgb_falls_back_to_default(value):
    assert hex_to_rgb(value) == hex_to_rgb(DEFAULT_THEME_COLOR)


def test_normalize_hex_color():
    assert normalize_hex_color(" #4F46E5 ") == "#4f46e5"
    assert normalize_hex_color("abc") == "#aabbcc"
    with pytest.raises(ValueError):
        normalize_hex_color("#12")
