"""
Tests for builder.layout.config
"""
import pytest

from report_toolkit.builder.layout import LayoutConfig


def test_default_config_is_a4():
    config = LayoutConfig()
    assert (config.page_width, config.page_height) == (210.0, 297.0)
    assert config.content_width == pytest.approx(180.0)
    assert config.content_height == pytest.approx(267.0)
    assert config.capacity == 6


def test_gallery_region():
    config = LayoutConfig()
    assert config.body_height == pytest.approx(96.0)
    assert config.gallery_top == pytest.approx(133.0)
    assert config.gallery_available_height == pytest.approx(121.0)


@pytest.mark.parametrize("overrides, message", [
    ({"page_width": 0}, "page_width"),
    ({"capacity": 0}, "capacity"),
    ({"min_cell_height": 0}, "min_cell_height"),
    ({"gallery_gap": -1}, "gallery_gap"),
    ({"wide_cell_aspect": 0}, "aspect"),
    ({"padding": 120}, "Padding"),
    ({"summary_height": 150}, "no room"),
])
def test_invalid_config_raises_error(overrides, message):
    with pytest.raises(ValueError, match=message):
        LayoutConfig(**overrides)
