"""
Tests for builder.layout.fit

Test Coverage:
- rows_that_fit(): Whole rows in the available height
- validate_page_fit(): Fit decision and overflow image count
"""
import pytest

from report_toolkit.builder.layout import validate_page_fit
from report_toolkit.builder.layout.fit import rows_that_fit


@pytest.mark.parametrize("available, row, gap, expected", [
    (121, 24, 5, 4),
    (24, 24, 5, 1),
    (23.9, 24, 5, 0),
    (53, 24, 5, 2),
    (100, 0, 5, 0),
])
def test_rows_that_fit(available, row, gap, expected):
    assert rows_that_fit(available, row, gap) == expected


def test_validate_page_fit_when_gallery_fits():
    fit = validate_page_fit(22, 96, 121, 28, 267)
    assert fit.fits
    assert fit.available_height == pytest.approx(121)


def test_validate_page_fit_when_gallery_overflows():
    fit = validate_page_fit(22, 96, 140, 28, 267, columns=1, row_height=24, row_gap=5)
    assert not fit.fits
    assert fit.max_images_if_overflow == 4


def test_validate_page_fit_capacity_caps_overflow_count():
    fit = validate_page_fit(22, 96, 400, 28, 267, columns=3, row_height=24, row_gap=5)
    assert fit.max_images_if_overflow == 6


def test_validate_page_fit_defaults_to_minimum_cell_height():
    fit = validate_page_fit(22, 96, 50, 28, 267)
    assert fit.fits
    assert fit.max_images_if_overflow == 4


def test_validate_page_fit_tolerates_float_noise():
    fit = validate_page_fit(22, 96, 121 + 1e-9, 28, 267)
    assert fit.fits


def test_validate_page_fit_when_fixed_blocks_exceed_page():
    fit = validate_page_fit(200, 96, 10, 28, 267, columns=2, row_height=24, row_gap=5)
    assert not fit.fits
    assert fit.available_height == 0.0
    assert fit.max_images_if_overflow == 0
