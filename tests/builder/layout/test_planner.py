"""
Tests for builder.layout.planner

Test Coverage:
- plan_grid(): Fixed (columns, rows) table for both orientations
- Capacity cap at six images
- Empty-state placeholder plan
- select_visible(): First N in list order
"""
import pytest

from report_toolkit.builder.layout import LayoutConfig, plan_grid, select_visible
from report_toolkit.core.models import LayoutMode


@pytest.mark.parametrize("count, expected", [
    (1, (2, 1)),
    (2, (2, 1)),
    (3, (3, 1)),
    (4, (2, 2)),
    (5, (3, 2)),
    (6, (3, 2)),
])
def test_plan_grid_wide_table(count, expected):
    """Wide mode reproduces the fixed breakpoints."""
    plan = plan_grid(count, LayoutMode.WIDE)
    assert plan.shape == expected
    assert plan.image_count == count
    assert not plan.is_placeholder


@pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 6])
def test_plan_grid_tall_is_single_column(count):
    """Tall mode stacks every image in one column."""
    assert plan_grid(count, LayoutMode.TALL).shape == (1, count)


@pytest.mark.parametrize("orientation", [LayoutMode.WIDE, LayoutMode.TALL])
@pytest.mark.parametrize("count", [7, 8, 50])
def test_plan_grid_over_capacity_matches_six(orientation, count):
    """More than six images plan exactly like six."""
    assert plan_grid(count, orientation) == plan_grid(6, orientation)


@pytest.mark.parametrize("orientation", ["wide", "tall"])
def test_plan_grid_zero_is_placeholder(orientation):
    """No images gives a single placeholder cell, not a 0x0 grid."""
    plan = plan_grid(0, orientation)
    assert plan.is_placeholder
    assert plan.shape == (1, 1)
    assert plan.image_count == 0
    assert plan.empty_cells == 0


def test_plan_grid_five_wide_leaves_one_empty_cell():
    """Scenario: 5 images wide -> 3x2 with the sixth cell unused."""
    plan = plan_grid(5, "wide")
    assert plan.shape == (3, 2)
    assert plan.empty_cells == 1


def test_plan_grid_two_tall():
    """Scenario: 2 images tall -> 1 column, 2 rows."""
    assert plan_grid(2, "tall").shape == (1, 2)


def test_plan_grid_cell_aspect_follows_orientation():
    config = LayoutConfig()
    assert plan_grid(3, "wide", config=config).cell_aspect_ratio == pytest.approx(4 / 3)
    assert plan_grid(3, "tall", config=config).cell_aspect_ratio == pytest.approx(16 / 9)


def test_plan_grid_negative_count_is_placeholder():
    assert plan_grid(-3, "wide").is_placeholder


def test_plan_grid_is_deterministic():
    assert plan_grid(4, "wide") == plan_grid(4, "wide")


def test_cell_position_row_major():
    plan = plan_grid(5, "wide")
    assert [plan.cell_position(i) for i in range(5)] == [
        (0, 0), (1, 0), (2, 0), (0, 1), (1, 1),
    ]
    with pytest.raises(IndexError):
        plan.cell_position(5)


def test_select_visible_takes_first_in_order():
    items = list("abcdefgh")
    assert select_visible(items) == ("a", "b", "c", "d", "e", "f")
    assert select_visible(items[:2]) == ("a", "b")
    assert select_visible(items, 0) == ()
