from __future__ import annotations

import pytest

from domain.placement import OutOfBounds
from domain.services.board_bounds import check_bounds


@pytest.mark.parametrize(("x", "y"), [(0, 0), (11, 9), (5, 4), (11, 0), (0, 9)])
def test_slots_inside_board_pass(x: int, y: int) -> None:
    assert check_bounds(x, y) is None


@pytest.mark.parametrize("x", [-1, 12, 100])
def test_x_outside_board_is_reported(x: int) -> None:
    result = check_bounds(x, 0)
    assert result == OutOfBounds(axis="x", value=x, min=0, max=11)
    assert result.reason == "x must be 0-11"


@pytest.mark.parametrize("y", [-1, 10])
def test_y_outside_board_is_reported(y: int) -> None:
    result = check_bounds(0, y)
    assert result == OutOfBounds(axis="y", value=y, min=0, max=9)
    assert result.reason == "y must be 0-9"


def test_x_is_checked_before_y() -> None:
    result = check_bounds(12, 10)
    assert result is not None
    assert result.axis == "x"


def test_out_of_bounds_payload() -> None:
    result = check_bounds(12, 0)
    assert result is not None
    assert result.to_dict() == {
        "status": "error",
        "axis": "x",
        "value": 12,
        "min": 0,
        "max": 11,
        "reason": "x must be 0-11",
    }
