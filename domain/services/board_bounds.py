from __future__ import annotations

from domain.models import BOARD, BoardGeometry
from domain.placement import OutOfBounds


def check_bounds(x: int, y: int, geometry: BoardGeometry = BOARD) -> OutOfBounds | None:
    if not 0 <= x < geometry.width:
        return OutOfBounds(axis="x", value=x, min=0, max=geometry.width - 1)
    if not 0 <= y < geometry.height:
        return OutOfBounds(axis="y", value=y, min=0, max=geometry.height - 1)
    return None
