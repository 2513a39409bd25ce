from __future__ import annotations

import math
from collections.abc import Collection

from domain.models import BOARD, BoardGeometry, Slot
from domain.placement import DEFAULT_SUGGESTION_LIMIT


def find_nearest_free_slots(
    target: Slot,
    occupied: Collection[Slot],
    geometry: BoardGeometry = BOARD,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[Slot]:
    """Return up to ``limit`` free slots closest to ``target``.

    Candidates are ordered by Euclidean distance, ties broken row-major
    (smaller ``y`` first, then smaller ``x``). The board is small enough to
    scan every cell.
    """
    if limit <= 0:
        return []
    taken = set(occupied)
    candidates = [slot for slot in geometry.slots() if slot != target and slot not in taken]
    candidates.sort(
        key=lambda slot: (math.hypot(slot.x - target.x, slot.y - target.y), slot.y, slot.x)
    )
    return candidates[:limit]
