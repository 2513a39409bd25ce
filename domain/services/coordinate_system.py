from __future__ import annotations

from domain.models import BOARD, DeviceProfile, PagedSlot, Slot


def to_absolute(page: int, col: int, row: int, profile: DeviceProfile) -> Slot:
    """Translate a 1-based page and page-local column into board coordinates."""
    return Slot((page - 1) * profile.columns_per_page + col, row)


def to_paged(x: int, y: int, profile: DeviceProfile) -> PagedSlot:
    columns = profile.columns_per_page
    return PagedSlot(page=x // columns + 1, col=x % columns, row=y)


def page_slots(page: int, profile: DeviceProfile) -> list[Slot]:
    if page < 1 or page > profile.page_count:
        return []
    return [
        to_absolute(page, col, row, profile)
        for row in range(BOARD.height)
        for col in range(profile.columns_per_page)
    ]
