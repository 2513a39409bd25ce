from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from domain.models import DeviceProfile, Message, VisitMessage
from domain.ports.paper import MessageRepository
from domain.services.coordinate_system import page_slots, to_paged


@dataclass(frozen=True)
class PageCell:
    col: int
    row: int
    x: int
    y: int
    message: VisitMessage | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "col": self.col,
            "row": self.row,
            "x": self.x,
            "y": self.y,
            "message": self.message.to_dict() if self.message else None,
        }


@dataclass(frozen=True)
class PageLayout:
    owner_id: int
    profile: DeviceProfile
    page: int
    page_count: int
    columns: int
    cells: list[PageCell]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ownerId": self.owner_id,
            "profile": self.profile.value,
            "page": self.page,
            "pageCount": self.page_count,
            "columns": self.columns,
            "cells": [cell.to_dict() for cell in self.cells],
        }


class PaperReader:
    def __init__(self, repository: MessageRepository) -> None:
        self._repository = repository

    def owner_view(self, owner_id: int) -> list[Message]:
        return _sorted(self._repository.list_by_owner(owner_id))

    def visit_view(self, owner_id: int) -> list[VisitMessage]:
        return [message.to_visit() for message in self.owner_view(owner_id)]

    def page_layout(self, owner_id: int, page: int, profile: DeviceProfile) -> PageLayout | None:
        slots = page_slots(page, profile)
        if not slots:
            return None
        by_slot = {message.slot: message.to_visit() for message in self.owner_view(owner_id)}
        cells: list[PageCell] = []
        for slot in slots:
            paged = to_paged(slot.x, slot.y, profile)
            cells.append(
                PageCell(
                    col=paged.col,
                    row=paged.row,
                    x=slot.x,
                    y=slot.y,
                    message=by_slot.get(slot),
                )
            )
        return PageLayout(
            owner_id=owner_id,
            profile=profile,
            page=page,
            page_count=profile.page_count,
            columns=profile.columns_per_page,
            cells=cells,
        )


def _sorted(messages: list[Message]) -> list[Message]:
    return sorted(messages, key=lambda message: (message.y, message.x, message.id))
