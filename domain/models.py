from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class BoardGeometry:
    width: int
    height: int

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def slots(self) -> list[Slot]:
        return [Slot(x, y) for y in range(self.height) for x in range(self.width)]


BOARD = BoardGeometry(width=12, height=10)


@dataclass(frozen=True, order=True)
class Slot:
    x: int
    y: int

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class PagedSlot:
    page: int
    col: int
    row: int


class DeviceProfile(Enum):
    MOBILE = "mobile"
    DESKTOP = "desktop"

    @property
    def columns_per_page(self) -> int:
        return _COLUMNS_PER_PAGE[self]

    @property
    def page_count(self) -> int:
        return BOARD.width // self.columns_per_page


_COLUMNS_PER_PAGE = {
    DeviceProfile.MOBILE: 4,
    DeviceProfile.DESKTOP: 6,
}

# Pages must tile the board exactly, otherwise paged coordinates stop round-tripping.
for _profile, _columns in _COLUMNS_PER_PAGE.items():
    if BOARD.width % _columns:
        msg = f"{_profile.name} columns per page ({_columns}) must divide board width"
        raise RuntimeError(msg)


class DecoType(StrEnum):
    POTATO = "POTATO"
    CARROT = "CARROT"
    CABBAGE = "CABBAGE"
    TOMATO = "TOMATO"
    STRAWBERRY = "STRAWBERRY"
    WATERMELON = "WATERMELON"
    PUMPKIN = "PUMPKIN"
    APPLE = "APPLE"
    GRAPE = "GRAPE"
    BANANA = "BANANA"
    GOBLIN = "GOBLIN"
    SLIME = "SLIME"
    ORC = "ORC"
    DRAGON = "DRAGON"
    PHOENIX = "PHOENIX"
    WEREWOLF = "WEREWOLF"
    ZOMBIE = "ZOMBIE"
    KRAKEN = "KRAKEN"
    CYCLOPS = "CYCLOPS"


@dataclass(frozen=True)
class Message:
    id: int
    owner_id: int
    x: int
    y: int
    deco_type: DecoType
    anonymous_nickname: str
    content: str
    created_at: datetime

    @property
    def slot(self) -> Slot:
        return Slot(self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "x": self.x,
            "y": self.y,
            "decoType": self.deco_type.value,
            "anonymousNickname": self.anonymous_nickname,
            "content": self.content,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> Message:
        return cls(
            id=int(payload["id"]),
            owner_id=int(payload["ownerId"]),
            x=int(payload["x"]),
            y=int(payload["y"]),
            deco_type=DecoType(str(payload["decoType"])),
            anonymous_nickname=str(payload.get("anonymousNickname", "")),
            content=str(payload.get("content", "")),
            created_at=datetime.fromisoformat(str(payload["createdAt"])),
        )

    def to_visit(self) -> VisitMessage:
        return VisitMessage(
            id=self.id,
            owner_id=self.owner_id,
            x=self.x,
            y=self.y,
            deco_type=self.deco_type,
        )


@dataclass(frozen=True)
class VisitMessage:
    """Public projection of a message: what non-owners see on a board."""

    id: int
    owner_id: int
    x: int
    y: int
    deco_type: DecoType

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "x": self.x,
            "y": self.y,
            "decoType": self.deco_type.value,
        }


class PlacementRequest(BaseModel):
    """Incoming message body.

    Only types are checked here; length and bounds rules are applied by the
    placement service so they come back as typed results, not 422 noise.
    """

    model_config = ConfigDict(populate_by_name=True)

    x: int
    y: int
    content: str
    anonymous_nickname: str = Field(..., alias="anonymousNickname")
    deco_type: DecoType = Field(DecoType.POTATO, alias="decoType")


class DeleteRequest(BaseModel):
    id: int = Field(..., ge=1)
