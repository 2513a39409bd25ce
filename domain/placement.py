from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from domain.models import Message, Slot

CONTENT_MAX_LENGTH = 255
NICKNAME_MAX_LENGTH = 8
DEFAULT_SUGGESTION_LIMIT = 3


class PaperError(Exception):
    """Base class for rolling paper failures raised (not returned) by the core."""


class StorageUnavailableError(PaperError):
    """Persistence failed; callers retry or surface it as-is."""


class SlotTakenError(PaperError):
    def __init__(self, owner_id: int, x: int, y: int) -> None:
        super().__init__(f"Slot ({x}, {y}) on board {owner_id} is already taken")
        self.owner_id = owner_id
        self.x = x
        self.y = y


class MessageNotFoundError(PaperError):
    def __init__(self, message_id: int) -> None:
        super().__init__(f"Message not found: {message_id}")
        self.message_id = message_id


class MessageDeleteForbiddenError(PaperError):
    def __init__(self, message_id: int, member_id: int) -> None:
        super().__init__(f"Member {member_id} does not own message {message_id}")
        self.message_id = message_id
        self.member_id = member_id


@dataclass(frozen=True)
class Placed:
    message: Message
    status: Literal["placed"] = field(default="placed", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "message": self.message.to_dict()}


@dataclass(frozen=True)
class Conflict:
    suggestions: list[Slot]
    status: Literal["conflict"] = field(default="conflict", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "suggestions": [slot.to_dict() for slot in self.suggestions],
        }


@dataclass(frozen=True)
class OutOfBounds:
    axis: Literal["x", "y"]
    value: int
    min: int
    max: int
    status: Literal["error"] = field(default="error", init=False)

    @property
    def reason(self) -> str:
        return f"{self.axis} must be {self.min}-{self.max}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "axis": self.axis,
            "value": self.value,
            "min": self.min,
            "max": self.max,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class ValidationError:
    field: str
    reason: str
    status: Literal["error"] = field(default="error", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "field": self.field, "reason": self.reason}


PlacementResult = Placed | Conflict | OutOfBounds | ValidationError
