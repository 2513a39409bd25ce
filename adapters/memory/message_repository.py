from __future__ import annotations

import itertools
import threading
from datetime import UTC, datetime

from domain.models import DecoType, Message
from domain.placement import SlotTakenError
from domain.ports.paper import MessageRepository


class InMemoryMessageRepository(MessageRepository):
    def __init__(self) -> None:
        self._messages: dict[int, Message] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create_message(
        self,
        owner_id: int,
        x: int,
        y: int,
        content: str,
        anonymous_nickname: str,
        deco_type: DecoType,
    ) -> Message:
        with self._lock:
            if any(
                message.owner_id == owner_id and message.x == x and message.y == y
                for message in self._messages.values()
            ):
                raise SlotTakenError(owner_id, x, y)
            message = Message(
                id=next(self._ids),
                owner_id=owner_id,
                x=x,
                y=y,
                deco_type=deco_type,
                anonymous_nickname=anonymous_nickname,
                content=content,
                created_at=datetime.now(UTC),
            )
            self._messages[message.id] = message
            return message

    def delete_message(self, message_id: int) -> None:
        with self._lock:
            self._messages.pop(message_id, None)

    def get(self, message_id: int) -> Message | None:
        with self._lock:
            return self._messages.get(message_id)

    def list_by_owner(self, owner_id: int) -> list[Message]:
        with self._lock:
            return [message for message in self._messages.values() if message.owner_id == owner_id]
