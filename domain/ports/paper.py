from __future__ import annotations

from typing import Protocol

from domain.models import DecoType, Message


class MessageRepository(Protocol):
    def create_message(
        self,
        owner_id: int,
        x: int,
        y: int,
        content: str,
        anonymous_nickname: str,
        deco_type: DecoType,
    ) -> Message: ...

    def delete_message(self, message_id: int) -> None: ...

    def get(self, message_id: int) -> Message | None: ...

    def list_by_owner(self, owner_id: int) -> list[Message]: ...


class PaperEventPublisher(Protocol):
    def publish_message_placed(self, message: Message) -> None: ...
