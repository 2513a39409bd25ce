from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, TypeVar

import orjson
from filelock import FileLock, Timeout

from adapters.filesystem.json_utils import load_json, write_json_atomic
from domain.models import DecoType, Message
from domain.placement import SlotTakenError, StorageUnavailableError
from domain.ports.paper import MessageRepository

T = TypeVar("T")

MESSAGES_FILE_NAME = "messages.json"


class FileSystemMessageRepository(MessageRepository):
    """Stores every board in one JSON document guarded by a file lock.

    The ``(owner_id, x, y)`` uniqueness check runs under the same lock as
    the write, so processes sharing a data directory cannot double-book a
    slot even though each keeps its own in-memory occupancy index.
    """

    def __init__(self, data_dir: Path, lock_timeout: float = 10.0) -> None:
        self._path = data_dir / MESSAGES_FILE_NAME
        lock_path = self._path.with_suffix(f"{self._path.suffix}.lock")
        self._lock = FileLock(str(lock_path), timeout=lock_timeout)

    @property
    def path(self) -> Path:
        return self._path

    def create_message(
        self,
        owner_id: int,
        x: int,
        y: int,
        content: str,
        anonymous_nickname: str,
        deco_type: DecoType,
    ) -> Message:
        def _create(document: dict[str, Any]) -> Message:
            messages = document.setdefault("messages", [])
            for payload in messages:
                if (
                    int(payload["ownerId"]) == owner_id
                    and int(payload["x"]) == x
                    and int(payload["y"]) == y
                ):
                    raise SlotTakenError(owner_id, x, y)
            message_id = int(document.get("next_id", 1))
            message = Message(
                id=message_id,
                owner_id=owner_id,
                x=x,
                y=y,
                deco_type=deco_type,
                anonymous_nickname=anonymous_nickname,
                content=content,
                created_at=datetime.now(UTC),
            )
            messages.append(message.to_dict())
            document["next_id"] = message_id + 1
            return message

        return self._update(_create)

    def delete_message(self, message_id: int) -> None:
        def _delete(document: dict[str, Any]) -> None:
            document["messages"] = [
                payload
                for payload in document.get("messages", [])
                if int(payload["id"]) != message_id
            ]

        self._update(_delete)

    def get(self, message_id: int) -> Message | None:
        for message in self._read_all():
            if message.id == message_id:
                return message
        return None

    def list_by_owner(self, owner_id: int) -> list[Message]:
        return [message for message in self._read_all() if message.owner_id == owner_id]

    def _read_all(self) -> list[Message]:
        with self._locked():
            document = self._load()
        return [Message.from_dict(payload) for payload in document.get("messages", [])]

    def _update(self, mutate: Callable[[dict[str, Any]], T]) -> T:
        with self._locked():
            document = self._load()
            result = mutate(document)
            try:
                write_json_atomic(self._path, document)
            except OSError as exc:
                msg = f"Failed to write {self._path}"
                raise StorageUnavailableError(msg) from exc
            return result

    def _load(self) -> dict[str, Any]:
        try:
            return load_json(self._path)
        except (OSError, orjson.JSONDecodeError) as exc:
            msg = f"Failed to read {self._path}"
            raise StorageUnavailableError(msg) from exc

    @contextmanager
    def _locked(self) -> Iterator[None]:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._lock.acquire()
        except (OSError, Timeout) as exc:
            msg = f"Message store is locked or unreachable: {self._path}"
            raise StorageUnavailableError(msg) from exc
        try:
            yield
        finally:
            self._lock.release()
