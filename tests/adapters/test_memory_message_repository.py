from __future__ import annotations

import pytest

from adapters.memory.message_repository import InMemoryMessageRepository
from domain.models import DecoType
from domain.placement import SlotTakenError


def test_create_assigns_ids_and_timestamps() -> None:
    repo = InMemoryMessageRepository()
    first = repo.create_message(7, 0, 0, "a", "a", DecoType.KRAKEN)
    second = repo.create_message(7, 1, 0, "b", "b", DecoType.KRAKEN)
    assert (first.id, second.id) == (1, 2)
    assert first.created_at.tzinfo is not None
    assert repo.get(2) == second


def test_unique_slot_per_owner() -> None:
    repo = InMemoryMessageRepository()
    repo.create_message(7, 0, 0, "a", "a", DecoType.KRAKEN)
    with pytest.raises(SlotTakenError):
        repo.create_message(7, 0, 0, "b", "b", DecoType.KRAKEN)


def test_delete_is_idempotent() -> None:
    repo = InMemoryMessageRepository()
    message = repo.create_message(7, 0, 0, "a", "a", DecoType.KRAKEN)
    repo.delete_message(message.id)
    repo.delete_message(message.id)
    assert repo.list_by_owner(7) == []
