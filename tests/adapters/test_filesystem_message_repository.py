from __future__ import annotations

import threading
from pathlib import Path

import pytest

from adapters.filesystem.message_repository import FileSystemMessageRepository
from domain.models import DecoType, Slot
from domain.placement import Conflict, Placed, SlotTakenError, StorageUnavailableError
from domain.services.place_message import PlacementService


def test_messages_persist_across_instances(tmp_path: Path) -> None:
    repo = FileSystemMessageRepository(tmp_path / "paper")
    created = repo.create_message(7, 3, 4, "hello", "anon", DecoType.GRAPE)

    reopened = FileSystemMessageRepository(tmp_path / "paper")
    assert reopened.get(created.id) == created
    assert reopened.list_by_owner(7) == [created]
    assert reopened.list_by_owner(8) == []


def test_ids_keep_increasing_after_delete(tmp_path: Path) -> None:
    repo = FileSystemMessageRepository(tmp_path)
    first = repo.create_message(7, 0, 0, "a", "a", DecoType.POTATO)
    repo.delete_message(first.id)
    second = repo.create_message(7, 0, 0, "b", "b", DecoType.POTATO)
    assert second.id == first.id + 1
    assert repo.get(first.id) is None


def test_duplicate_slot_is_rejected(tmp_path: Path) -> None:
    repo = FileSystemMessageRepository(tmp_path)
    repo.create_message(7, 5, 5, "a", "a", DecoType.POTATO)
    with pytest.raises(SlotTakenError):
        repo.create_message(7, 5, 5, "b", "b", DecoType.POTATO)
    repo.create_message(8, 5, 5, "c", "c", DecoType.POTATO)


def test_two_services_sharing_a_directory_never_double_book(tmp_path: Path) -> None:
    services = [
        PlacementService(FileSystemMessageRepository(tmp_path)),
        PlacementService(FileSystemMessageRepository(tmp_path)),
    ]
    barrier = threading.Barrier(len(services))
    results: list[object] = [None, None]

    def attempt(index: int) -> None:
        barrier.wait()
        results[index] = services[index].place(7, 1, 1, "hi", "anon", DecoType.APPLE)

    threads = [threading.Thread(target=attempt, args=(idx,)) for idx in range(len(services))]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    statuses = sorted(result.status for result in results)  # type: ignore[attr-defined]
    assert statuses == ["conflict", "placed"]
    assert len(FileSystemMessageRepository(tmp_path).list_by_owner(7)) == 1


def test_slot_deleted_by_another_service_can_be_placed_again(tmp_path: Path) -> None:
    writer = PlacementService(FileSystemMessageRepository(tmp_path))
    reader = PlacementService(FileSystemMessageRepository(tmp_path))

    placed = writer.place(7, 0, 0, "hi", "anon", DecoType.APPLE)
    assert isinstance(placed, Placed)
    assert reader.occupancy.is_occupied(7, 0, 0)

    writer.delete_message(7, placed.message.id)
    result = reader.place(7, 0, 0, "again", "anon", DecoType.APPLE)

    assert isinstance(result, Placed)
    assert reader.occupancy.message_id_at(7, 0, 0) == result.message.id


def test_conflict_from_another_service_refreshes_suggestions(tmp_path: Path) -> None:
    writer = PlacementService(FileSystemMessageRepository(tmp_path))
    reader = PlacementService(FileSystemMessageRepository(tmp_path))
    assert not reader.occupancy.is_occupied(7, 0, 0)

    writer.place(7, 0, 0, "a", "anon", DecoType.APPLE)
    writer.place(7, 1, 0, "b", "anon", DecoType.APPLE)
    result = reader.place(7, 0, 0, "c", "anon", DecoType.APPLE)

    assert isinstance(result, Conflict)
    assert result.suggestions == [Slot(0, 1), Slot(1, 1), Slot(2, 0)]


def test_corrupt_store_is_reported_as_unavailable(tmp_path: Path) -> None:
    repo = FileSystemMessageRepository(tmp_path)
    repo.path.parent.mkdir(parents=True, exist_ok=True)
    repo.path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageUnavailableError):
        repo.list_by_owner(7)


def test_empty_directory_reads_as_empty_board(tmp_path: Path) -> None:
    repo = FileSystemMessageRepository(tmp_path / "missing")
    assert repo.list_by_owner(7) == []
    assert repo.get(1) is None
