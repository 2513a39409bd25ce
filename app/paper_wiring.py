from __future__ import annotations

from dataclasses import dataclass

from adapters.events.logging_publisher import LoggingPaperEventPublisher
from adapters.filesystem.message_repository import FileSystemMessageRepository
from adapters.memory.message_repository import InMemoryMessageRepository
from app.config import AppSettings
from domain.ports.paper import MessageRepository
from domain.services.occupancy_index import OccupancyIndex
from domain.services.place_message import PlacementService
from domain.services.read_paper import PaperReader


@dataclass(frozen=True)
class PaperContext:
    settings: AppSettings
    repository: MessageRepository
    placement: PlacementService
    reader: PaperReader


def build_message_repository(settings: AppSettings) -> MessageRepository:
    if settings.paper.storage == "memory":
        return InMemoryMessageRepository()
    return FileSystemMessageRepository(
        settings.paper.data_dir,
        lock_timeout=settings.paper.lock_timeout_seconds,
    )


def build_paper_context(
    settings: AppSettings,
    repository: MessageRepository | None = None,
) -> PaperContext:
    repository = repository or build_message_repository(settings)
    placement = PlacementService(
        repository,
        occupancy=OccupancyIndex(repository.list_by_owner),
        events=LoggingPaperEventPublisher(),
        suggestion_limit=settings.paper.suggestion_limit,
    )
    return PaperContext(
        settings=settings,
        repository=repository,
        placement=placement,
        reader=PaperReader(repository),
    )
