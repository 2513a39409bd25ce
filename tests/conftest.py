from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from adapters.memory.message_repository import InMemoryMessageRepository
from app.config import AppSettings, PaperSettings
from domain.services.place_message import PlacementService


def _clear_rp_env() -> None:
    for key in list(os.environ):
        if key.startswith("RP_"):
            os.environ.pop(key, None)


_clear_rp_env()


@pytest.fixture(autouse=True)
def clear_rp_env() -> Generator[None, None, None]:
    _clear_rp_env()
    yield
    _clear_rp_env()


@pytest.fixture
def paper_settings(tmp_path: Path) -> PaperSettings:
    return PaperSettings(
        title="Test Paper",
        storage="filesystem",
        data_dir=tmp_path / "paper",
        lock_timeout_seconds=5.0,
        suggestion_limit=3,
        log_level="DEBUG",
    )


@pytest.fixture
def paper_settings_factory(paper_settings: PaperSettings) -> Callable[..., PaperSettings]:
    def _factory(**overrides: object) -> PaperSettings:
        return paper_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(paper_settings: PaperSettings) -> AppSettings:
    return AppSettings(paper=paper_settings)


@pytest.fixture
def app_settings_factory(
    paper_settings_factory: Callable[..., PaperSettings],
) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(paper=paper_settings_factory(**overrides))

    return _factory


@pytest.fixture
def repository() -> InMemoryMessageRepository:
    return InMemoryMessageRepository()


@pytest.fixture
def service(repository: InMemoryMessageRepository) -> PlacementService:
    return PlacementService(repository)
