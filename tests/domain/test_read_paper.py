from __future__ import annotations

from adapters.memory.message_repository import InMemoryMessageRepository
from domain.models import DecoType, DeviceProfile
from domain.services.read_paper import PaperReader


def _seed() -> InMemoryMessageRepository:
    repository = InMemoryMessageRepository()
    repository.create_message(7, 7, 3, "second", "b", DecoType.DRAGON)
    repository.create_message(7, 0, 0, "first", "a", DecoType.POTATO)
    repository.create_message(8, 0, 0, "other board", "c", DecoType.ORC)
    return repository


def test_owner_view_is_row_major_and_scoped_to_owner() -> None:
    messages = PaperReader(_seed()).owner_view(7)
    assert [(message.x, message.y) for message in messages] == [(0, 0), (7, 3)]
    assert [message.content for message in messages] == ["first", "second"]


def test_visit_view_withholds_content() -> None:
    visits = PaperReader(_seed()).visit_view(7)
    assert [visit.to_dict() for visit in visits] == [
        {"id": 2, "ownerId": 7, "x": 0, "y": 0, "decoType": "POTATO"},
        {"id": 1, "ownerId": 7, "x": 7, "y": 3, "decoType": "DRAGON"},
    ]


def test_page_layout_places_messages_in_page_cells() -> None:
    layout = PaperReader(_seed()).page_layout(7, 2, DeviceProfile.DESKTOP)
    assert layout is not None
    assert layout.page_count == 2
    assert layout.columns == 6
    assert len(layout.cells) == 60
    filled = [cell for cell in layout.cells if cell.message is not None]
    assert len(filled) == 1
    cell = filled[0]
    assert (cell.col, cell.row, cell.x, cell.y) == (1, 3, 7, 3)
    assert cell.message is not None
    assert cell.message.deco_type is DecoType.DRAGON


def test_page_layout_on_mobile() -> None:
    layout = PaperReader(_seed()).page_layout(7, 1, DeviceProfile.MOBILE)
    assert layout is not None
    assert len(layout.cells) == 40
    assert layout.cells[0].message is not None
    payload = layout.to_dict()
    assert payload["profile"] == "mobile"
    assert payload["pageCount"] == 3
    assert "content" not in payload["cells"][0]["message"]


def test_page_layout_outside_profile_is_none() -> None:
    reader = PaperReader(_seed())
    assert reader.page_layout(7, 3, DeviceProfile.DESKTOP) is None
    assert reader.page_layout(7, 0, DeviceProfile.MOBILE) is None
