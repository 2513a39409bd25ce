from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from domain.models import Message, Slot

logger = logging.getLogger(__name__)

OccupancyLoader = Callable[[int], Iterable[Message]]


@dataclass
class _OwnerOccupancy:
    lock: threading.Lock = field(default_factory=threading.Lock)
    slots: dict[Slot, int | None] = field(default_factory=dict)
    loaded: bool = False


class OccupancyIndex:
    """Per-owner map of taken slots to message ids.

    ``try_insert`` is the only place a slot changes hands, and it runs under
    the owner's lock. A slot mapped to ``None`` is reserved by a placement
    whose message has not been persisted yet. Boards are independent: no
    operation ever holds two owners' locks.
    """

    def __init__(self, loader: OccupancyLoader | None = None) -> None:
        self._loader = loader
        self._owners: dict[int, _OwnerOccupancy] = {}
        self._registry_lock = threading.Lock()

    def try_insert(self, owner_id: int, x: int, y: int, message_id: int | None) -> bool:
        board = self._board(owner_id)
        slot = Slot(x, y)
        with board.lock:
            self._ensure_loaded(owner_id, board)
            if slot in board.slots:
                return False
            board.slots[slot] = message_id
            return True

    def bind(self, owner_id: int, x: int, y: int, message_id: int) -> None:
        board = self._board(owner_id)
        slot = Slot(x, y)
        with board.lock:
            self._ensure_loaded(owner_id, board)
            if slot not in board.slots:
                msg = f"Slot ({x}, {y}) on board {owner_id} is not reserved"
                raise KeyError(msg)
            board.slots[slot] = message_id

    def is_occupied(self, owner_id: int, x: int, y: int) -> bool:
        board = self._board(owner_id)
        with board.lock:
            self._ensure_loaded(owner_id, board)
            return Slot(x, y) in board.slots

    def message_id_at(self, owner_id: int, x: int, y: int) -> int | None:
        board = self._board(owner_id)
        with board.lock:
            self._ensure_loaded(owner_id, board)
            return board.slots.get(Slot(x, y))

    def remove(self, owner_id: int, x: int, y: int) -> None:
        board = self._board(owner_id)
        with board.lock:
            self._ensure_loaded(owner_id, board)
            board.slots.pop(Slot(x, y), None)

    def occupied_set(self, owner_id: int) -> frozenset[Slot]:
        board = self._board(owner_id)
        with board.lock:
            self._ensure_loaded(owner_id, board)
            return frozenset(board.slots)

    def refresh(self, owner_id: int) -> None:
        """Re-read an owner's stored messages, keeping in-flight reservations.

        Other processes sharing the store may have added or deleted messages
        since this index was seeded.
        """
        if self._loader is None:
            return
        board = self._board(owner_id)
        with board.lock:
            slots: dict[Slot, int | None] = {
                message.slot: message.id for message in self._loader(owner_id)
            }
            for slot, message_id in board.slots.items():
                if message_id is None:
                    slots[slot] = None
            board.slots = slots
            board.loaded = True

    def _board(self, owner_id: int) -> _OwnerOccupancy:
        with self._registry_lock:
            board = self._owners.get(owner_id)
            if board is None:
                board = _OwnerOccupancy()
                self._owners[owner_id] = board
            return board

    def _ensure_loaded(self, owner_id: int, board: _OwnerOccupancy) -> None:
        # Caller holds board.lock.
        if board.loaded:
            return
        if self._loader is not None:
            for message in self._loader(owner_id):
                board.slots.setdefault(message.slot, message.id)
            logger.debug("Loaded %d occupied slots for board %s", len(board.slots), owner_id)
        board.loaded = True
