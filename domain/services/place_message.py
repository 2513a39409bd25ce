from __future__ import annotations

import logging

from domain.models import BOARD, BoardGeometry, DecoType, Message, Slot
from domain.placement import (
    CONTENT_MAX_LENGTH,
    DEFAULT_SUGGESTION_LIMIT,
    NICKNAME_MAX_LENGTH,
    Conflict,
    MessageDeleteForbiddenError,
    MessageNotFoundError,
    Placed,
    PlacementResult,
    SlotTakenError,
    StorageUnavailableError,
    ValidationError,
)
from domain.ports.paper import MessageRepository, PaperEventPublisher
from domain.services.board_bounds import check_bounds
from domain.services.nearest_slots import find_nearest_free_slots
from domain.services.occupancy_index import OccupancyIndex

logger = logging.getLogger(__name__)


class PlacementService:
    """Places anonymous messages on a member's board.

    A slot is reserved in the occupancy index before the message is
    persisted and released again if persistence fails, so a failed write
    never leaves a stored message without its slot (or a slot without its
    message).
    """

    def __init__(
        self,
        repository: MessageRepository,
        occupancy: OccupancyIndex | None = None,
        events: PaperEventPublisher | None = None,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
        geometry: BoardGeometry = BOARD,
    ) -> None:
        self._repository = repository
        self._occupancy = occupancy or OccupancyIndex(repository.list_by_owner)
        self._events = events
        self._suggestion_limit = suggestion_limit
        self._geometry = geometry

    @property
    def occupancy(self) -> OccupancyIndex:
        return self._occupancy

    def place(
        self,
        owner_id: int,
        x: int,
        y: int,
        content: str,
        anonymous_nickname: str,
        deco_type: DecoType,
    ) -> PlacementResult:
        invalid = validate_message_fields(content, anonymous_nickname)
        if invalid is not None:
            return invalid
        out_of_bounds = check_bounds(x, y, self._geometry)
        if out_of_bounds is not None:
            logger.debug("Rejected (%s, %s) on board %s: %s", x, y, owner_id, out_of_bounds.reason)
            return out_of_bounds

        if not self._occupancy.try_insert(owner_id, x, y, None):
            # The index may be stale if another process deleted the message.
            self._occupancy.refresh(owner_id)
            if not self._occupancy.try_insert(owner_id, x, y, None):
                return self._conflict(owner_id, x, y)

        try:
            message = self._repository.create_message(
                owner_id, x, y, content, anonymous_nickname, deco_type
            )
        except SlotTakenError:
            # Another process sharing the store got there first.
            self._occupancy.remove(owner_id, x, y)
            self._occupancy.refresh(owner_id)
            return self._conflict(owner_id, x, y)
        except StorageUnavailableError:
            self._occupancy.remove(owner_id, x, y)
            logger.exception("Failed to store message at (%s, %s) on board %s", x, y, owner_id)
            raise
        except Exception:
            self._occupancy.remove(owner_id, x, y)
            raise

        self._occupancy.bind(owner_id, x, y, message.id)
        logger.info("Placed message %s at (%s, %s) on board %s", message.id, x, y, owner_id)
        if self._events is not None:
            try:
                self._events.publish_message_placed(message)
            except Exception:
                logger.exception("Failed to publish placement of message %s", message.id)
        return Placed(message)

    def suggest(self, owner_id: int, x: int, y: int, limit: int | None = None) -> list[Slot]:
        return find_nearest_free_slots(
            Slot(x, y),
            self._occupancy.occupied_set(owner_id),
            self._geometry,
            self._suggestion_limit if limit is None else limit,
        )

    def delete_message(self, member_id: int, message_id: int) -> Message:
        """Delete a message from the member's own board and free its slot."""
        message = self._repository.get(message_id)
        if message is None:
            raise MessageNotFoundError(message_id)
        if message.owner_id != member_id:
            raise MessageDeleteForbiddenError(message_id, member_id)
        self._repository.delete_message(message_id)
        if self._occupancy.message_id_at(message.owner_id, message.x, message.y) == message.id:
            self._occupancy.remove(message.owner_id, message.x, message.y)
        logger.info("Deleted message %s from board %s", message_id, message.owner_id)
        return message

    def _conflict(self, owner_id: int, x: int, y: int) -> Conflict:
        suggestions = self.suggest(owner_id, x, y)
        logger.debug(
            "Slot (%s, %s) on board %s taken, suggesting %s",
            x,
            y,
            owner_id,
            [(slot.x, slot.y) for slot in suggestions],
        )
        return Conflict(suggestions)


def validate_message_fields(content: str, anonymous_nickname: str) -> ValidationError | None:
    if not content:
        return ValidationError(field="content", reason="content must not be empty")
    if len(content) > CONTENT_MAX_LENGTH:
        return ValidationError(
            field="content", reason=f"content must be at most {CONTENT_MAX_LENGTH} characters"
        )
    if not anonymous_nickname:
        return ValidationError(
            field="anonymousNickname", reason="anonymousNickname must not be empty"
        )
    if len(anonymous_nickname) > NICKNAME_MAX_LENGTH:
        return ValidationError(
            field="anonymousNickname",
            reason=f"anonymousNickname must be at most {NICKNAME_MAX_LENGTH} characters",
        )
    return None
