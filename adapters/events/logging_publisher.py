from __future__ import annotations

import logging

from domain.models import Message
from domain.ports.paper import PaperEventPublisher

logger = logging.getLogger(__name__)


class LoggingPaperEventPublisher(PaperEventPublisher):
    def publish_message_placed(self, message: Message) -> None:
        logger.info(
            "New message %s on board %s (deco=%s)",
            message.id,
            message.owner_id,
            message.deco_type.value,
        )
