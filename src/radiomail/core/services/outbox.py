"""Outbox delivery: posts finished messages as JSON files."""

import json
from pathlib import Path

from radiomail.core.models.message import Message
from radiomail.utils.errors import DeliveryError
from radiomail.utils.logging import get_logger, log_event

from .base import DeliverySink

logger = get_logger(__name__)


class OutboxDelivery(DeliverySink):
    """Write each message to ``<outbox_dir>/<id>.json``."""

    def __init__(self, outbox_dir: str | Path):
        self.outbox_dir = Path(outbox_dir).expanduser()

    def deliver(self, message: Message) -> None:
        path = self.outbox_dir / f"{message.id}.json"

        try:
            self.outbox_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(message.to_dict(), f, indent=2)
        except OSError as e:
            raise DeliveryError(f"Failed to post message {message.id}: {e}") from e

        log_event(
            "message_posted",
            f"Message {message.id} posted to outbox",
            mid=message.id,
            receivers=[str(addr) for addr in message.receivers()],
        )
