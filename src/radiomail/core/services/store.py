"""JSON file backed message store."""

import glob
import json
from pathlib import Path

from radiomail.core.models.message import Message
from radiomail.utils.errors import InvalidAddressError, MessageNotFoundError
from radiomail.utils.logging import get_logger

from .base import MessageStore

logger = get_logger(__name__)


class FileMessageStore(MessageStore):
    """Load messages from JSON files.

    A reference is either a path to a message file or a message identifier
    looked up as ``<id>.json`` anywhere below the mailbox directory.
    """

    def __init__(self, mailbox_dir: str | Path):
        self.mailbox_dir = Path(mailbox_dir).expanduser()

    def _resolve(self, ref: str) -> Path:
        candidate = Path(ref).expanduser()
        if candidate.is_file():
            return candidate

        if self.mailbox_dir.is_dir():
            for path in sorted(self.mailbox_dir.rglob(f"{glob.escape(ref)}.json")):
                return path

        raise MessageNotFoundError(
            f"Unable to find message '{ref}'", details={"ref": ref}
        )

    def load_message(self, ref: str) -> Message:
        path = self._resolve(ref)

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            message = Message.from_dict(data)
        except OSError as e:
            raise MessageNotFoundError(f"Unable to read message '{ref}': {e}") from e
        except (ValueError, KeyError, TypeError, InvalidAddressError) as e:
            raise MessageNotFoundError(f"Message '{ref}' is not a valid message file: {e}") from e

        logger.debug(f"Loaded message {message.id} from {path}")
        return message
