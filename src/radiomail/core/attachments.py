"""Attachment loading from the local file system."""

from pathlib import Path

from radiomail.core.models.message import Attachment, Message
from radiomail.utils.errors import AttachmentLoadError
from radiomail.utils.logging import get_logger

logger = get_logger(__name__)


def read_attachment(path: str | Path) -> Attachment:
    """Read a local file into an Attachment.

    The media type is left empty so the delivery side can infer it from the
    file name.

    Raises:
        AttachmentLoadError: If the file cannot be read
    """
    file_path = Path(path).expanduser()

    try:
        content = file_path.read_bytes()
    except OSError as e:
        raise AttachmentLoadError(
            f"Failed to read attachment '{path}': {e.strerror or e}",
            details={"path": str(path)},
        ) from e

    logger.debug(f"Read attachment {file_path.name} ({len(content)} bytes)")
    return Attachment(name=file_path.name, content=content, media_type="")


def load_attachment(message: Message, path: str | Path) -> Attachment:
    """Read a file and append it to the message.

    The message is only touched once the whole file has been read.
    """
    attachment = read_attachment(path)
    message.add_attachment(attachment)
    return attachment
