"""Redirect (forward without change) composition."""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional

from radiomail.core.models.message import Message
from radiomail.utils.errors import MissingRedirectSourceError
from radiomail.utils.logging import get_logger

logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def redirect_message(message: Message, source: Optional[Message],
                     now: Callable[[], datetime] = _utcnow) -> Message:
    """Wrap ``source`` unchanged in the body of ``message``.

    The new body starts with a "forwarded without change" line, followed by
    the source headers, a blank line and the original body. All source
    attachments are copied as they are. To, Cc and Subject of ``message`` are
    left alone.

    Raises:
        MissingRedirectSourceError: If there is no source message
    """
    if source is None:
        raise MissingRedirectSourceError()

    lines = [
        f"----- Message from {source.from_addr.addr} was forwarded without change "
        f"by {message.from_addr.addr} at {now().strftime(TIMESTAMP_FORMAT)} UTC -----",
        "",
        f"MID:  {source.id}",
        f"Date: {source.formatted_date()}",
        f"From: {source.from_addr}",
    ]
    lines.extend(f"To: {addr}" for addr in source.to)
    lines.extend(f"Cc: {addr}" for addr in source.cc)
    lines.append(f"Subject: {source.subject}")
    lines.append("")
    lines.append(source.body)

    message.body = "\n".join(lines) + "\n"

    for attachment in source.attachments:
        message.add_attachment(replace(attachment))

    logger.debug(
        f"Redirecting {source.id} as {message.id} with {len(source.attachments)} attachments"
    )
    return message
