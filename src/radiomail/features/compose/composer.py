"""Message composition domain logic."""

from radiomail.core.models.message import Message
from radiomail.core.services.base import TextEditor
from radiomail.utils.errors import MissingRecipientsError
from radiomail.utils.logging import get_logger

from .display import ComposeDisplay

logger = get_logger(__name__)

NO_SUBJECT = "<No subject>"
NO_BODY = "<No message body>\n"
REPLY_PREFIX = "Re:"


def reply_subject(subject: str) -> str:
    """Derive a reply subject with exactly one leading ``Re:``."""
    subject = subject.strip()
    if subject.startswith(REPLY_PREFIX):
        subject = subject[len(REPLY_PREFIX):].strip()
    return f"{REPLY_PREFIX} {subject}" if subject else REPLY_PREFIX


def default_subject(subject: str) -> str:
    return subject if subject else NO_SUBJECT


def default_body(body: str) -> str:
    """An empty message body is illegal; substitute the placeholder."""
    return body if body.strip() else NO_BODY


def build_citation(reply_context: Message) -> str:
    """Quote a prior message as the seed for a reply body."""
    lines = [f"--- {reply_context.formatted_date()} {reply_context.from_addr.addr} wrote: ---"]
    lines.extend(f">{line}" for line in reply_context.body.splitlines())
    return "\n".join(lines) + "\n"


def compose_body(editor: TextEditor, display: ComposeDisplay, seed: str = "") -> str:
    """Capture a body through the editor and echo it.

    Raises:
        EditorError: If the editor fails
    """
    body = editor.edit_text(seed)
    display.show_body(body)
    return default_body(body)


def finalize_message(message: Message) -> Message:
    """Apply subject/body defaults and check the receiver invariant.

    Raises:
        MissingRecipientsError: If the message has no receivers
    """
    if not message.receivers():
        raise MissingRecipientsError()

    message.subject = default_subject(message.subject)
    message.body = default_body(message.body)
    return message
