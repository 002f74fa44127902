"""Services consumed by the compose workflow."""

from .base import DeliverySink, FormsRenderer, MessageStore, TextEditor
from .editor import ExternalEditor
from .forms import TextTemplateRenderer
from .outbox import OutboxDelivery
from .store import FileMessageStore

__all__ = [
    "DeliverySink",
    "FormsRenderer",
    "MessageStore",
    "TextEditor",
    "ExternalEditor",
    "TextTemplateRenderer",
    "OutboxDelivery",
    "FileMessageStore",
]
