"""Domain models."""

from .message import Address, Attachment, Message, ReplyContext, TemplateResult

__all__ = ["Address", "Attachment", "Message", "ReplyContext", "TemplateResult"]
