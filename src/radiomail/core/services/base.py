"""Base classes for the services a compose session depends on."""

from abc import ABC, abstractmethod
from typing import Optional

from radiomail.core.models.message import Message, TemplateResult


class MessageStore(ABC):
    """Loads previously received messages by reference."""

    @abstractmethod
    def load_message(self, ref: str) -> Message:
        """Load a message.

        Args:
            ref (str): Path or message identifier.

        Raises:
            MessageNotFoundError: If the reference cannot be resolved.
        """
        pass


class TextEditor(ABC):
    """Captures message body text from the operator."""

    @abstractmethod
    def edit_text(self, seed: str) -> str:
        """Return the edited text, starting from ``seed``.

        Raises:
            EditorError: If the editor fails.
        """
        pass


class FormsRenderer(ABC):
    """Renders a named form template into message content."""

    @abstractmethod
    def render_template(
        self, name: str, subject_hint: str, reply_context: Optional[Message] = None
    ) -> TemplateResult:
        """Render the template.

        Raises:
            TemplateError: If the template cannot be rendered.
        """
        pass


class DeliverySink(ABC):
    """Hands finished messages to the outbound pipeline."""

    @abstractmethod
    def deliver(self, message: Message) -> None:
        """Post the message.

        Raises:
            DeliveryError: If the message cannot be posted.
        """
        pass
