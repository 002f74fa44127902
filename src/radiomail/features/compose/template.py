"""Template (form) driven composition with a confirm/edit/discard loop."""

from enum import Enum
from typing import Optional

from radiomail.core.models.message import Message
from radiomail.core.services.base import DeliverySink, FormsRenderer, TextEditor
from radiomail.utils.errors import TemplateError
from radiomail.utils.logging import get_logger, log_call, log_event

from .composer import compose_body, finalize_message
from .display import ComposeDisplay
from .header import HeaderComposer
from .input import InputSource

logger = get_logger(__name__)

CONFIRM_PROMPT = "Post message to outbox? [Y,q,e,?]: "


class ConfirmState(Enum):
    """States of the post confirmation loop."""

    PREVIEWING = "previewing"
    EDITING = "editing"
    CONFIRMED = "confirmed"
    DISCARDED = "discarded"

    @property
    def is_terminal(self) -> bool:
        return self in (ConfirmState.CONFIRMED, ConfirmState.DISCARDED)


def next_state(answer: str) -> ConfirmState:
    """Transition out of PREVIEWING for an operator answer."""
    if answer in ("", "y", "Y"):
        return ConfirmState.CONFIRMED
    if answer == "e":
        return ConfirmState.EDITING
    if answer == "q":
        return ConfirmState.DISCARDED
    return ConfirmState.PREVIEWING


class ConfirmLoop:
    """Ask until the operator confirms or discards, editing on request."""

    def __init__(self, input_source: InputSource, display: ComposeDisplay, editor: TextEditor):
        self.input = input_source
        self.display = display
        self.editor = editor
        self.state = ConfirmState.PREVIEWING

    def run(self, body: str) -> tuple[ConfirmState, str]:
        """Run the loop.

        Returns:
            Terminal state and the (possibly edited) body

        Raises:
            EditorError: If editing fails
        """
        self.state = ConfirmState.PREVIEWING

        while not self.state.is_terminal:
            if self.state is ConfirmState.EDITING:
                body = compose_body(self.editor, self.display, body)
                self.state = ConfirmState.PREVIEWING
                continue

            answer = self.input.read_line(CONFIRM_PROMPT)
            self.state = next_state(answer)
            if self.state is ConfirmState.PREVIEWING:
                self.display.show_confirm_help()

        return self.state, body


class TemplateComposer:
    """Compose a message from a form template."""

    def __init__(self, header_composer: HeaderComposer, forms: FormsRenderer,
                 editor: TextEditor, delivery: DeliverySink,
                 input_source: InputSource, display: ComposeDisplay):
        self.header_composer = header_composer
        self.forms = forms
        self.editor = editor
        self.delivery = delivery
        self.input = input_source
        self.display = display

    @log_call
    def compose_with_template(self, template_name: str,
                              reply_context: Optional[Message] = None) -> Optional[Message]:
        """Render ``template_name`` into a new message and post it on confirmation.

        Returns:
            The posted message, or None if rendering failed or the operator quit
        """
        message = self.header_composer.compose_header(reply_context)

        try:
            result = self.forms.render_template(template_name, message.subject, reply_context)
        except TemplateError as e:
            logger.error(f"failed to compose message for template: {e.message}")
            self.display.show_error(f"Failed to compose message for template: {e.message}")
            return None

        message.subject = result.subject
        for attachment in result.attachments:
            message.add_attachment(attachment)

        self.display.show_template_preview(message, result.body)

        state, body = ConfirmLoop(self.input, self.display, self.editor).run(result.body)
        if state is ConfirmState.DISCARDED:
            self.display.show_discarded()
            log_event("message_discarded", f"Template message {message.id} discarded",
                      mid=message.id, template=template_name)
            return None

        message.body = body
        finalize_message(message)
        self.delivery.deliver(message)
        self.display.show_posted(message)
        return message
