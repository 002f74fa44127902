"""Main workflow orchestration for message composition."""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from radiomail.core.attachments import load_attachment
from radiomail.core.models.message import Message
from radiomail.core.services.base import DeliverySink, FormsRenderer, MessageStore, TextEditor
from radiomail.utils.errors import (
    AttachmentLoadError,
    ConflictingOptionsError,
    MissingRecipientsError,
)
from radiomail.utils.logging import get_logger, log_call

from .composer import (
    build_citation,
    compose_body,
    default_body,
    default_subject,
    finalize_message,
)
from .display import ComposeDisplay
from .header import HeaderComposer
from .input import InputSource
from .redirect import redirect_message
from .template import TemplateComposer

logger = get_logger(__name__)


## Compose Requests


@dataclass
class ComposeOptions:
    """Raw options from the command surface."""

    sender: Optional[str] = None
    subject: str = ""
    attachments: List[str] = field(default_factory=list)
    ccs: List[str] = field(default_factory=list)
    p2p_only: bool = False
    template: str = ""
    in_reply_to: str = ""
    redirect: str = ""
    recipients: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class InteractiveRequest:
    """Prompt for everything; optionally a reply."""

    reply_context: Optional[Message] = None


@dataclass(frozen=True)
class NonInteractiveRequest:
    """Compose from options and the body stream without prompting."""

    sender: str
    subject: str
    attachments: tuple
    ccs: tuple
    recipients: tuple
    p2p_only: bool = False


@dataclass(frozen=True)
class TemplateRequest:
    """Compose from a form template."""

    template: str
    reply_context: Optional[Message] = None


@dataclass(frozen=True)
class RedirectRequest:
    """Forward a message without change."""

    source: Message


ComposeRequest = Union[InteractiveRequest, NonInteractiveRequest, TemplateRequest, RedirectRequest]


def wants_non_interactive(options: ComposeOptions, recipients: List[str]) -> bool:
    """Any addressing or content option without template/redirect skips prompting."""
    if options.redirect or options.template:
        return False
    return bool(options.subject or options.attachments or options.ccs or recipients)


@log_call
def build_request(options: ComposeOptions, store: MessageStore, mycall: str) -> ComposeRequest:
    """Validate raw options once and select the compose mode.

    Raises:
        ConflictingOptionsError: If both in-reply-to and redirect are given
        MessageNotFoundError: If a referenced message cannot be loaded
    """
    if options.in_reply_to and options.redirect:
        raise ConflictingOptionsError()

    # Filter out empty args (this actually happens)
    recipients = [r for r in options.recipients if r.strip()]

    reply_context = None
    if options.in_reply_to:
        reply_context = store.load_message(options.in_reply_to)
    if options.redirect:
        reply_context = store.load_message(options.redirect)

    if wants_non_interactive(options, recipients):
        return NonInteractiveRequest(
            sender=options.sender or mycall,
            subject=options.subject,
            attachments=tuple(options.attachments),
            ccs=tuple(c for c in options.ccs if c.strip()),
            recipients=tuple(recipients),
            p2p_only=options.p2p_only,
        )

    if options.template:
        return TemplateRequest(template=options.template, reply_context=reply_context)

    if options.redirect:
        return RedirectRequest(source=reply_context)

    return InteractiveRequest(reply_context=reply_context)


## Orchestrator


class ComposeOrchestrator:
    """Runs one compose session against its collaborators.

    The orchestrator owns the session input handle and the message under
    construction; nothing is delivered unless the whole flow succeeds.
    """

    def __init__(
        self,
        mycall: str,
        input_source: InputSource,
        editor: TextEditor,
        forms: FormsRenderer,
        delivery: DeliverySink,
        store: MessageStore,
        display: Optional[ComposeDisplay] = None,
    ):
        self.mycall = mycall
        self.input = input_source
        self.editor = editor
        self.forms = forms
        self.delivery = delivery
        self.store = store
        self.display = display or ComposeDisplay()

    def _header_composer(self, sender: Optional[str] = None) -> HeaderComposer:
        return HeaderComposer(self.mycall, self.input, self.display, sender=sender)

    def _post(self, message: Message) -> Message:
        finalize_message(message)
        self.delivery.deliver(message)
        self.display.show_posted(message)
        logger.info(f"Message {message.id} posted")
        return message

    @log_call
    def compose(self, options: ComposeOptions) -> Optional[Message]:
        """Compose and post a message as selected by ``options``.

        Returns:
            The posted message, or None when the operator discarded it or
            the template could not be rendered
        """
        request = build_request(options, self.store, self.mycall)
        logger.debug(f"Compose mode: {type(request).__name__}")
        return self.dispatch(request, sender=options.sender)

    def dispatch(self, request: ComposeRequest, sender: Optional[str] = None) -> Optional[Message]:
        match request:
            case NonInteractiveRequest():
                return self.compose_non_interactive(request)
            case TemplateRequest(template=template, reply_context=reply_context):
                composer = TemplateComposer(
                    self._header_composer(sender), self.forms, self.editor,
                    self.delivery, self.input, self.display,
                )
                return composer.compose_with_template(template, reply_context)
            case RedirectRequest(source=source):
                return self.compose_redirect(source, sender)
            case InteractiveRequest(reply_context=reply_context):
                return self.compose_interactive(reply_context, sender)
            case _:
                raise TypeError(f"Unknown compose request: {request!r}")

    @log_call
    def compose_non_interactive(self, request: NonInteractiveRequest) -> Message:
        """Compose without prompts; every failure aborts before posting.

        Raises:
            MissingRecipientsError: If there are no recipients and no CCs
            AttachmentLoadError: If any attachment cannot be read
            InvalidAddressError: If the sender or a receiver is only a protocol prefix
        """
        # A missing recipient is allowed if CC is present (or vice versa)
        if not request.recipients and not request.ccs:
            raise MissingRecipientsError("Missing recipients in non-interactive mode!")

        if not request.subject:
            self.display.show_warning("Warning: missing subject; hope that's OK")

        message = Message.new(request.sender)
        for recipient in request.recipients:
            message.add_to(recipient)
        for cc in request.ccs:
            message.add_cc(cc)
        message.subject = default_subject(request.subject)

        for path in request.attachments:
            try:
                load_attachment(message, path)
            except AttachmentLoadError as e:
                raise AttachmentLoadError(
                    f"{e.message}\nAborting! (Message not posted)", details=e.details
                ) from e

        body = self.input.read_all()
        if not body.strip():
            self.display.show_warning("Null message body; hope that's ok")
        message.body = default_body(body)

        if request.p2p_only:
            message.set_p2p_only()

        return self._post(message)

    @log_call
    def compose_redirect(self, source: Message, sender: Optional[str] = None) -> Message:
        """Resolve a new header, then wrap the source message unchanged."""
        draft = self._header_composer(sender).compose_header(source)
        message = redirect_message(draft, source)
        self.display.show_message(message, title="New msg")
        return self._post(message)

    def _prompt_attachments(self, message: Message) -> None:
        self.display.show("")
        while True:
            path = self.input.read_line("Attachment [empty when done]: ")
            if not path:
                break
            try:
                load_attachment(message, path)
            except AttachmentLoadError as e:
                logger.warning(e.message)
                self.display.show_error(e.message)

    @log_call
    def compose_interactive(self, reply_context: Optional[Message] = None,
                            sender: Optional[str] = None) -> Message:
        """Prompt for header, body and attachments, then post."""
        message = self._header_composer(sender).compose_header(reply_context)

        seed = build_citation(reply_context) if reply_context is not None else ""
        self.input.read_line("Press ENTER to start composing the message body. ")
        message.body = compose_body(self.editor, self.display, seed)

        self._prompt_attachments(message)

        self.display.show_message(message)
        return self._post(message)
