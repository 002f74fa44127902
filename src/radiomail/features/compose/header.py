"""Interactive header composition (From/To/Cc/Subject)."""

from typing import List, Optional

from radiomail.core.models.message import Address, Message
from radiomail.core.validation import AddressResolver
from radiomail.utils.errors import MissingRecipientsError
from radiomail.utils.logging import get_logger, log_call

from .composer import default_subject, reply_subject
from .display import ComposeDisplay, format_addresses
from .input import InputSource

logger = get_logger(__name__)

REMOVE_CC = "!"


class HeaderComposer:
    """Prompt the operator for the header of a new message.

    When a reply context is given it supplies the defaults: the sender
    becomes the To default, the other receivers become Cc candidates and the
    subject is derived without asking.
    """

    def __init__(self, mycall: str, input_source: InputSource,
                 display: ComposeDisplay, sender: Optional[str] = None):
        """Initialise the composer.

        Args:
            mycall: Own station identity, excluded from Cc candidates
            input_source: Session input handle
            display: Output coordinator
            sender: Default for the From prompt (defaults to mycall)
        """
        self.mycall = mycall
        self.sender = sender or mycall
        self.input = input_source
        self.display = display

    def cc_candidates(self, reply_context: Optional[Message]) -> List[Address]:
        """Receivers of the replied message other than ourselves."""
        if reply_context is None:
            return []
        receivers = AddressResolver.dedupe(reply_context.to + reply_context.cc)
        return AddressResolver.exclude(receivers, self.mycall)

    def _prompt_from(self, message: Message) -> None:
        sender = self.input.read_line(f"From [{self.sender}]: ")
        message.set_from(sender or self.sender)

    def _prompt_to(self, message: Message, reply_context: Optional[Message]) -> None:
        prompt = "To"
        if reply_context is not None:
            prompt += f" [{reply_context.from_addr}]"
        to = self.input.read_line(f"{prompt}: ")

        if not to and reply_context is not None:
            message.to.append(reply_context.from_addr)
        else:
            message.to.extend(AddressResolver.parse_many(to))

    def _prompt_cc(self, message: Message, reply_context: Optional[Message]) -> None:
        candidates = self.cc_candidates(reply_context)

        prompt = f"Cc ({REMOVE_CC} to remove cc's)"
        if reply_context is not None:
            prompt += f" {format_addresses(candidates)}"
        cc = self.input.read_line(f"{prompt}: ")

        if cc == REMOVE_CC:
            return
        if not cc and reply_context is not None:
            message.cc.extend(candidates)
        else:
            message.cc.extend(AddressResolver.parse_many(cc))

    def _apply_receiver_policy(self, message: Message) -> None:
        count = len(message.receivers())

        if count == 0:
            raise MissingRecipientsError()

        if count == 1:
            answer = self.input.read_line("P2P only [y/N]: ")
            if answer.lower() == "y":
                message.set_p2p_only()

    def _prompt_subject(self, message: Message, reply_context: Optional[Message]) -> None:
        if reply_context is not None:
            subject = reply_subject(reply_context.subject)
            self.display.show(f"Subject: {subject}")
        else:
            subject = self.input.read_line("Subject: ")
        message.subject = default_subject(subject)

    @log_call
    def compose_header(self, reply_context: Optional[Message] = None) -> Message:
        """Build a message header from operator input.

        Args:
            reply_context: Message being replied to or redirected

        Returns:
            Message with From, To, Cc, Subject and flags set

        Raises:
            MissingRecipientsError: If neither To nor Cc resolved to an address
            InvalidAddressError: If an entered address cannot be parsed
        """
        message = Message.new(self.mycall)

        self._prompt_from(message)
        self._prompt_to(message, reply_context)
        self._prompt_cc(message, reply_context)
        self._apply_receiver_policy(message)
        self._prompt_subject(message, reply_context)

        logger.debug(
            f"Header composed: {len(message.to)} to, {len(message.cc)} cc"
        )
        return message
