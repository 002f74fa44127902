"""Message domain models"""

import base64
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from radiomail.utils.errors import InvalidAddressError

P2P_ONLY_HEADER = "X-P2POnly"

DATE_FORMAT = "%Y/%m/%d %H:%M"


class Address:
    """Value object for message addresses.

    A bare address is an amateur radio callsign and is stored upper-cased.
    Internet addresses carry the ``SMTP`` protocol prefix.
    """

    def __init__(self, addr: str, proto: str = ""):
        if not addr or not addr.strip():
            raise InvalidAddressError("Address cannot be empty")
        self._addr = addr.strip()
        self._proto = proto.strip().upper()

    @classmethod
    def parse(cls, text: str) -> "Address":
        """Parse free text such as ``LA5NTA``, ``foo@bar.org`` or ``SMTP:foo@bar.org``.

        Raises:
            InvalidAddressError: If no address is left after the protocol prefix
        """
        raw = text
        text = (text or "").strip()

        proto = ""
        if ":" in text:
            proto, text = text.split(":", 1)
        elif "@" in text:
            proto = "SMTP"

        text = text.strip()
        if not text:
            raise InvalidAddressError(f"Invalid address: {raw!r}")

        if not proto and "@" not in text:
            text = text.upper()

        return cls(text, proto)

    @property
    def addr(self) -> str:
        return self._addr

    @property
    def proto(self) -> str:
        return self._proto

    def equal_string(self, text: str) -> bool:
        """Compare against raw address text."""
        try:
            return self == Address.parse(text)
        except InvalidAddressError:
            return False

    def __str__(self) -> str:
        if self._proto:
            return f"{self._proto}:{self._addr}"
        return self._addr

    def __repr__(self) -> str:
        return f"Address({str(self)!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Address):
            return False
        return str(self).casefold() == str(other).casefold()

    def __hash__(self) -> int:
        return hash(str(self).casefold())


@dataclass
class Attachment:
    """Message attachment."""

    name: str
    content: bytes
    media_type: str = ""

    @property
    def size(self) -> int:
        return len(self.content)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "media_type": self.media_type,
            "content": base64.b64encode(self.content).decode("ascii"),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Attachment":
        return cls(
            name=data["name"],
            media_type=data.get("media_type", ""),
            content=base64.b64decode(data.get("content", "")),
        )


def generate_mid() -> str:
    """Generate a unique 12 character message identifier."""
    return uuid.uuid4().hex[:12].upper()


@dataclass
class Message:
    """Message entity under composition."""

    from_addr: Address
    id: str = field(default_factory=generate_mid)
    date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    to: List[Address] = field(default_factory=list)
    cc: List[Address] = field(default_factory=list)
    subject: str = ""
    body: str = ""
    attachments: List[Attachment] = field(default_factory=list)
    flags: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def new(cls, sender: str) -> "Message":
        """Create an empty private message from the given sender."""
        return cls(from_addr=Address.parse(sender))

    def set_from(self, sender: str) -> None:
        self.from_addr = Address.parse(sender)

    def add_to(self, addr: str) -> None:
        """Append a To receiver parsed from text."""
        self.to.append(Address.parse(addr))

    def add_cc(self, addr: str) -> None:
        self.cc.append(Address.parse(addr))

    def add_attachment(self, attachment: Attachment) -> None:
        self.attachments.append(attachment)

    def receivers(self) -> List[Address]:
        """All receivers of the message, To first."""
        return self.to + self.cc

    def is_p2p_only(self) -> bool:
        return self.flags.get(P2P_ONLY_HEADER) == "true"

    def set_p2p_only(self) -> None:
        self.flags[P2P_ONLY_HEADER] = "true"

    def formatted_date(self) -> str:
        return self.date.strftime(DATE_FORMAT)

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        """Create Message from dictionary (JSON message file)."""
        date = data.get("date")
        return cls(
            id=data["id"],
            date=datetime.fromisoformat(date) if date else datetime.now(timezone.utc),
            from_addr=Address.parse(data["from"]),
            to=[Address.parse(addr) for addr in data.get("to", [])],
            cc=[Address.parse(addr) for addr in data.get("cc", [])],
            subject=data.get("subject", ""),
            body=data.get("body", ""),
            attachments=[Attachment.from_dict(a) for a in data.get("attachments", [])],
            flags=dict(data.get("flags", {})),
        )

    def to_dict(self) -> dict:
        """Convert Message to dictionary for JSON storage."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "from": str(self.from_addr),
            "to": [str(addr) for addr in self.to],
            "cc": [str(addr) for addr in self.cc],
            "subject": self.subject,
            "body": self.body,
            "attachments": [a.to_dict() for a in self.attachments],
            "flags": dict(self.flags),
        }


@dataclass
class TemplateResult:
    """Subject, body and attachments rendered from a form template."""

    subject: str
    body: str
    attachments: List[Attachment] = field(default_factory=list)


ReplyContext = Optional[Message]
