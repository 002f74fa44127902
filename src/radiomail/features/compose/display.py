"""Compose display coordinator."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from radiomail.core.models.message import Message
from radiomail.utils.console import (
    get_console,
    print_error,
    print_plain,
    print_success,
    print_warning,
)

RULE = "=" * 64


def format_addresses(addresses) -> str:
    return "[" + " ".join(str(addr) for addr in addresses) + "]"


class ComposeDisplay:
    """Coordinates display for the compose feature."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    def show(self, text: str, end: str = "\n") -> None:
        """Print plain text (prompts, echoes)."""
        print_plain(text, self.console, end=end)

    def show_body(self, body: str) -> None:
        self.show(f"Body: {body}")

    def show_template_preview(self, message: Message, body: str) -> None:
        """Display headers and rendered form body before confirmation."""
        self.show(RULE)
        self.show(f"To: {format_addresses(message.to)}")
        self.show(f"Cc: {format_addresses(message.cc)}")
        self.show(f"From: {message.from_addr}")
        self.show(f"Subject: {message.subject}")
        self.show(RULE)
        self.show(body)
        self.show(RULE)

    def show_message(self, message: Message, title: str = "Message") -> None:
        """Show a composed message in panels."""
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(style="bold", width=10)
        table.add_column()

        table.add_row("MID:", message.id)
        table.add_row("From:", str(message.from_addr))
        table.add_row("To:", ", ".join(str(addr) for addr in message.to))
        if message.cc:
            table.add_row("Cc:", ", ".join(str(addr) for addr in message.cc))
        table.add_row("Subject:", message.subject)
        if message.is_p2p_only():
            table.add_row("P2P only:", "yes")
        for attachment in message.attachments:
            table.add_row("File:", f"{attachment.name} ({attachment.size} bytes)")

        self.console.print(Panel(table, title=f"[bold]{escape(title)}[/bold]", border_style="cyan", padding=(0, 1)))
        self.console.print(Panel(Text(message.body), border_style="cyan dim", padding=(0, 1)))

    def show_posted(self, message: Message) -> None:
        print_success(f"Message {message.id} posted to outbox", self.console)

    def show_discarded(self) -> None:
        print_warning("Message discarded", self.console)

    def show_warning(self, message: str) -> None:
        print_warning(message, self.console)

    def show_error(self, message: str) -> None:
        print_error(message, self.console)

    def show_confirm_help(self) -> None:
        self.show("y = post message to outbox")
        self.show("e = edit message body")
        self.show("q = quit, discarding the message")
