"""Line input sources for composition prompts."""

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.styles import Style
from rich.console import Console

from radiomail.utils.console import get_console, print_plain
from radiomail.utils.logging import get_logger

logger = get_logger(__name__)


class InputSource(ABC):
    """Handle for reading operator input, one per compose session."""

    @abstractmethod
    def read_line(self, prompt: str = "") -> str:
        """Show ``prompt`` and return the next line, stripped.

        End of input reads as an empty line.
        """
        pass

    @abstractmethod
    def read_all(self) -> str:
        """Read the rest of the input verbatim (message body text)."""
        pass

    def close(self) -> None:
        """Release the underlying input."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        self.close()
        return False


class StreamInput(InputSource):
    """Read prompts from a text stream (pipes, scripts and tests)."""

    def __init__(self, stream: Optional[TextIO] = None, console: Optional[Console] = None):
        self.stream = stream if stream is not None else sys.stdin
        self.console = console or get_console()

    def read_line(self, prompt: str = "") -> str:
        if prompt:
            print_plain(prompt, self.console, end="")
        line = self.stream.readline()
        return line.strip()

    def read_all(self) -> str:
        return self.stream.read()


class PromptInput(InputSource):
    """Read prompts from the terminal with prompt-toolkit."""

    def __init__(self):
        self.session = PromptSession()
        self.style = Style.from_dict({
            'prompt': 'cyan bold',
        })

    def read_line(self, prompt: str = "") -> str:
        try:
            result = self.session.prompt([('class:prompt', prompt)], style=self.style)
        except EOFError:
            logger.debug("End of input at prompt")
            return ""
        return result.strip()

    def read_all(self) -> str:
        # Body text is piped or typed until end of file, not prompted
        return sys.stdin.read()


def open_input(stream: Optional[TextIO] = None, console: Optional[Console] = None) -> InputSource:
    """Create the input source for a compose session.

    Terminals get a prompt-toolkit session; anything else is read as a stream.
    """
    stream = stream if stream is not None else sys.stdin
    if stream is sys.stdin and stream.isatty() and sys.stdout.isatty():
        return PromptInput()
    return StreamInput(stream, console)
