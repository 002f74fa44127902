"""
Shared test fixtures and configuration for pytest
"""
import io
import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

# Keep config and logs out of the real home directory
os.environ.setdefault("RADIOMAIL_HOME", tempfile.mkdtemp(prefix="radiomail-test-"))

from radiomail.core.models.message import Address, Attachment, Message, TemplateResult  # noqa: E402
from radiomail.features.compose.display import ComposeDisplay  # noqa: E402
from radiomail.features.compose.input import StreamInput  # noqa: E402
from radiomail.utils.console import get_buffer_console  # noqa: E402

MYCALL = "LA5NTA"


@pytest.fixture
def buffer_console():
    """Console writing to a buffer, returned with the buffer"""
    return get_buffer_console(width=200)


@pytest.fixture
def display(buffer_console):
    console, _ = buffer_console
    return ComposeDisplay(console)


@pytest.fixture
def output(buffer_console):
    """Callable returning everything printed so far"""
    _, buffer = buffer_console
    return buffer.getvalue


@pytest.fixture
def make_input(buffer_console):
    """Factory for scripted input sources, one line per answer"""
    console, _ = buffer_console

    def _make(*lines):
        return StreamInput(io.StringIO("".join(f"{line}\n" for line in lines)), console)

    return _make


@pytest.fixture
def reply_message():
    """Received message used as reply context"""
    return Message(
        id="ABCDEF123456",
        date=datetime(2025, 10, 2, 10, 30, tzinfo=timezone.utc),
        from_addr=Address.parse("LA3F"),
        to=[Address.parse("LA5NTA"), Address.parse("LA1B")],
        cc=[Address.parse("SMTP:ops@example.com"), Address.parse("la5nta")],
        subject="Stock report",
        body="Line one\nLine two",
        attachments=[
            Attachment(name="stock.csv", content=b"item,count\nwater,12\n"),
            Attachment(name="map.png", content=b"\x89PNG\r\n\x1a\n\x00\x01"),
        ],
    )


@pytest.fixture
def editor():
    """Text editor returning a fixed body"""
    mock_editor = MagicMock()
    mock_editor.edit_text.return_value = "Hello from the editor\n"
    return mock_editor


@pytest.fixture
def forms():
    """Forms renderer returning a fixed template result"""
    mock_forms = MagicMock()
    mock_forms.render_template.return_value = TemplateResult(
        subject="ICS-213 General Message",
        body="Form body\n",
        attachments=[Attachment(name="form.xml", content=b"<form/>")],
    )
    return mock_forms


@pytest.fixture
def delivery():
    """Delivery sink recording posted messages"""
    return MagicMock()


@pytest.fixture
def store(reply_message):
    """Message store resolving every reference to the reply message"""
    mock_store = MagicMock()
    mock_store.load_message.return_value = reply_message
    return mock_store
