"""
Tests for the command line interface

Tests cover:
- Argument parsing
- Exit codes for fatal and recoverable failures
- End-to-end non-interactive posting
"""
import io
import json
from unittest.mock import patch

import pytest

from radiomail.cli.cli import main, options_from_args
from radiomail.cli.cli_parser import setup_argument_parser
from radiomail.utils.config import ConfigManager
from radiomail.utils.console import reset_console


@pytest.fixture
def configured(tmp_path, monkeypatch):
    """Configuration pointing at temporary directories"""
    ConfigManager.reset_instance()
    reset_console()
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({
        "identity": {"mycall": "LA5NTA"},
        "compose": {
            "outbox_dir": str(tmp_path / "out"),
            "mailbox_dir": str(tmp_path / "mailbox"),
            "forms_dir": str(tmp_path / "forms"),
        },
    }))
    ConfigManager(config_path)
    yield tmp_path
    ConfigManager.reset_instance()
    reset_console()


def set_stdin(monkeypatch, text):
    monkeypatch.setattr("sys.stdin", io.StringIO(text))


def outbox_messages(tmp_path):
    out = tmp_path / "out"
    if not out.exists():
        return []
    return [json.loads(path.read_text()) for path in sorted(out.glob("*.json"))]


class TestArgumentParsing:
    """Tests for the compose argument parser"""

    def test_compose_options(self):
        """Test every compose option maps to ComposeOptions"""
        args = setup_argument_parser().parse_args([
            "compose", "-r", "LA5NTA-1", "-s", "Hi", "-a", "a.txt", "-a", "b.txt",
            "-c", "LA1B", "--cc", "LA2C", "--p2p-only", "--template", "ICS213",
            "--in-reply-to", "MID1", "LA3F", "LA4D",
        ])

        options = options_from_args(args)

        assert options.sender == "LA5NTA-1"
        assert options.subject == "Hi"
        assert options.attachments == ["a.txt", "b.txt"]
        assert options.ccs == ["LA1B", "LA2C"]
        assert options.p2p_only is True
        assert options.template == "ICS213"
        assert options.in_reply_to == "MID1"
        assert options.redirect == ""
        assert options.recipients == ["LA3F", "LA4D"]

    def test_defaults(self):
        """Test an empty compose is interactive"""
        options = options_from_args(setup_argument_parser().parse_args(["compose"]))

        assert options.sender is None
        assert options.recipients == []
        assert options.attachments == []


class TestComposeCommand:
    """Tests for running compose through main()"""

    def test_non_interactive_posts(self, configured, monkeypatch):
        """Test batch compose writes the message to the outbox"""
        set_stdin(monkeypatch, "73\n")

        assert main(["compose", "-s", "Hello", "-c", "ops@example.com", "LA1B"]) == 0

        [message] = outbox_messages(configured)
        assert message["from"] == "LA5NTA"
        assert message["to"] == ["LA1B"]
        assert message["cc"] == ["SMTP:ops@example.com"]
        assert message["body"] == "73\n"

    def test_mycall_override(self, configured, monkeypatch):
        """Test --mycall replaces the configured identity"""
        set_stdin(monkeypatch, "x")

        assert main(["--mycall", "LA9X", "compose", "LA1B"]) == 0

        [message] = outbox_messages(configured)
        assert message["from"] == "LA9X"

    def test_missing_recipients_exit_code(self, configured, monkeypatch, capsys):
        """Test missing recipients exit non-zero with a diagnostic"""
        set_stdin(monkeypatch, "body")

        assert main(["compose", "-s", "Hello"]) == 1

        assert "Missing recipients in non-interactive mode!" in capsys.readouterr().err
        assert outbox_messages(configured) == []

    def test_conflicting_references(self, configured, monkeypatch, capsys):
        """Test in-reply-to with redirect is fatal"""
        set_stdin(monkeypatch, "")

        assert main(["compose", "--in-reply-to", "A", "--redirect", "B"]) == 1

        assert "Only use one of the arguments" in capsys.readouterr().err

    def test_unknown_reference(self, configured, monkeypatch, capsys):
        """Test a message that cannot be loaded is fatal"""
        set_stdin(monkeypatch, "")

        assert main(["compose", "--in-reply-to", "NOPE"]) == 1

        assert "Unable to find message 'NOPE'" in capsys.readouterr().err

    def test_attachment_failure(self, configured, monkeypatch, capsys):
        """Test unreadable attachments abort batch compose"""
        set_stdin(monkeypatch, "body")

        assert main(["compose", "-a", str(configured / "missing.bin"), "LA1B"]) == 1

        assert "Aborting! (Message not posted)" in capsys.readouterr().err
        assert outbox_messages(configured) == []

    def test_sender_without_address(self, configured, monkeypatch, capsys):
        """Test a From that is only a protocol prefix exits with a diagnostic"""
        set_stdin(monkeypatch, "body")

        assert main(["compose", "--from", "LA5NTA:", "-s", "x", "LA1B"]) == 1

        assert "Invalid address: 'LA5NTA:'" in capsys.readouterr().err
        assert outbox_messages(configured) == []

    def test_unexpected_failure_exit_code(self, configured, monkeypatch, capsys):
        """Test failures outside the error hierarchy still exit with status 1"""
        set_stdin(monkeypatch, "body")

        with patch("radiomail.cli.cli.ComposeOrchestrator.compose", side_effect=RuntimeError("boom")):
            assert main(["compose", "-s", "x", "LA1B"]) == 1

        assert "ERROR: Unexpected error: boom" in capsys.readouterr().err

    def test_zero_recipients_reported_once(self, configured, monkeypatch, capsys):
        """Test an interactive session without receivers reports the error once"""
        set_stdin(monkeypatch, "\n\n\n")

        assert main(["compose"]) == 1

        captured = capsys.readouterr()
        assert (captured.out + captured.err).count("at least one recipient") == 1
        assert "ERROR: Message must have at least one recipient" in captured.err

    def test_template_failure_is_not_fatal(self, configured, monkeypatch):
        """Test the deprecated alias and a missing template return cleanly"""
        set_stdin(monkeypatch, "\nLA1B\n\n\nHint\n")

        assert main(["compose-form", "--template", "nope"]) == 0

        assert outbox_messages(configured) == []

    def test_interactive_compose(self, configured, monkeypatch):
        """Test a scripted interactive session"""
        set_stdin(monkeypatch, "\nLA1B\n\ny\nQSL\n\n\n")

        with patch("radiomail.cli.cli.ExternalEditor") as mock_editor_cls:
            mock_editor_cls.return_value.edit_text.return_value = "Thanks for the QSO\n"
            assert main(["compose"]) == 0

        [message] = outbox_messages(configured)
        assert message["subject"] == "QSL"
        assert message["body"] == "Thanks for the QSO\n"
        assert message["flags"] == {"X-P2POnly": "true"}
