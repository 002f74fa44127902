"""
Tests for interactive header composition

Tests cover:
- From/To/Cc defaults from a reply context
- Cc removal and replacement
- Receiver count policy (P2P prompt, hard stop on zero)
- Subject derivation and placeholder
"""
import pytest

from radiomail.core.models.message import Address
from radiomail.features.compose.composer import NO_SUBJECT, reply_subject
from radiomail.features.compose.header import HeaderComposer
from radiomail.utils.errors import InvalidAddressError, MissingRecipientsError

from conftest import MYCALL


def make_composer(make_input, display, *lines, sender=None):
    return HeaderComposer(MYCALL, make_input(*lines), display, sender=sender)


class TestReplyDefaults:
    """Tests for headers seeded by a reply context"""

    def test_empty_input_accepts_all_defaults(self, make_input, display, reply_message):
        """Test empty answers give sender, candidates and derived subject"""
        composer = make_composer(make_input, display, "", "", "")

        message = composer.compose_header(reply_message)

        assert str(message.from_addr) == MYCALL
        assert message.to == [reply_message.from_addr]
        assert [str(a) for a in message.cc] == ["LA1B", "SMTP:ops@example.com"]
        assert message.subject == "Re: Stock report"
        assert not message.is_p2p_only()

    def test_cc_candidates_exclude_own_identity(self, make_input, display, reply_message):
        """Test own callsign never appears among Cc candidates"""
        composer = make_composer(make_input, display)

        candidates = composer.cc_candidates(reply_message)

        assert Address.parse(MYCALL) not in candidates
        assert all(not addr.equal_string(MYCALL.lower()) for addr in candidates)

    def test_bang_removes_all_cc(self, make_input, display, reply_message):
        """Test '!' suppresses every Cc candidate"""
        composer = make_composer(make_input, display, "", "", "!", "n")

        message = composer.compose_header(reply_message)

        assert message.cc == []
        assert len(message.receivers()) == 1

    def test_cc_input_replaces_candidates(self, make_input, display, reply_message):
        """Test explicit Cc input replaces the candidate set"""
        composer = make_composer(make_input, display, "", "", "la9x")

        message = composer.compose_header(reply_message)

        assert [str(a) for a in message.cc] == ["LA9X"]

    def test_to_input_overrides_reply_sender(self, make_input, display, reply_message):
        """Test typed To addresses are used instead of the reply sender"""
        composer = make_composer(make_input, display, "", "LA1B LA2C", "!")

        message = composer.compose_header(reply_message)

        assert [str(a) for a in message.to] == ["LA1B", "LA2C"]

    def test_prompts_show_defaults(self, make_input, display, output, reply_message):
        """Test reply defaults are shown in the prompts"""
        composer = make_composer(make_input, display, "", "", "")

        composer.compose_header(reply_message)

        text = output()
        assert f"From [{MYCALL}]:" in text
        assert "To [LA3F]:" in text
        assert "Cc (! to remove cc's) [LA1B SMTP:ops@example.com]:" in text
        assert "Subject: Re: Stock report" in text


class TestNewMessageHeader:
    """Tests for headers without a reply context"""

    def test_addresses_and_subject_from_input(self, make_input, display):
        """Test To/Cc are parsed from input and subject is prompted"""
        composer = make_composer(make_input, display, "", "LA1B, LA3F", "ops@example.com", "Hello")

        message = composer.compose_header()

        assert [str(a) for a in message.to] == ["LA1B", "LA3F"]
        assert [str(a) for a in message.cc] == ["SMTP:ops@example.com"]
        assert message.subject == "Hello"

    def test_from_override(self, make_input, display):
        """Test a typed From replaces the default"""
        composer = make_composer(make_input, display, "la5nta-1", "LA1B", "", "", "Hi")

        message = composer.compose_header()

        assert str(message.from_addr) == "LA5NTA-1"

    def test_sender_default(self, make_input, display, output):
        """Test the sender option becomes the From default"""
        composer = make_composer(make_input, display, "", "LA1B", "", "", "Hi", sender="LA5NTA-2")

        message = composer.compose_header()

        assert str(message.from_addr) == "LA5NTA-2"
        assert "From [LA5NTA-2]:" in output()

    def test_from_without_address_rejected(self, make_input, display):
        """Test a From answer that is only a protocol prefix is invalid"""
        composer = make_composer(make_input, display, "SMTP:", "LA1B", "", "", "Hi")

        with pytest.raises(InvalidAddressError):
            composer.compose_header()

    def test_empty_subject_gets_placeholder(self, make_input, display):
        """Test empty subject is replaced"""
        composer = make_composer(make_input, display, "", "LA1B", "", "", "")

        message = composer.compose_header()

        assert message.subject == NO_SUBJECT


class TestReceiverPolicy:
    """Tests for the receiver count policy"""

    @pytest.mark.parametrize("answer", ["y", "Y"])
    def test_single_receiver_p2p_yes(self, make_input, display, answer):
        """Test answering yes sets the P2P only flag"""
        composer = make_composer(make_input, display, "", "LA1B", "", answer, "Hi")

        message = composer.compose_header()

        assert message.is_p2p_only()

    def test_single_receiver_p2p_default_no(self, make_input, display):
        """Test the P2P flag is not set by default"""
        composer = make_composer(make_input, display, "", "LA1B", "", "", "Hi")

        message = composer.compose_header()

        assert message.flags == {}

    def test_multiple_receivers_skip_p2p_prompt(self, make_input, display, output):
        """Test the P2P question is only asked for one receiver"""
        composer = make_composer(make_input, display, "", "LA1B", "LA3F", "Hi")

        message = composer.compose_header()

        assert "P2P only" not in output()
        assert message.subject == "Hi"

    def test_zero_receivers_is_hard_stop(self, make_input, display, output):
        """Test no receivers aborts before the subject prompt"""
        composer = make_composer(make_input, display, "", "", "")

        with pytest.raises(MissingRecipientsError) as exc_info:
            composer.compose_header()

        assert exc_info.value.message == "Message must have at least one recipient"
        assert "at least one recipient" not in output()
        assert "Subject:" not in output()


class TestReplySubject:
    """Tests for reply subject derivation"""

    @pytest.mark.parametrize("subject,expected", [
        ("Stock report", "Re: Stock report"),
        ("Re: Stock report", "Re: Stock report"),
        ("Re:Stock report", "Re: Stock report"),
        ("  Re:   Stock report  ", "Re: Stock report"),
        ("", "Re:"),
    ])
    def test_reply_subject(self, subject, expected):
        """Test a single Re: prefix is produced"""
        assert reply_subject(subject) == expected

    @pytest.mark.parametrize("subject", ["Stock report", "Re: x", "Re:", "", "re: lower"])
    def test_reply_subject_idempotent(self, subject):
        """Test applying the rewrite twice changes nothing"""
        assert reply_subject(reply_subject(subject)) == reply_subject(subject)
