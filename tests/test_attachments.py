"""
Tests for loading attachments from disk
"""
import pytest

from radiomail.core.attachments import load_attachment, read_attachment
from radiomail.core.models.message import Message
from radiomail.utils.errors import AttachmentLoadError, FileSystemError


class TestLoadAttachment:
    """Tests for load_attachment"""

    def test_appends_attachment(self, tmp_path):
        """Test name is the last path segment and content is raw bytes"""
        path = tmp_path / "reports" / "grid.bin"
        path.parent.mkdir()
        path.write_bytes(b"\x00\x01binary")
        message = Message.new("LA5NTA")

        attachment = load_attachment(message, str(path))

        assert message.attachments == [attachment]
        assert attachment.name == "grid.bin"
        assert attachment.content == b"\x00\x01binary"
        assert attachment.media_type == ""

    def test_missing_file_leaves_message_untouched(self, tmp_path):
        """Test failure raises and nothing is appended"""
        message = Message.new("LA5NTA")

        with pytest.raises(AttachmentLoadError) as exc_info:
            load_attachment(message, str(tmp_path / "missing.txt"))

        assert isinstance(exc_info.value, FileSystemError)
        assert isinstance(exc_info.value.__cause__, OSError)
        assert message.attachments == []

    def test_directory_is_not_a_file(self, tmp_path):
        """Test directories cannot be attached"""
        with pytest.raises(AttachmentLoadError):
            read_attachment(tmp_path)
