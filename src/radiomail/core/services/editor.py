"""External text editor integration."""

import os
import shlex
import subprocess
import tempfile
from pathlib import Path

from radiomail.utils.errors import EditorError
from radiomail.utils.logging import get_logger

from .base import TextEditor

logger = get_logger(__name__)

DEFAULT_EDITOR = "vi"


def resolve_editor_command(configured: str = "") -> list[str]:
    """Pick the editor command: configuration, $VISUAL, $EDITOR, then vi."""
    command = configured or os.environ.get("VISUAL") or os.environ.get("EDITOR") or DEFAULT_EDITOR
    return shlex.split(command)


class ExternalEditor(TextEditor):
    """Edit text in the operator's editor through a temporary file."""

    def __init__(self, command: str = ""):
        self.command = resolve_editor_command(command)

    def _run(self, path: Path) -> None:
        logger.debug(f"Launching editor: {' '.join(self.command)}")
        try:
            subprocess.run([*self.command, str(path)], check=True)
        except FileNotFoundError as e:
            raise EditorError(f"Editor not found: {self.command[0]}") from e
        except subprocess.CalledProcessError as e:
            raise EditorError(f"Editor exited with status {e.returncode}") from e

    def edit_text(self, seed: str) -> str:
        fd, name = tempfile.mkstemp(prefix="radiomail-", suffix=".txt")
        path = Path(name)

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(seed)
            self._run(path)
            return path.read_text(encoding="utf-8")

        except OSError as e:
            raise EditorError(f"Failed to edit message body: {e}") from e
        finally:
            path.unlink(missing_ok=True)
