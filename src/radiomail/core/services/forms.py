"""Plain text form templates."""

from datetime import datetime, timezone
from pathlib import Path
from string import Template
from typing import Optional

from radiomail.core.attachments import read_attachment
from radiomail.core.models.message import Message, TemplateResult
from radiomail.utils.errors import AttachmentLoadError, TemplateError
from radiomail.utils.logging import get_logger

from .base import FormsRenderer

logger = get_logger(__name__)

TEMPLATE_SUFFIX = ".txt"


class TextTemplateRenderer(FormsRenderer):
    """Render ``${var}`` templates from the forms directory.

    A template file may start with header lines followed by a blank line:

        Subject: Position report ${date}
        Attach: ~/reports/grid.png

        Body text for ${mycall}...

    ``Attach:`` paths are relative to the template's directory. Without a
    ``Subject:`` header the subject hint is kept.
    """

    def __init__(self, forms_dir: str | Path, mycall: str):
        self.forms_dir = Path(forms_dir).expanduser()
        self.mycall = mycall

    def _locate(self, name: str) -> Path:
        candidates = [Path(name).expanduser(), self.forms_dir / name]
        if not name.endswith(TEMPLATE_SUFFIX):
            candidates.append(self.forms_dir / f"{name}{TEMPLATE_SUFFIX}")

        for path in candidates:
            if path.is_file():
                return path

        raise TemplateError(f"Template not found: {name}", details={"template": name})

    def _variables(self, subject_hint: str, reply_context: Optional[Message]) -> dict:
        variables = {
            "subject": subject_hint,
            "mycall": self.mycall,
            "date": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
            "reply_from": "",
            "reply_subject": "",
            "reply_id": "",
        }
        if reply_context is not None:
            variables.update(
                reply_from=reply_context.from_addr.addr,
                reply_subject=reply_context.subject,
                reply_id=reply_context.id,
            )
        return variables

    @staticmethod
    def _split_headers(text: str) -> tuple[list[tuple[str, str]], str]:
        headers = []
        lines = text.splitlines(keepends=True)

        for index, line in enumerate(lines):
            stripped = line.strip()
            if not stripped:
                return headers, "".join(lines[index + 1:])

            key, sep, value = stripped.partition(":")
            if not sep or key.lower() not in ("subject", "attach"):
                break
            headers.append((key.lower(), value.strip()))
        else:
            # Headers only, no body
            return headers, ""

        # No header block
        return [], text

    def render_template(
        self, name: str, subject_hint: str, reply_context: Optional[Message] = None
    ) -> TemplateResult:
        path = self._locate(name)

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateError(f"Failed to read template {path}: {e}") from e

        rendered = Template(raw).safe_substitute(self._variables(subject_hint, reply_context))
        headers, body = self._split_headers(rendered)

        result = TemplateResult(subject=subject_hint, body=body)
        for key, value in headers:
            if key == "subject":
                result.subject = value
                continue

            attach_path = Path(value).expanduser()
            if not attach_path.is_absolute():
                attach_path = path.parent / attach_path
            try:
                result.attachments.append(read_attachment(attach_path))
            except AttachmentLoadError as e:
                raise TemplateError(f"Template {name}: {e.message}") from e

        logger.debug(f"Rendered template {path} ({len(result.attachments)} attachments)")
        return result
