"""Message composition feature module.

Composes outgoing messages in four modes:
- interactive (prompts, editor body, attachment loop)
- non-interactive (options plus a body read from standard input)
- template (form rendering with a confirm/edit/discard loop)
- redirect (forward an existing message without change)

Public API:
    ComposeOrchestrator - Runs one compose session
    ComposeOptions - Raw options from the command line
    build_request() - Validates options and selects the mode
"""

from .workflow import (
    ComposeOptions,
    ComposeOrchestrator,
    InteractiveRequest,
    NonInteractiveRequest,
    RedirectRequest,
    TemplateRequest,
    build_request,
)
from .header import HeaderComposer
from .input import InputSource, PromptInput, StreamInput, open_input

__all__ = [
    "ComposeOptions",
    "ComposeOrchestrator",
    "InteractiveRequest",
    "NonInteractiveRequest",
    "RedirectRequest",
    "TemplateRequest",
    "build_request",
    "HeaderComposer",
    "InputSource",
    "PromptInput",
    "StreamInput",
    "open_input",
]
