"""Main CLI entry point."""

import logging
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from radiomail.core.services import (
    ExternalEditor,
    FileMessageStore,
    OutboxDelivery,
    TextTemplateRenderer,
)
from radiomail.features.compose import ComposeOptions, ComposeOrchestrator, open_input
from radiomail.features.compose.display import ComposeDisplay
from radiomail.utils.config import ConfigManager
from radiomail.utils.console import get_console, get_error_console
from radiomail.utils.errors import ErrorHandler, RadiomailError, format_error_message
from radiomail.utils.logging import get_logger, init_logging

from .cli_parser import setup_argument_parser

logger = get_logger(__name__)


def options_from_args(args) -> ComposeOptions:
    """Convert parsed compose arguments to ComposeOptions."""
    return ComposeOptions(
        sender=args.sender,
        subject=args.subject,
        attachments=list(args.attachments),
        ccs=list(args.ccs),
        p2p_only=args.p2p_only,
        template=args.template,
        in_reply_to=args.in_reply_to,
        redirect=args.redirect,
        recipients=list(args.recipients),
    )


@ErrorHandler.wrap
def compose_session(orchestrator: ComposeOrchestrator, options: ComposeOptions):
    """Run one orchestrated compose; unexpected failures become RadiomailError."""
    return orchestrator.compose(options)


def run_compose(args, config_manager: ConfigManager, console: Console,
                error_console: Console) -> int:
    """Run one compose session.

    Returns:
        Exit code (0 = success or discarded by the operator, 1 = error)
    """
    config = config_manager.config
    mycall = args.mycall or config_manager.get_identity()

    if args.command == "compose-form":
        logger.warning("DEPRECATED: Use `compose --template` instead")

    input_source = open_input(sys.stdin, console)
    try:
        orchestrator = ComposeOrchestrator(
            mycall=mycall,
            input_source=input_source,
            editor=ExternalEditor(config.compose.editor),
            forms=TextTemplateRenderer(config.compose.forms_dir, mycall),
            delivery=OutboxDelivery(config.compose.outbox_dir),
            store=FileMessageStore(config.compose.mailbox_dir),
            display=ComposeDisplay(console),
        )
        compose_session(orchestrator, options_from_args(args))
        return 0

    except RadiomailError as e:
        # Reported on stderr below; the log file keeps the details
        ErrorHandler.handle(e, "compose", log_traceback=False, level=logging.INFO)
        error_console.print(f"[red]ERROR: {escape(format_error_message(e))}[/red]", soft_wrap=True)
        return 1

    finally:
        input_source.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code
    """
    console = get_console()
    error_console = get_error_console()

    try:
        parser = setup_argument_parser()
        args = parser.parse_args(argv)

        try:
            config_manager = ConfigManager()
        except RadiomailError as e:
            logger.info(f"Configuration error: {e.message}")
            error_console.print(f"[red]Configuration error: {escape(format_error_message(e))}[/red]", soft_wrap=True)
            return 1

        log_config = config_manager.config.logging
        init_logging(
            args.log_level or log_config.console_level,
            file_level=log_config.file_level,
            max_file_size=log_config.max_file_size,
            backup_count=log_config.backup_count,
        )

        return run_compose(args, config_manager, console, error_console)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130  # Standard SIGINT exit code


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
