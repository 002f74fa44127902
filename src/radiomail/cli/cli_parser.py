"""Argument parser configuration for the radiomail CLI"""

import argparse

from radiomail import __version__


## Argument Adding Utilities

def add_compose_arguments(parser: argparse.ArgumentParser) -> None:
    """Add message composition arguments to the parser."""

    parser.add_argument(
        "-r", "--from",
        dest="sender",
        default=None,
        help="Sender address (default: your callsign)"
    )
    parser.add_argument(
        "-s", "--subject",
        default="",
        help="Message subject"
    )
    parser.add_argument(
        "-a", "--attachment",
        dest="attachments",
        action="append",
        default=[],
        metavar="PATH",
        help="Attach a file (repeatable)"
    )
    parser.add_argument(
        "-c", "--cc",
        dest="ccs",
        action="append",
        default=[],
        metavar="ADDRESS",
        help="Carbon copy address (repeatable)"
    )
    parser.add_argument(
        "--p2p-only",
        action="store_true",
        help="Only send the message over peer-to-peer connections"
    )
    parser.add_argument(
        "--template",
        default="",
        help="Compose the message from a form template"
    )

    # in-reply-to and redirect exclude each other; checked when composing
    parser.add_argument(
        "--in-reply-to",
        default="",
        metavar="MESSAGE",
        help="Reply to a message (path or MID)"
    )
    parser.add_argument(
        "--redirect",
        default="",
        metavar="MESSAGE",
        help="Forward a message without change (path or MID)"
    )

    parser.add_argument(
        "recipients",
        nargs="*",
        metavar="ADDRESS",
        help="Recipient addresses"
    )


## Command Setup Functions

def setup_compose_commands(subparsers) -> None:
    """Setup compose and the deprecated compose-form alias."""

    compose_parser = subparsers.add_parser(
        "compose",
        help="Compose a new message",
        description=(
            "Compose a message interactively, or non-interactively when any of "
            "subject, attachments, CCs or recipients is given (body read from stdin)"
        )
    )
    add_compose_arguments(compose_parser)

    form_parser = subparsers.add_parser(
        "compose-form",
        help="Compose a message from a template (deprecated)",
        description="DEPRECATED: Use `compose --template` instead"
    )
    add_compose_arguments(form_parser)


def setup_argument_parser() -> argparse.ArgumentParser:
    """Setup the main argument parser."""

    parser = argparse.ArgumentParser(
        prog="radiomail",
        description="Compose messages for amateur radio email"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--mycall",
        default=None,
        help="Your callsign (overrides the configured identity)"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="Command to run"
    )
    setup_compose_commands(subparsers)

    return parser
