"""Subcommands routed to by the dispatcher."""

import argparse
import logging
from typing import Tuple

from google_photos_downloader.config import DEFAULT_CLIENT_SECRETS


class ManualAction(argparse.Action):
    """Print the command's manual and exit, like --help."""

    def __init__(self, option_strings, manual: str, dest=argparse.SUPPRESS, help=None):
        super().__init__(option_strings, dest=dest, default=argparse.SUPPRESS, nargs=0, help=help)
        self.manual = manual

    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_help()
        print()
        print(self.manual.strip())
        parser.exit()


def parse_option(value: str) -> Tuple[str, str]:
    """Parse a --option key=value argument."""
    key, sep, option_value = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got '{value}'")
    return key, option_value


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the credential and query arguments shared by all commands."""
    parser.add_argument("--username", help="Google account name")
    parser.add_argument(
        "--password", help="Account password (prompted for when --username is given alone)"
    )
    parser.add_argument("--user-id", help="Whose albums to query ('default' is your own)")
    parser.add_argument(
        "--option",
        dest="options",
        type=parse_option,
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra query option (max-results, page-size); may be repeated",
    )
    parser.add_argument(
        "--client-secrets",
        default=DEFAULT_CLIENT_SECRETS,
        help="OAuth client secrets file (default: %(default)s)",
    )


def validate_credentials(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Reject a password given without a username."""
    if args.password is not None and not args.username:
        parser.error("--password requires --username")


def setup_logging() -> None:
    """Send warnings and errors to stderr."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
