"""List albums, photos, tags or comments in Google Photos.

Entries are printed as a table. Photos, tags and comments can be scoped to
one album with --album-id; tags are the content categories the library can
be searched by, comments are photo captions.

--find takes the same rules as get: field=value for an exact match,
field=~pattern for a regular expression search. All rules must hold.
"""

import argparse
import logging
from typing import Callable, List, Optional

from tabulate import tabulate

from google_photos_downloader.client import PhotosSession
from google_photos_downloader.commands import (
    ManualAction,
    add_common_arguments,
    setup_logging,
    validate_credentials,
)
from google_photos_downloader.config import QueryOptions
from google_photos_downloader.models import Entry, GooglePhotosError, RuleFormatError, ValidationError
from google_photos_downloader.rules import compile_rules, matches
from google_photos_downloader.utils.auth import login, prompt_password

logger = logging.getLogger(__name__)

KINDS = ["album", "photo", "tag", "comment"]

COLUMNS = {
    "album": ["id", "title", "num_photos", "url"],
    "photo": ["id", "title", "mime_type", "created", "url"],
    "tag": ["id", "title"],
    "comment": ["photo_id", "title", "author_name", "summary"],
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the list command."""
    parser = argparse.ArgumentParser(
        prog="google-photos-downloader list",
        description="List albums, photos, tags or comments in Google Photos",
    )
    add_common_arguments(parser)
    parser.add_argument(
        "--kind", choices=KINDS, default="album", help="What to list (default: %(default)s)"
    )
    parser.add_argument("--album-id", help="Only list entries of this album")
    parser.add_argument(
        "--find",
        action="append",
        default=[],
        metavar="RULE",
        help="Only entries matching field=value or field=~pattern; may be repeated",
    )
    parser.add_argument("--man", action=ManualAction, manual=__doc__, help="Show the full manual")
    return parser


def format_entries(entries: List[Entry], kind: str) -> str:
    """Render entries as a table."""
    headers = COLUMNS[kind]
    rows = [[entry.field_value(column) or "" for column in headers] for entry in entries]
    return tabulate(rows, headers=headers, tablefmt="psql")


def main(
    argv: Optional[List[str]] = None,
    password_prompt: Callable[[str], str] = prompt_password,
    session_factory: Callable[..., PhotosSession] = login,
) -> int:
    """Run the list command and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    validate_credentials(parser, args)
    try:
        rules = compile_rules(args.find, args.kind)
    except RuleFormatError as e:
        parser.error(str(e))

    setup_logging()

    password = args.password
    if args.username and password is None:
        try:
            password = password_prompt(args.username)
        except ValidationError as e:
            parser.error(str(e))

    options = QueryOptions(user_id=args.user_id, album_id=args.album_id, extra=tuple(args.options))

    try:
        session = session_factory(args.username, password, args.client_secrets)
        entries = [entry for entry in session.query(args.kind, options) if matches(entry, rules)]
    except GooglePhotosError as e:
        logger.error("%s", e)
        return 1

    if entries:
        print(format_entries(entries, args.kind))
        print(f"\nTotal {args.kind}s found: {len(entries)}")
    else:
        print(f"No {args.kind}s found")
    return 0
