"""Download albums and photos from Google Photos.

By default every album in your library is downloaded into a directory of
its own under the current directory. With --kind photo the photos are
saved flat into the current directory instead, either every photo in the
library or those of the albums given with --album-id.

Names are derived from titles: every run of characters other than letters,
digits, '.', '_' and '-' becomes a single '-'. An album whose directory
already exists is skipped unless --update is given; a photo whose file
already exists is always skipped.

Rules narrow down what is downloaded. A rule is either field=value, which
requires the field to equal the value exactly, or field=~pattern, which
requires the regular expression to match somewhere in the field. Several
rules must all hold; a second rule for the same field replaces the first.
Fields available on albums and photos: id, url, title, summary,
author_name, author_uri, entry_id, user_id; albums also have num_photos,
photos also have album_id, mime_type and created.

Examples:
  get --username me@example.com --find-album 'title=~^Trip'
  get --album-id ABC123 --album-id DEF456 --update
  get --kind photo --option max-results=20 --dry-run
"""

import argparse
import logging
from typing import Callable, List, Optional

from google_photos_downloader.client import PhotosSession
from google_photos_downloader.commands import (
    ManualAction,
    add_common_arguments,
    setup_logging,
    validate_credentials,
)
from google_photos_downloader.config import DownloadSettings, QueryOptions
from google_photos_downloader.downloader import Downloader
from google_photos_downloader.models import GooglePhotosError, RuleFormatError, ValidationError
from google_photos_downloader.rules import compile_rules, matches
from google_photos_downloader.utils.auth import login, prompt_password

logger = logging.getLogger(__name__)

KINDS = ["album", "photo"]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the get command."""
    parser = argparse.ArgumentParser(
        prog="google-photos-downloader get",
        description="Download albums and photos from Google Photos",
    )
    add_common_arguments(parser)
    parser.add_argument(
        "--kind", choices=KINDS, default="album", help="What to download (default: %(default)s)"
    )
    parser.add_argument(
        "--album-id",
        dest="album_ids",
        action="append",
        default=[],
        help="Download this album; may be repeated",
    )
    parser.add_argument(
        "--find-album",
        action="append",
        default=[],
        metavar="RULE",
        help="Only albums matching field=value or field=~pattern; may be repeated",
    )
    parser.add_argument(
        "--find-photo",
        action="append",
        default=[],
        metavar="RULE",
        help="Only photos matching field=value or field=~pattern; may be repeated",
    )
    parser.add_argument(
        "--update", action="store_true", help="Download into album directories that already exist"
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--dry-run", action="store_true", help="Show what would be downloaded")
    output.add_argument("--quiet", action="store_true", help="Only report warnings and errors")
    parser.add_argument("--man", action=ManualAction, manual=__doc__, help="Show the full manual")
    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse and validate command line arguments."""
    parser = build_parser()
    args = parser.parse_args(argv)
    validate_credentials(parser, args)
    try:
        args.album_rules = compile_rules(args.find_album, "album")
        args.photo_rules = compile_rules(args.find_photo, "photo")
    except RuleFormatError as e:
        parser.error(str(e))
    args.parser = parser
    return args


def main(
    argv: Optional[List[str]] = None,
    password_prompt: Callable[[str], str] = prompt_password,
    session_factory: Callable[..., PhotosSession] = login,
) -> int:
    """Run the get command.

    Args:
        argv: Arguments after the command name
        password_prompt: Asks for the password when only a username is given
        session_factory: Logs in and returns a session

    Returns:
        Process exit status
    """
    args = parse_arguments(argv)
    setup_logging()

    password = args.password
    if args.username and password is None:
        try:
            password = password_prompt(args.username)
        except ValidationError as e:
            args.parser.error(str(e))

    options = QueryOptions(user_id=args.user_id, extra=tuple(args.options))
    settings = DownloadSettings(update=args.update, dry_run=args.dry_run, quiet=args.quiet)

    try:
        session = session_factory(args.username, password, args.client_secrets)
        downloader = Downloader(session, options, settings, args.album_rules, args.photo_rules)

        if args.kind == "album":
            if args.album_ids:
                albums = downloader.resolve_albums(args.album_ids)
            else:
                albums = session.query_albums(options)
            summary = downloader.download_albums(albums)
        elif args.album_ids:
            for album in downloader.resolve_albums(args.album_ids):
                if not matches(album, downloader.album_rules):
                    continue
                downloader.download_photos(session.query_photos(options.with_album(album.id)))
            summary = downloader.summary
        else:
            summary = downloader.download_photos(session.query_photos(options))
    except GooglePhotosError as e:
        logger.error("%s", e)
        return 1

    if not args.quiet:
        print(f"\n{'[DRY RUN] ' if args.dry_run else ''}Done: {summary}")
    return 0
