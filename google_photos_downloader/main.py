"""Main module for Google Photos Downloader.

Routes natural verb/noun pairs onto the commands::

    google-photos-downloader get [album|photo] [options]
    google-photos-downloader list [albums|photos|tags|comments] [options]
    google-photos-downloader help [get|list]
"""

import sys
from typing import Callable, Dict, List, Optional, Tuple

from google_photos_downloader.commands import get, list as list_command

COMMANDS: Dict[str, Callable[[List[str]], int]] = {
    "get": get.main,
    "list": list_command.main,
}

NOUNS = {
    "album": "album",
    "albums": "album",
    "photo": "photo",
    "photos": "photo",
    "tag": "tag",
    "tags": "tag",
    "comment": "comment",
    "comments": "comment",
}

DEFAULT_NOUN = "album"

USAGE = """usage: google-photos-downloader <command> [noun] [options]

commands:
  get [album|photo]                   download albums or photos
  list [album|photo|tag|comment]      list entries as a table
  help [get|list]                     show help for a command

Nouns may be singular or plural and default to album."""


def route(argv: List[str]) -> Tuple[Optional[str], List[str]]:
    """Map a verb/noun command line onto a command and its arguments.

    Returns:
        The command name, or None for dispatcher help, and the arguments to
        forward to it
    """
    if not argv or argv[0] in ("help", "-h", "--help"):
        topic = argv[1] if len(argv) > 1 else None
        if topic is None:
            return None, []
        if topic not in COMMANDS:
            raise KeyError(topic)
        return topic, ["--help"]

    verb, rest = argv[0], argv[1:]
    if verb not in COMMANDS:
        raise KeyError(verb)

    kind = DEFAULT_NOUN
    if rest and rest[0] in NOUNS:
        kind = NOUNS[rest[0]]
        rest = rest[1:]
    return verb, ["--kind", kind] + rest


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Google Photos Downloader CLI."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        command, args = route(argv)
    except KeyError as e:
        print(f"Unknown command: {e.args[0]}\n", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    if command is None:
        print(USAGE)
        return 0
    return COMMANDS[command](args)


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
