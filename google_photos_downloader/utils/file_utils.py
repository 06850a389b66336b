"""File utilities for Google Photos Downloader."""

import logging
import os
import re

from google_photos_downloader.models import Entry

logger = logging.getLogger(__name__)

UNTITLED = "untitled"

_UNSAFE_RUN = re.compile(r"[^\w.\-]+")
_EDGE_DASHES = re.compile(r"^-+|-+$")


def sanitize_filename(title: str) -> str:
    """Map a title to a filesystem-safe name.

    Every run of characters other than word characters, ``.``, ``_`` and
    ``-`` becomes a single ``-``, then leading and trailing dashes are
    stripped. Names made only of dots are reduced to the empty string.

    Args:
        title: Arbitrary title text

    Returns:
        Sanitized name, possibly empty
    """
    name = _UNSAFE_RUN.sub("-", title or "")
    name = _EDGE_DASHES.sub("", name)
    if not name.strip("."):
        return ""
    return name


def entry_filename(entry: Entry) -> str:
    """Return a non-empty filesystem name for an entry.

    Falls back to the entry id when the title sanitizes to nothing, and to
    a fixed placeholder when the id does too.
    """
    name = sanitize_filename(entry.title or "")
    if not name:
        name = sanitize_filename(entry.id or "")
        logger.debug("Title %r is unusable as a file name, using %r", entry.title, name)
    return name or UNTITLED


def path_exists(path: str) -> bool:
    """Check for any filesystem entry at path, including dangling links."""
    return os.path.lexists(path)
