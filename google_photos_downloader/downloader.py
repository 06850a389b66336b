"""Places albums and photos from Google Photos on the local filesystem."""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from google_photos_downloader.client import PhotosSession
from google_photos_downloader.config import DownloadSettings, QueryOptions
from google_photos_downloader.models import Album, ItemLookupError, Photo
from google_photos_downloader.rules import Rule, matches
from google_photos_downloader.utils.file_utils import entry_filename, path_exists

logger = logging.getLogger(__name__)


@dataclass
class DownloadSummary:
    """Counts of what a run did, or would have done."""
    albums_processed: int = 0
    albums_skipped: int = 0
    photos_saved: int = 0
    photos_skipped: int = 0

    def __str__(self) -> str:
        return (
            f"{self.albums_processed} albums processed, {self.albums_skipped} skipped; "
            f"{self.photos_saved} photos saved, {self.photos_skipped} skipped"
        )


class Downloader:
    """Downloads the albums and photos that match a set of rules."""

    def __init__(
        self,
        session: PhotosSession,
        options: QueryOptions,
        settings: DownloadSettings,
        album_rules: Optional[Dict[str, Rule]] = None,
        photo_rules: Optional[Dict[str, Rule]] = None,
    ):
        """Initialize the downloader.

        Args:
            session: Authenticated API session
            options: Query options shared by every request in the run
            settings: Update, dry run and quiet flags plus destination root
            album_rules: Rules albums must satisfy
            photo_rules: Rules photos must satisfy
        """
        self.session = session
        self.options = options
        self.settings = settings
        self.album_rules = album_rules or {}
        self.photo_rules = photo_rules or {}
        self.summary = DownloadSummary()

    def resolve_albums(self, album_ids: Iterable[str]) -> Iterable[Album]:
        """Look up albums one id at a time, dropping those that fail."""
        for album_id in album_ids:
            try:
                yield self.session.get_album(album_id, self.options)
            except ItemLookupError as e:
                logger.warning("Skipping album %s: %s", album_id, e.reason)

    def download_albums(self, albums: Iterable[Album]) -> DownloadSummary:
        """Create one directory per matching album and fill it with photos."""
        for album in albums:
            if not matches(album, self.album_rules):
                continue

            directory = entry_filename(album)
            path = os.path.join(self.settings.root, directory)

            if path_exists(path):
                if not os.path.isdir(path):
                    logger.warning("%s is not a directory, skipping album '%s'", path, album.title)
                    self.summary.albums_skipped += 1
                    continue
                if not self.settings.update:
                    logger.warning("%s already exists, skipping album '%s'", path, album.title)
                    self.summary.albums_skipped += 1
                    continue
                self._announce(f"Updating existing directory {path}", f"Would update directory {path}")
            else:
                self._announce(f"Creating directory {path}", f"Would create directory {path}")
                if not self.settings.dry_run:
                    os.makedirs(path)

            photos = self.session.query_photos(self.options.with_album(album.id))
            self.download_photos(photos, directory)
            self.summary.albums_processed += 1

        return self.summary

    def download_photos(self, photos: Iterable[Photo], directory: Optional[str] = None) -> DownloadSummary:
        """Save each matching photo, leaving existing files untouched."""
        for photo in photos:
            if not matches(photo, self.photo_rules):
                continue

            filename = entry_filename(photo)
            if directory:
                filename = os.path.join(directory, filename)
            path = os.path.join(self.settings.root, filename)

            if path_exists(path):
                logger.warning("%s already exists, skipping photo", path)
                self.summary.photos_skipped += 1
                continue

            self._announce(f"Saving {path}", f"Would save {path}")
            if not self.settings.dry_run:
                photo.content.fetch(path)
            self.summary.photos_saved += 1

        return self.summary

    def _announce(self, message: str, dry_run_message: Optional[str] = None) -> None:
        if self.settings.quiet:
            return
        if self.settings.dry_run and dry_run_message:
            print(f"[DRY RUN] {dry_run_message}")
        else:
            print(message)
