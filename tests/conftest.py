"""Test configuration for pytest."""

import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# Add the project root directory to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from google_photos_downloader.config import QueryOptions  # noqa: E402
from google_photos_downloader.models import Album, ItemLookupError, MediaContent, Photo  # noqa: E402


class FakeSession:
    """Stands in for PhotosSession with canned albums and photos."""

    def __init__(
        self,
        albums: Optional[List[Album]] = None,
        photos_by_album: Optional[Dict[str, List[Photo]]] = None,
        photos: Optional[List[Photo]] = None,
    ):
        self.albums = albums or []
        self.photos_by_album = photos_by_album or {}
        self.photos = photos or []
        self.queries: List[QueryOptions] = []

    def get_album(self, album_id, options=None):
        for album in self.albums:
            if album.id == album_id:
                return album
        raise ItemLookupError(album_id, "404 Not Found")

    def query_albums(self, options):
        self.queries.append(options)
        return list(self.albums)

    def query_photos(self, options):
        self.queries.append(options)
        if options.album_id:
            return list(self.photos_by_album.get(options.album_id, []))
        return list(self.photos)

    def query(self, kind, options):
        if kind == "album":
            return self.query_albums(options)
        return self.query_photos(options)


class Fetcher:
    """Records fetches and writes placeholder bytes."""

    def __init__(self):
        self.paths: List[str] = []

    def __call__(self, src, path):
        self.paths.append(path)
        Path(path).write_bytes(b"image data")


@pytest.fixture
def fetcher() -> Fetcher:
    """Create a recording fetcher."""
    return Fetcher()


@pytest.fixture
def make_photo(fetcher):
    """Build photos whose content goes through the recording fetcher."""
    def _make(photo_id: str, title: str, **kwargs) -> Photo:
        return Photo(
            id=photo_id,
            title=title,
            content=MediaContent(
                medium="image",
                mime_type="image/jpeg",
                src=f"https://example.com/{photo_id}=d",
                fetcher=fetcher,
            ),
            **kwargs,
        )

    return _make


@pytest.fixture
def trip_session(make_photo) -> FakeSession:
    """Create a session holding one album with two photos."""
    return FakeSession(
        albums=[Album(id="a1", title="Trip 2008", num_photos="2")],
        photos_by_album={
            "a1": [make_photo("p1", "IMG_0001.JPG"), make_photo("p2", "IMG_0002.JPG")]
        },
    )


@pytest.fixture
def empty_session() -> FakeSession:
    """Create a session with nothing in it."""
    return FakeSession()
