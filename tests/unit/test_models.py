"""Unit tests for entry models."""

from google_photos_downloader.config import QueryOptions
from google_photos_downloader.models import Album, Comment, MediaContent, Photo, Tag


def test_field_value():
    """Test fields are exposed as strings."""
    album = Album(id="a1", title="Trip", num_photos=3)

    assert album.field_value("title") == "Trip"
    assert album.field_value("num_photos") == "3"
    assert album.field_value("summary") is None
    assert album.field_value("nonsense") is None


def test_field_names_per_kind():
    """Test each kind exposes its own fields."""
    assert "num_photos" in Album.field_names()
    assert "mime_type" in Photo.field_names()
    assert "photo_id" in Comment.field_names()
    assert "album_id" not in Tag.field_names()
    assert "content" not in Photo.field_names()


def test_content_is_not_matchable():
    """Test the content descriptor is hidden from rules."""
    calls = []
    photo = Photo(
        id="p1",
        content=MediaContent("image", "image/jpeg", "https://x=d", lambda src, path: calls.append((src, path))),
    )

    assert photo.field_value("content") is None
    photo.content.fetch("out.jpg")
    assert calls == [("https://x=d", "out.jpg")]


def test_query_options():
    """Test query options are scoped copies."""
    options = QueryOptions(user_id="me", extra=(("max-results", "5"), ("max-results", "7")))
    scoped = options.with_album("a1")

    assert scoped.album_id == "a1"
    assert scoped.user_id == "me"
    assert options.album_id is None
    assert options.get("max-results") == "7"
    assert options.get("page-size", "10") == "10"
    assert not options.is_default_user
    assert QueryOptions(user_id="default").is_default_user
