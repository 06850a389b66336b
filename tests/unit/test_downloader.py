"""Unit tests for the Downloader."""

import pytest

from google_photos_downloader.config import DownloadSettings, QueryOptions
from google_photos_downloader.downloader import Downloader
from google_photos_downloader.models import Album
from google_photos_downloader.rules import compile_rules


def make_downloader(session, tmp_path, album_rules=(), photo_rules=(), **settings):
    """Create a downloader writing under tmp_path."""
    return Downloader(
        session,
        QueryOptions(user_id="default"),
        DownloadSettings(root=str(tmp_path), **settings),
        compile_rules(album_rules, "album"),
        compile_rules(photo_rules, "photo"),
    )


def test_download_albums(trip_session, tmp_path, fetcher, capsys):
    """Test each album gets a directory holding its photos."""
    downloader = make_downloader(trip_session, tmp_path)

    summary = downloader.download_albums(trip_session.albums)

    assert (tmp_path / "Trip-2008").is_dir()
    assert (tmp_path / "Trip-2008" / "IMG_0001.JPG").read_bytes() == b"image data"
    assert (tmp_path / "Trip-2008" / "IMG_0002.JPG").exists()
    assert summary.albums_processed == 1
    assert summary.photos_saved == 2
    assert trip_session.queries[-1].album_id == "a1"
    assert trip_session.queries[-1].user_id == "default"

    out = capsys.readouterr().out
    assert "Creating directory" in out
    assert "Saving" in out


def test_album_rules_filter(trip_session, tmp_path, fetcher):
    """Test albums failing the rules are not touched."""
    downloader = make_downloader(trip_session, tmp_path, album_rules=["title=~^Home"])

    summary = downloader.download_albums(trip_session.albums)

    assert not (tmp_path / "Trip-2008").exists()
    assert summary.albums_processed == 0
    assert fetcher.paths == []


def test_photo_rules_filter(trip_session, tmp_path, fetcher):
    """Test photos failing the rules are not saved."""
    downloader = make_downloader(trip_session, tmp_path, photo_rules=["title=IMG_0002.JPG"])

    downloader.download_albums(trip_session.albums)

    assert not (tmp_path / "Trip-2008" / "IMG_0001.JPG").exists()
    assert (tmp_path / "Trip-2008" / "IMG_0002.JPG").exists()


def test_existing_album_skipped(trip_session, tmp_path, fetcher, caplog):
    """Test an existing directory skips the whole album."""
    (tmp_path / "Trip-2008").mkdir()
    downloader = make_downloader(trip_session, tmp_path)

    summary = downloader.download_albums(trip_session.albums)

    assert summary.albums_skipped == 1
    assert summary.albums_processed == 0
    assert fetcher.paths == []
    assert "already exists" in caplog.text


def test_existing_album_updated(trip_session, tmp_path, fetcher, capsys):
    """Test --update reuses an existing directory."""
    (tmp_path / "Trip-2008").mkdir()
    downloader = make_downloader(trip_session, tmp_path, update=True)

    summary = downloader.download_albums(trip_session.albums)

    assert summary.albums_processed == 1
    assert len(fetcher.paths) == 2
    assert "Updating existing directory" in capsys.readouterr().out


def test_existing_album_update_dry_run(trip_session, tmp_path, fetcher, capsys):
    """Test dry runs with --update only say what they would update."""
    (tmp_path / "Trip-2008").mkdir()
    downloader = make_downloader(trip_session, tmp_path, update=True, dry_run=True)

    downloader.download_albums(trip_session.albums)

    out = capsys.readouterr().out
    assert "[DRY RUN] Would update directory" in out
    assert "Updating existing directory" not in out
    assert fetcher.paths == []


def test_file_in_place_of_album_skipped(trip_session, tmp_path, fetcher, caplog):
    """Test a regular file where the album directory belongs skips the album."""
    (tmp_path / "Trip-2008").write_bytes(b"not a directory")
    downloader = make_downloader(trip_session, tmp_path, update=True)

    summary = downloader.download_albums(trip_session.albums)

    assert summary.albums_skipped == 1
    assert summary.albums_processed == 0
    assert fetcher.paths == []
    assert "is not a directory" in caplog.text


def test_existing_photo_skipped_siblings_saved(trip_session, tmp_path, fetcher, caplog):
    """Test an existing file skips only that photo."""
    (tmp_path / "Trip-2008").mkdir()
    (tmp_path / "Trip-2008" / "IMG_0001.JPG").write_bytes(b"old")
    downloader = make_downloader(trip_session, tmp_path, update=True)

    summary = downloader.download_albums(trip_session.albums)

    assert (tmp_path / "Trip-2008" / "IMG_0001.JPG").read_bytes() == b"old"
    assert (tmp_path / "Trip-2008" / "IMG_0002.JPG").read_bytes() == b"image data"
    assert summary.photos_skipped == 1
    assert summary.photos_saved == 1
    assert "IMG_0001.JPG already exists" in caplog.text


def test_dry_run(trip_session, tmp_path, fetcher, capsys):
    """Test dry runs announce everything and write nothing."""
    downloader = make_downloader(trip_session, tmp_path, dry_run=True)

    summary = downloader.download_albums(trip_session.albums)

    assert list(tmp_path.iterdir()) == []
    assert fetcher.paths == []
    assert summary.photos_saved == 2
    out = capsys.readouterr().out
    assert "[DRY RUN] Would create directory" in out
    assert out.count("[DRY RUN] Would save") == 2


def test_quiet(trip_session, tmp_path, fetcher, capsys, caplog):
    """Test quiet mode drops announcements but keeps warnings."""
    (tmp_path / "Trip-2008").mkdir()
    (tmp_path / "Trip-2008" / "IMG_0001.JPG").write_bytes(b"old")
    downloader = make_downloader(trip_session, tmp_path, update=True, quiet=True)

    downloader.download_albums(trip_session.albums)

    assert capsys.readouterr().out == ""
    assert "already exists" in caplog.text
    assert len(fetcher.paths) == 1


def test_download_photos_flat(make_photo, empty_session, tmp_path, fetcher):
    """Test photo mode saves into the root directory."""
    photos = [make_photo("p1", "Beach Day.jpg"), make_photo("p2", "")]
    downloader = make_downloader(empty_session, tmp_path)

    downloader.download_photos(photos)

    assert (tmp_path / "Beach-Day.jpg").exists()
    assert (tmp_path / "p2").exists()


def test_resolve_albums_drops_failures(trip_session, tmp_path, caplog):
    """Test albums that fail lookup are skipped with a warning."""
    downloader = make_downloader(trip_session, tmp_path)

    albums = list(downloader.resolve_albums(["missing", "a1"]))

    assert [album.id for album in albums] == ["a1"]
    assert "Skipping album missing" in caplog.text


@pytest.mark.parametrize("title", ["", "???", ".."])
def test_album_without_usable_title(empty_session, tmp_path, title):
    """Test albums with unusable titles are named after their id."""
    downloader = make_downloader(empty_session, tmp_path)

    downloader.download_albums([Album(id="xyz", title=title)])

    assert (tmp_path / "xyz").is_dir()
