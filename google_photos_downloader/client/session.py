"""Query and transfer operations against the Google Photos Library API."""

import dataclasses
import logging
import os
from typing import Any, Callable, Dict, Iterator, List, Optional

from google.auth.transport.requests import AuthorizedSession
from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError
from requests.exceptions import RequestException

from google_photos_downloader.config import DEFAULT_USER, QueryOptions
from google_photos_downloader.models import (
    Album,
    ApiError,
    Comment,
    Entry,
    ItemLookupError,
    MediaContent,
    Photo,
    Tag,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100
MAX_ALBUM_PAGE_SIZE = 50
CHUNK_SIZE = 1024 * 1024
KNOWN_OPTIONS = {"max-results", "page-size"}

# Content categories accepted by mediaItems.search content filters.
CONTENT_CATEGORIES = [
    "ANIMALS", "ARTS", "BIRTHDAYS", "CITYSCAPES", "CRAFTS", "DOCUMENTS",
    "FASHION", "FLOWERS", "FOOD", "GARDENS", "HOLIDAYS", "HOUSES",
    "LANDMARKS", "LANDSCAPES", "NIGHT", "PEOPLE", "PERFORMANCES", "PETS",
    "RECEIPTS", "SCREENSHOTS", "SELFIES", "SPORT", "TRAVEL", "UTILITY",
    "WEDDINGS", "WHITEBOARDS",
]


class PhotosSession:
    """Authenticated access to one user's Google Photos library."""

    def __init__(self, service: Resource, http: Optional[AuthorizedSession] = None):
        """Initialize the session.

        Args:
            service: photoslibrary v1 discovery resource
            http: Authorized requests session used to fetch media bytes
        """
        self.service = service
        self.http = http

    def query(self, kind: str, options: QueryOptions) -> List[Entry]:
        """Run the query for one kind of entry."""
        handlers: Dict[str, Callable[[QueryOptions], List[Any]]] = {
            "album": self.query_albums,
            "photo": self.query_photos,
            "tag": self.query_tags,
            "comment": self.query_comments,
        }
        if kind not in handlers:
            raise ValueError(f"Unknown kind: {kind}")
        return handlers[kind](options)

    def query_albums(self, options: QueryOptions) -> List[Album]:
        """List albums in the library, or albums shared with the user."""
        if options.is_default_user:
            items = self._paginate(
                lambda **kw: self.service.albums().list(**kw).execute(),
                "albums",
                options,
                max_page_size=MAX_ALBUM_PAGE_SIZE,
            )
        else:
            items = self._paginate(
                lambda **kw: self.service.sharedAlbums().list(**kw).execute(),
                "sharedAlbums",
                options,
                max_page_size=MAX_ALBUM_PAGE_SIZE,
            )
        return [self._album(item, options) for item in items]

    def get_album(self, album_id: str, options: Optional[QueryOptions] = None) -> Album:
        """Fetch a single album by id.

        Raises:
            ItemLookupError: If the album cannot be retrieved
        """
        try:
            item = self.service.albums().get(albumId=album_id).execute()
        except HttpError as e:
            raise ItemLookupError(album_id, str(e)) from e
        return self._album(item, options or QueryOptions())

    def query_photos(self, options: QueryOptions) -> List[Photo]:
        """List media items, in one album when the options name one."""
        return list(self._scan_photos(options))

    def _scan_photos(self, options: QueryOptions) -> Iterator[Photo]:
        if options.album_id:
            def fetch_page(**kw):
                body = {"albumId": options.album_id, **kw}
                return self.service.mediaItems().search(body=body).execute()
        else:
            def fetch_page(**kw):
                return self.service.mediaItems().list(**kw).execute()

        for item in self._paginate(fetch_page, "mediaItems", options):
            yield self._photo(item, options)

    def query_tags(self, options: QueryOptions) -> List[Tag]:
        """List the content categories photos can be searched by."""
        self._check_options(options)
        if options.album_id:
            logger.warning("Content categories are library-wide; ignoring album %s", options.album_id)
        tags = [
            Tag(
                id=category,
                title=category.lower(),
                entry_id=f"contentCategories/{category}",
                user_id=options.user_id or DEFAULT_USER,
            )
            for category in CONTENT_CATEGORIES
        ]
        limit = self._limit(options)
        return tags[:limit] if limit else tags

    def query_comments(self, options: QueryOptions) -> List[Comment]:
        """List photo captions as comments.

        max-results caps the comments returned, so every photo is scanned
        until enough captions are found.
        """
        limit = self._limit(options)
        scan_options = dataclasses.replace(
            options, extra=tuple((k, v) for k, v in options.extra if k != "max-results")
        )
        comments: List[Comment] = []
        for photo in self._scan_photos(scan_options):
            if not photo.summary:
                continue
            comments.append(
                Comment(
                    id=photo.id,
                    url=photo.url,
                    title=photo.title,
                    summary=photo.summary,
                    author_name=photo.author_name,
                    author_uri=photo.author_uri,
                    entry_id=f"{photo.entry_id}/description",
                    user_id=photo.user_id,
                    photo_id=photo.id,
                )
            )
            if limit and len(comments) >= limit:
                break
        return comments

    def download(self, url: str, path: str) -> None:
        """Stream a media URL to a local file.

        Raises:
            ApiError: If the transfer fails; no partial file is left behind
        """
        if self.http is None:
            raise ApiError("Session has no authorized transport for downloads")
        try:
            with self.http.get(url, stream=True) as response:
                response.raise_for_status()
                with open(path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        f.write(chunk)
        except (RequestException, OSError) as e:
            if os.path.exists(path):
                os.remove(path)
            raise ApiError(f"Error downloading {url}: {e}") from e

    def _paginate(
        self,
        fetch_page: Callable[..., Dict[str, Any]],
        key: str,
        options: QueryOptions,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> Iterator[Dict[str, Any]]:
        """Yield items across pages, honouring max-results."""
        self._check_options(options)
        limit = self._limit(options)
        page_size = min(self._page_size(options), max_page_size)
        page_token = None
        count = 0

        while True:
            params: Dict[str, Any] = {"pageSize": page_size}
            if page_token:
                params["pageToken"] = page_token
            try:
                response = fetch_page(**params)
            except HttpError as e:
                raise ApiError(f"Error querying {key}: {e}") from e

            for item in response.get(key, []):
                yield item
                count += 1
                if limit and count >= limit:
                    return

            page_token = response.get("nextPageToken")
            if not page_token:
                break

    def _check_options(self, options: QueryOptions) -> None:
        for name, _ in options.extra:
            if name not in KNOWN_OPTIONS:
                logger.warning("Ignoring unsupported query option: %s", name)

    def _limit(self, options: QueryOptions) -> Optional[int]:
        return self._int_option(options, "max-results")

    def _page_size(self, options: QueryOptions) -> int:
        page_size = self._int_option(options, "page-size") or DEFAULT_PAGE_SIZE
        return min(page_size, MAX_PAGE_SIZE)

    def _int_option(self, options: QueryOptions, name: str) -> Optional[int]:
        value = options.get(name)
        if value is None:
            return None
        try:
            number = int(value)
        except ValueError as e:
            raise ApiError(f"Option {name} must be an integer, got {value!r}") from e
        if number < 1:
            raise ApiError(f"Option {name} must be positive, got {number}")
        return number

    def _album(self, item: Dict[str, Any], options: QueryOptions) -> Album:
        return Album(
            id=item["id"],
            url=item.get("productUrl"),
            title=item.get("title", ""),
            entry_id=f"albums/{item['id']}",
            user_id=options.user_id or DEFAULT_USER,
            num_photos=item.get("mediaItemsCount", "0"),
        )

    def _photo(self, item: Dict[str, Any], options: QueryOptions) -> Photo:
        metadata = item.get("mediaMetadata", {})
        contributor = item.get("contributorInfo", {})
        mime_type = item.get("mimeType", "application/octet-stream")
        is_video = "video" in metadata or mime_type.startswith("video/")
        base_url = item.get("baseUrl", "")

        return Photo(
            id=item["id"],
            url=item.get("productUrl"),
            title=item.get("filename", ""),
            summary=item.get("description"),
            author_name=contributor.get("displayName"),
            author_uri=contributor.get("profilePictureBaseUrl"),
            entry_id=f"mediaItems/{item['id']}",
            user_id=options.user_id or DEFAULT_USER,
            album_id=options.album_id,
            mime_type=mime_type,
            created=metadata.get("creationTime"),
            content=MediaContent(
                medium="video" if is_video else "image",
                mime_type=mime_type,
                src=f"{base_url}=dv" if is_video else f"{base_url}=d",
                fetcher=self.download,
            ),
        )
