"""Models for Google Photos Downloader."""

from dataclasses import dataclass, field, fields
from typing import Callable, Optional, Tuple


@dataclass
class MediaContent:
    """Downloadable content of a photo or video."""
    medium: str
    mime_type: str
    src: str
    fetcher: Callable[[str, str], None] = field(repr=False, compare=False)

    def fetch(self, path: str) -> None:
        """Write the content bytes to path."""
        self.fetcher(self.src, path)


@dataclass
class Entry:
    """Base class for entries returned by the Photos API.

    Only fields declared with the default metadata are visible to rule
    matching; anything flagged ``matchable=False`` is hidden.
    """
    id: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    author_name: Optional[str] = None
    author_uri: Optional[str] = None
    entry_id: Optional[str] = None
    user_id: Optional[str] = None

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        """Names of the fields rules may refer to."""
        return tuple(f.name for f in fields(cls) if f.metadata.get("matchable", True))

    def field_value(self, name: str) -> Optional[str]:
        """Return the string value of a field, or None if unknown or unset."""
        if name not in self.field_names():
            return None
        value = getattr(self, name)
        return None if value is None else str(value)


@dataclass
class Album(Entry):
    """Represents an album in Google Photos."""
    num_photos: Optional[str] = None


@dataclass
class Photo(Entry):
    """Represents a media item in Google Photos."""
    album_id: Optional[str] = None
    mime_type: Optional[str] = None
    created: Optional[str] = None
    content: Optional[MediaContent] = field(default=None, metadata={"matchable": False})


@dataclass
class Tag(Entry):
    """Represents a content category photos can be searched by."""


@dataclass
class Comment(Entry):
    """Represents the caption attached to a media item."""
    photo_id: Optional[str] = None


class GooglePhotosError(Exception):
    """Base exception for Google Photos operations."""


class AuthenticationError(GooglePhotosError):
    """Raised when authentication fails."""


class ApiError(GooglePhotosError):
    """Raised when API calls fail."""


class ItemLookupError(ApiError):
    """Raised when a single album or photo cannot be resolved."""

    def __init__(self, item_id: str, reason: str):
        super().__init__(f"Could not find {item_id}: {reason}")
        self.item_id = item_id
        self.reason = reason


class RuleFormatError(GooglePhotosError, ValueError):
    """Raised when a --find-* expression cannot be parsed."""

    def __init__(self, rule: str, category: str, reason: Optional[str] = None):
        message = f"Invalid {category} rule '{rule}': expected field=value or field=~pattern"
        if reason:
            message = f"Invalid {category} rule '{rule}': {reason}"
        super().__init__(message)
        self.rule = rule
        self.category = category


class ValidationError(GooglePhotosError):
    """Raised on an invalid combination of command line options."""
