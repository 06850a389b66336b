"""Per-invocation settings for Google Photos Downloader."""

import dataclasses
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_USER = "default"
DEFAULT_CLIENT_SECRETS = "client_secret.json"


@dataclass(frozen=True)
class QueryOptions:
    """Options passed to every query against the Photos API."""
    user_id: Optional[str] = None
    album_id: Optional[str] = None
    extra: Tuple[Tuple[str, str], ...] = ()

    def with_album(self, album_id: str) -> "QueryOptions":
        """Return a copy of these options scoped to one album."""
        return dataclasses.replace(self, album_id=album_id)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the last value given for an extra option."""
        value = default
        for name, option_value in self.extra:
            if name == key:
                value = option_value
        return value

    @property
    def is_default_user(self) -> bool:
        return self.user_id in (None, "", DEFAULT_USER)


@dataclass(frozen=True)
class DownloadSettings:
    """How downloads are placed on disk."""
    update: bool = False
    dry_run: bool = False
    quiet: bool = False
    root: str = "."
