"""Google Photos Library API client wrapper."""

from .session import PhotosSession

__all__ = ["PhotosSession"]
