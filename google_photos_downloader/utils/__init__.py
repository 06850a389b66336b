"""Utility functions for Google Photos Downloader."""

from .auth import login, prompt_password
from .file_utils import entry_filename, path_exists, sanitize_filename

__all__ = ["login", "prompt_password", "entry_filename", "path_exists", "sanitize_filename"]
