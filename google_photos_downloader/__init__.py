"""Google Photos Downloader - fetch albums and photos from Google Photos."""

__version__ = "0.1.0"
