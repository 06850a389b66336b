"""Configuration for unit tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def debug_logging(caplog):
    """Capture debug output from the package."""
    caplog.set_level(logging.DEBUG, logger="google_photos_downloader")
    yield
