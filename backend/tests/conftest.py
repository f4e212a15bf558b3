"""Shared fixtures. The connection string must exist before the package is imported."""

import os

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/connection_cache_test")

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def mock_client():
    """A stand-in for a connected AsyncIOMotorClient."""
    return MagicMock(name="AsyncIOMotorClient")
