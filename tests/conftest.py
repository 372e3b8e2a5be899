"""Shared test fixtures for Journey."""

import os
import tempfile
from pathlib import Path

# Settings are read at import time, so point the app at a throwaway SQLite
# database and keep redis off before anything from journey is imported.
_db_dir = tempfile.mkdtemp(prefix="journey-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_db_dir) / 'journey.db'}"
os.environ["DB_AUTO_CREATE"] = "true"
os.environ.pop("REDIS_URL", None)

import pytest  # noqa: E402

from tests.fakes import FakeCache, InMemoryTripRepository, RecordingDispatcher  # noqa: E402


@pytest.fixture
def repository():
    return InMemoryTripRepository()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def cache():
    return FakeCache()
