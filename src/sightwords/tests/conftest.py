"""Test configuration."""
import os
import random
from datetime import datetime, timedelta, UTC
from pathlib import Path
from typing import Generator

import pytest
from dotenv import load_dotenv

# Set test environment before any imports
os.environ["ENV"] = "test"

# Load test environment variables
test_env_path = Path(__file__).parent.parent.parent.parent / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from sightwords.models.base import init_db
from sightwords.services.progress_store import ProgressStore, SqlBlobStore


class FakeClock:
    """Controllable replacement for datetime.now(UTC)."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def session_factory(tmp_path: Path) -> Generator[sessionmaker, None, None]:
    """Create a throwaway SQLite database for each test."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


@pytest.fixture
def blob_store(session_factory: sessionmaker) -> SqlBlobStore:
    return SqlBlobStore(session_factory)


@pytest.fixture
def store(blob_store: SqlBlobStore) -> ProgressStore:
    return ProgressStore(blob_store)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 5, 16, 0, tzinfo=UTC))


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
