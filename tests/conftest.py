"""Pytest configuration and fixtures."""

import os
import tempfile

import pytest

# Point the app at a throwaway SQLite file before database.py reads the env
_TMP_DIR = tempfile.mkdtemp(prefix="tinylink-tests-")
os.environ["ENVIRONMENT"] = "dev"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"

import database  # noqa: E402
import models  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402


@pytest.fixture(autouse=True)
def clean_tables():
    """Give every test an empty links table."""
    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    yield


@pytest.fixture
def db():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def session_factory():
    """For tests that need one session per worker thread."""
    return database.SessionLocal


@pytest.fixture
def client():
    import main

    return TestClient(main.app)


@pytest.fixture
def make_link(db):
    def _make(code="abc123", target_url="https://example.com"):
        link = models.Link(code=code, target_url=target_url, clicks=0)
        db.add(link)
        db.commit()
        return link

    return _make
