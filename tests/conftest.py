"""Shared fixtures: record stores over in-memory or temp-file storage."""

import pytest
from fastapi.testclient import TestClient

from readtrack.core.record_store import RecordStore
from readtrack.core.storage import JsonFileStorage, MemoryStorage
from readtrack.web.api import create_app


@pytest.fixture
def sample_books() -> list[dict]:
    """Two catalog entries."""
    return [
        {
            "id": "b1",
            "title": "The Little Prince",
            "author": "Antoine de Saint-Exupéry",
            "coverUrl": "https://example.com/b1.jpg",
            "totalPages": 96,
            "genre": "Fiction",
        },
        {
            "id": "b2",
            "title": "Sapiens",
            "author": "Yuval Noah Harari",
            "coverUrl": "https://example.com/b2.jpg",
            "totalPages": 443,
            "genre": "History",
        },
    ]


@pytest.fixture
def memory_storage(sample_books) -> MemoryStorage:
    return MemoryStorage({"users": [], "books": sample_books})


@pytest.fixture
def store(memory_storage) -> RecordStore:
    return RecordStore(memory_storage)


@pytest.fixture
def file_store(tmp_path) -> RecordStore:
    """Store backed by a JSON file that does not exist yet."""
    return RecordStore(JsonFileStorage(tmp_path / "data" / "db.json"))


@pytest.fixture
def client(store) -> TestClient:
    """Test client over the in-memory store."""
    return TestClient(create_app(store=store))
