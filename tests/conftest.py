from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from db.blob_store import BlobStore
from db.database import get_blob_store, get_record_store
from db.record_store import RecordStore
from main import app


@pytest.fixture
def record_store(tmp_path: Path) -> RecordStore:
    return RecordStore(tmp_path / "cache" / "inventory.json")


@pytest.fixture
def blob_store(tmp_path: Path) -> BlobStore:
    return BlobStore(tmp_path / "cache")


@pytest.fixture
def client(record_store: RecordStore, blob_store: BlobStore):
    app.dependency_overrides[get_record_store] = lambda: record_store
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    yield TestClient(app, base_url="http://h:1")
    app.dependency_overrides.clear()
