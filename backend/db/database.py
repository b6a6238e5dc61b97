import threading
from typing import Optional

from core.config import settings
from db.blob_store import BlobStore
from db.record_store import RecordStore

_record_store: Optional[RecordStore] = None
_blob_store: Optional[BlobStore] = None

# One RecordStore per process, otherwise each instance would hold its own lock
_stores_lock = threading.Lock()


def create_stores(cache_dir: Optional[str] = None) -> None:
    """Create the cache directory, the inventory file and the store instances."""
    global _record_store, _blob_store
    with _stores_lock:
        if cache_dir is not None:
            settings.cache_dir = cache_dir
        _blob_store = BlobStore(settings.cache_dir)
        _record_store = RecordStore(settings.inventory_file)


def _ensure_stores() -> None:
    global _record_store, _blob_store
    with _stores_lock:
        if _record_store is None or _blob_store is None:
            _blob_store = BlobStore(settings.cache_dir)
            _record_store = RecordStore(settings.inventory_file)


def get_record_store() -> RecordStore:
    if _record_store is None:
        _ensure_stores()
    return _record_store


def get_blob_store() -> BlobStore:
    if _blob_store is None:
        _ensure_stores()
    return _blob_store
