"""
Inventory record store backed by one JSON file.

Every operation reads the whole file, works on the in-memory list, and (for
mutations) writes the whole list back. A single lock serialises all of them,
reads included, so callers always see a complete snapshot and two creates
can never compute the same id.
"""

import json
import logging
import tempfile
import threading
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from core.errors import NotFoundError, StorageError, ValidationError
from db.inventory.item import InventoryItem

logger = logging.getLogger(__name__)


class RecordStore:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.RLock()
        # Highest id handed out by this process; deleting the top record must not free its id
        self._last_id = 0
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if not self._path.exists():
            self._write([])

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> List[InventoryItem]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to read inventory file %s: %s", self._path, e)
            raise StorageError(f"Failed to read inventory file: {e}") from e

        if not isinstance(raw, list):
            raise StorageError(f"Inventory file {self._path} does not contain a JSON array")
        try:
            return [InventoryItem.model_validate(entry) for entry in raw]
        except PydanticValidationError as e:
            raise StorageError(f"Inventory file {self._path} contains a malformed record: {e}") from e

    def _write(self, items: List[InventoryItem]) -> None:
        payload = json.dumps([item.model_dump() for item in items], ensure_ascii=False)
        tmp_path = None
        try:
            # Write next to the target so the rename stays on one filesystem
            with tempfile.NamedTemporaryFile(
                "w", delete=False, encoding="utf-8", dir=str(self._path.parent), suffix=".tmp"
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(payload)
            tmp_path.replace(self._path)
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            logger.error("Failed to write inventory file %s: %s", self._path, e)
            raise StorageError(f"Failed to write inventory file: {e}") from e

    @staticmethod
    def _find(items: List[InventoryItem], item_id: int) -> int:
        for index, item in enumerate(items):
            if item.id == item_id:
                return index
        raise NotFoundError(item_id)

    @staticmethod
    def validate_name(name: Optional[str]) -> str:
        if not name:
            raise ValidationError("inventory_name", "name is required")
        return name

    def create(
        self,
        name: Optional[str],
        description: Optional[str] = "",
        photo: Optional[str] = None,
    ) -> InventoryItem:
        self.validate_name(name)

        with self._lock:
            items = self._read()
            # Full scan on every create: tolerates hand edits of the file at O(n) per call
            next_id = max(max((item.id for item in items), default=0), self._last_id) + 1
            item = InventoryItem(
                id=next_id,
                inventory_name=name,
                description=description or "",
                photo=photo,
            )
            items.append(item)
            self._write(items)
            self._last_id = next_id

        logger.info("Registered inventory item %d (%r)", item.id, item.inventory_name)
        return item

    def list(self) -> List[InventoryItem]:
        with self._lock:
            items = self._read()
        logger.debug("Listed %d inventory items", len(items))
        return items

    def get(self, item_id: int) -> InventoryItem:
        with self._lock:
            items = self._read()
            return items[self._find(items, item_id)]

    def update(
        self,
        item_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> InventoryItem:
        """Overwrite the fields given with a non-empty value; empty strings count as not given."""
        with self._lock:
            items = self._read()
            index = self._find(items, item_id)
            changes = {}
            if name:
                changes["inventory_name"] = name
            if description:
                changes["description"] = description
            item = items[index].model_copy(update=changes)
            items[index] = item
            self._write(items)

        logger.info("Updated inventory item %d (%s)", item_id, ", ".join(changes) or "no changes")
        return item

    def set_photo(self, item_id: int, photo: str) -> InventoryItem:
        # The previous photo file is left in place
        with self._lock:
            items = self._read()
            index = self._find(items, item_id)
            item = items[index].model_copy(update={"photo": photo})
            items[index] = item
            self._write(items)

        logger.info("Set photo of inventory item %d to %s", item_id, photo)
        return item

    def delete(self, item_id: int) -> None:
        with self._lock:
            items = self._read()
            index = self._find(items, item_id)
            del items[index]
            self._write(items)

        logger.info("Deleted inventory item %d", item_id)
