"""File-system storage for uploaded inventory photos."""

import logging
import os
import threading
import time
from pathlib import Path
from typing import Optional

from core.errors import NotFoundError, StorageError

logger = logging.getLogger(__name__)


class BlobStore:
    """Store each upload as ``<millisecond token><original extension>`` under a root directory.

    Names are never reused within a process, and a name that already exists on
    disk is skipped, so concurrent uploads never overwrite each other.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._last_token = 0

    @property
    def root(self) -> Path:
        return self._root

    def _next_token(self) -> int:
        with self._lock:
            token = max(int(time.time() * 1000), self._last_token + 1)
            self._last_token = token
            return token

    def put(self, data: bytes, original_name: Optional[str] = None) -> str:
        """Write ``data`` under a freshly generated name and return that name."""
        ext = os.path.splitext(original_name or "")[1]
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            while True:
                ref = f"{self._next_token()}{ext}"
                try:
                    with open(self._root / ref, "xb") as fh:
                        fh.write(data)
                except FileExistsError:
                    continue
                break
        except OSError as e:
            logger.error("Failed to store upload %r: %s", original_name, e)
            raise StorageError(f"Failed to store upload: {e}") from e

        logger.info("Stored upload %r as %s (%d bytes)", original_name, ref, len(data))
        return ref

    def resolve(self, ref: str) -> Path:
        """Map a storage name to its path. Does not check that the file exists."""
        root = self._root.resolve()
        candidate = (self._root / ref).resolve()
        try:
            candidate.relative_to(root)
        except ValueError:
            raise NotFoundError(ref)
        if candidate == root:
            raise NotFoundError(ref)
        return candidate

    def exists(self, ref: str) -> bool:
        try:
            return self.resolve(ref).is_file()
        except NotFoundError:
            return False
