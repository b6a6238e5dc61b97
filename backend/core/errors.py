"""Typed errors raised by the inventory stores."""


class InventoryError(Exception):
    """Base exception for inventory store errors."""


class ValidationError(InventoryError):
    """Raised when a required field is missing or malformed."""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"{field} is required")


class NotFoundError(InventoryError):
    """Raised when no record (or photo) exists for the given reference."""

    def __init__(self, ref) -> None:
        self.ref = ref
        super().__init__(f"Not found: {ref}")


class StorageError(InventoryError, OSError):
    """Raised when the inventory file or a blob cannot be read or written."""
