"""
Inventory records persisted in a single JSON file.

Models:
- InventoryItem (one record; optional photo stored in the blob store)
"""

from .item import InventoryItem

__all__ = ["InventoryItem"]
