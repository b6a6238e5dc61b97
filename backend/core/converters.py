from typing import Dict, Optional

from db.inventory.item import InventoryItem
from schemas.inventory import InventoryItemUpdate

UPLOADS_PATH = "/uploads"


def photo_url(base_url: str, photo: Optional[str]) -> Optional[str]:
    """Public URL of a stored photo, or None when there is no photo"""
    if not photo:
        return None
    return f"{base_url.rstrip('/')}{UPLOADS_PATH}/{photo}"


def item_to_client(item: InventoryItem, base_url: str) -> Dict:
    """Convert a stored record to the response dict (photo as URL or null)"""
    return {
        "id": item.id,
        "inventory_name": item.inventory_name,
        "description": item.description,
        "photo": photo_url(base_url, item.photo),
    }


def item_to_search_result(item: InventoryItem, base_url: str, include_photo: bool) -> Dict:
    """Like item_to_client, but the photo key is dropped unless requested and present"""
    result = {
        "id": item.id,
        "inventory_name": item.inventory_name,
        "description": item.description,
    }
    if include_photo and item.photo:
        result["photo"] = photo_url(base_url, item.photo)
    return result


def update_fields(payload: InventoryItemUpdate) -> Dict:
    """Convert an update payload to RecordStore.update keyword arguments"""
    return {
        "name": payload.inventory_name,
        "description": payload.description,
    }
