from typing import Optional

from pydantic import BaseModel


class InventoryItemUpdate(BaseModel):
    # Empty strings are accepted and leave the stored value unchanged
    inventory_name: Optional[str] = None
    description: Optional[str] = None


class InventoryItemOut(BaseModel):
    id: int
    inventory_name: str
    description: str
    photo: Optional[str] = None


class InventorySearchOut(BaseModel):
    """Search result; ``photo`` is only present when it was asked for."""

    id: int
    inventory_name: str
    description: str
    photo: Optional[str] = None
