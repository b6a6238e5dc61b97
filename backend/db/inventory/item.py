from typing import Optional

from pydantic import BaseModel, Field


class InventoryItem(BaseModel):
    """One stored inventory record, as written to the inventory file."""

    id: int = Field(gt=0)
    inventory_name: str
    description: str = ""

    # Storage name inside the blob store, not a URL
    photo: Optional[str] = None
