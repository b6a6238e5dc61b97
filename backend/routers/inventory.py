import asyncio
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse, PlainTextResponse
from pydantic import ValidationError as PydanticValidationError

from core.converters import item_to_client, item_to_search_result, update_fields
from core.errors import NotFoundError, StorageError, ValidationError
from db.blob_store import BlobStore
from db.database import get_blob_store, get_record_store
from db.record_store import RecordStore
from schemas.inventory import InventoryItemOut, InventoryItemUpdate, InventorySearchOut

router = APIRouter()

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _base_url(request: Request) -> str:
    return str(request.base_url).rstrip("/")


def _has_file(upload: Optional[UploadFile]) -> bool:
    # Browsers send an empty part with no filename when no file was picked
    return upload is not None and bool(upload.filename)


def _path_item_id(item_id: str) -> int:
    # Ids that are not numbers cannot match a record
    try:
        return int(item_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")


def _storage_failed(e: StorageError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Storage error: {str(e)}",
    )


async def _store_upload(blobs: BlobStore, upload: UploadFile) -> str:
    data = await upload.read()
    try:
        return await asyncio.to_thread(blobs.put, data, upload.filename)
    except StorageError as e:
        raise _storage_failed(e)


async def _read_update_payload(request: Request) -> InventoryItemUpdate:
    content_type = (request.headers.get("content-type") or "").split(";")[0].strip().lower()
    try:
        if content_type in FORM_CONTENT_TYPES:
            form = await request.form()
            return InventoryItemUpdate(
                inventory_name=form.get("inventory_name"),
                description=form.get("description"),
            )
        body = await request.body()
        if not body:
            return InventoryItemUpdate()
        return InventoryItemUpdate.model_validate_json(body)
    except PydanticValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid body: {str(e)}")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=InventoryItemOut)
async def register_item(
    request: Request,
    inventory_name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    store: RecordStore = Depends(get_record_store),
    blobs: BlobStore = Depends(get_blob_store),
):
    """
    Register a new inventory item from a multipart form.
    The photo is optional; the response carries its public URL.
    """
    try:
        store.validate_name(inventory_name)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    photo_ref = await _store_upload(blobs, photo) if _has_file(photo) else None

    try:
        item = await asyncio.to_thread(store.create, inventory_name, description or "", photo_ref)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        raise _storage_failed(e)
    return item_to_client(item, _base_url(request))


@router.get("/inventory", response_model=List[InventoryItemOut])
async def list_items(request: Request, store: RecordStore = Depends(get_record_store)):
    try:
        items = await asyncio.to_thread(store.list)
    except StorageError as e:
        raise _storage_failed(e)
    base_url = _base_url(request)
    return [item_to_client(item, base_url) for item in items]


@router.get("/inventory/{item_id}", response_model=InventoryItemOut)
async def get_item(
    request: Request,
    item_id: int = Depends(_path_item_id),
    store: RecordStore = Depends(get_record_store),
):
    try:
        item = await asyncio.to_thread(store.get, item_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    except StorageError as e:
        raise _storage_failed(e)
    return item_to_client(item, _base_url(request))


@router.put("/inventory/{item_id}", response_model=InventoryItemOut)
async def update_item(
    request: Request,
    item_id: int = Depends(_path_item_id),
    store: RecordStore = Depends(get_record_store),
):
    """
    Update the name and/or description of an item.
    Accepts JSON or form bodies; empty values leave the stored field as is.
    """
    payload = await _read_update_payload(request)
    try:
        item = await asyncio.to_thread(store.update, item_id, **update_fields(payload))
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    except StorageError as e:
        raise _storage_failed(e)
    return item_to_client(item, _base_url(request))


@router.get("/inventory/{item_id}/photo", response_class=FileResponse)
async def get_item_photo(
    item_id: int = Depends(_path_item_id),
    store: RecordStore = Depends(get_record_store),
    blobs: BlobStore = Depends(get_blob_store),
):
    """Serve the item's photo file."""
    try:
        item = await asyncio.to_thread(store.get, item_id)
    except NotFoundError:
        item = None
    except StorageError as e:
        raise _storage_failed(e)

    if item is None or not item.photo or not blobs.exists(item.photo):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No photo")
    return FileResponse(blobs.resolve(item.photo))


@router.put("/inventory/{item_id}/photo", response_model=InventoryItemOut)
async def set_item_photo(
    request: Request,
    item_id: int = Depends(_path_item_id),
    photo: Optional[UploadFile] = File(None),
    store: RecordStore = Depends(get_record_store),
    blobs: BlobStore = Depends(get_blob_store),
):
    """Attach a new photo to an item, replacing the previous one."""
    try:
        await asyncio.to_thread(store.get, item_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    except StorageError as e:
        raise _storage_failed(e)
    if not _has_file(photo):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No photo")

    photo_ref = await _store_upload(blobs, photo)
    try:
        item = await asyncio.to_thread(store.set_photo, item_id, photo_ref)
    except NotFoundError:
        # Deleted between the check and the update
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    except StorageError as e:
        raise _storage_failed(e)
    return item_to_client(item, _base_url(request))


@router.delete("/inventory/{item_id}", response_class=PlainTextResponse)
async def delete_item(
    item_id: int = Depends(_path_item_id),
    store: RecordStore = Depends(get_record_store),
):
    try:
        await asyncio.to_thread(store.delete, item_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    except StorageError as e:
        raise _storage_failed(e)
    return "Deleted"


@router.post("/search", response_model=InventorySearchOut, response_model_exclude_unset=True)
async def search_item(
    request: Request,
    id: str = Form(""),
    has_photo: Optional[str] = Form(None),
    store: RecordStore = Depends(get_record_store),
) -> Dict:
    """
    Look up one item by id from the search form.
    The photo URL is included only when the has_photo checkbox is on.
    """
    try:
        item_id = int(id.strip())
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")

    try:
        item = await asyncio.to_thread(store.get, item_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    except StorageError as e:
        raise _storage_failed(e)
    return item_to_search_result(item, _base_url(request), include_photo=has_photo == "on")
