from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from core.errors import NotFoundError
from db.blob_store import BlobStore
from db.database import get_blob_store

router = APIRouter()


@router.get("/{name}", response_class=FileResponse)
async def serve_upload(name: str, blobs: BlobStore = Depends(get_blob_store)):
    """Serve a stored photo by its storage name. No auth required so img src works."""
    try:
        path = blobs.resolve(name)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return FileResponse(path)
