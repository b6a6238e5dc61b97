from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

router = APIRouter()

STATIC_DIR = Path(__file__).resolve().parent / "static"


@router.get("/RegisterForm.html", response_class=FileResponse)
async def register_form():
    return FileResponse(STATIC_DIR / "RegisterForm.html", media_type="text/html")


@router.get("/SearchForm.html", response_class=FileResponse)
async def search_form():
    return FileResponse(STATIC_DIR / "SearchForm.html", media_type="text/html")
