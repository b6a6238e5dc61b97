import argparse
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from db.database import create_stores
from routers.forms import router as forms_router
from routers.inventory import router as inventory_router
from routers.uploads import router as uploads_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_stores()
    logger.info("Inventory data in %s", settings.inventory_file)
    yield


app = FastAPI(
    title="Inventory API",
    description="API for registering inventory items and their photos",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Stored photos, addressed as /uploads/{storage name}
app.include_router(uploads_router, prefix="/uploads", tags=["uploads"])

# Inventory routes (/register, /inventory, /search)
app.include_router(inventory_router, tags=["inventory"])

# HTML forms
app.include_router(forms_router, tags=["forms"])


def build_parser() -> argparse.ArgumentParser:
    # -h is the host, as in the service's original command line
    parser = argparse.ArgumentParser(description="Inventory service", add_help=False)
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument("-h", "--host", required=True, help="server host")
    parser.add_argument("-p", "--port", required=True, type=int, help="server port")
    parser.add_argument("-c", "--cache", required=True, help="cache directory")
    return parser


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    settings.host = args.host
    settings.port = args.port
    settings.cache_dir = args.cache

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server running at http://%s:%d/", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
