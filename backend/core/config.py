import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    host: str = os.getenv("INVENTORY_HOST", "127.0.0.1")
    port: int = int(os.getenv("INVENTORY_PORT", "3000"))

    # Uploaded photos and the inventory file share this directory
    cache_dir: str = os.getenv("INVENTORY_CACHE_DIR", "./cache")
    inventory_file_name: str = os.getenv("INVENTORY_FILE_NAME", "inventory.json")

    log_level: str = os.getenv("INVENTORY_LOG_LEVEL", "INFO").upper()

    @property
    def inventory_file(self) -> Path:
        return Path(self.cache_dir) / self.inventory_file_name


settings = Settings()
