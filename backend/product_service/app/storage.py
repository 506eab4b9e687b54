# backend/product_service/app/storage.py

import logging
import os
import time
from pathlib import Path, PurePath
from typing import Callable, Optional

from .config import IMAGE_BASE_URL, IMAGE_DIR
from .exceptions import ImageStorageError

logger = logging.getLogger(__name__)

DIRECTORY_MODE = 0o755


class ImageStore:
    """
    Keeps uploaded product images in one flat directory (the asset area).

    Stored names are ``<unix seconds>_<original filename>``. Two uploads of the
    same filename within the same second map to the same stored name and the
    later write wins.
    """

    def __init__(
        self,
        directory,
        base_url: str = IMAGE_BASE_URL,
        clock: Callable[[], float] = time.time,
    ):
        self.directory = Path(directory)
        self.base_url = base_url.rstrip("/")
        self.clock = clock

    def stored_name_for(self, original_name: str) -> str:
        # Only the final path component of the client filename is kept
        name = PurePath(original_name.replace("\\", "/")).name
        return f"{int(self.clock())}_{name}"

    def path_for(self, stored_name: str) -> Path:
        return self.directory / stored_name

    def url_for(self, stored_name: Optional[str]) -> Optional[str]:
        if not stored_name:
            return None
        return f"{self.base_url}/{stored_name}"

    def exists(self, stored_name: Optional[str]) -> bool:
        return bool(stored_name) and self.path_for(stored_name).is_file()

    def save(self, original_name: str, content: bytes) -> str:
        stored_name = self.stored_name_for(original_name)
        try:
            if not self.directory.exists():
                logger.info(
                    f"Product Service: Creating image directory '{self.directory}'."
                )
                os.makedirs(self.directory, mode=DIRECTORY_MODE, exist_ok=True)
            self.path_for(stored_name).write_bytes(content)
        except OSError as e:
            logger.error(
                f"Product Service: Could not save image '{original_name}' as '{stored_name}': {e}",
                exc_info=True,
            )
            raise ImageStorageError(f"Could not save image '{stored_name}'.") from e

        logger.info(
            f"Product Service: Saved image '{original_name}' as '{stored_name}' ({len(content)} bytes)."
        )
        return stored_name

    def delete(self, stored_name: Optional[str]) -> None:
        """Best-effort delete: a missing or empty name is a no-op."""
        if not self.exists(stored_name):
            return
        try:
            self.path_for(stored_name).unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            logger.error(
                f"Product Service: Could not delete image '{stored_name}': {e}",
                exc_info=True,
            )
            raise ImageStorageError(f"Could not delete image '{stored_name}'.") from e
        logger.info(f"Product Service: Deleted image '{stored_name}'.")


def get_image_store():
    return ImageStore(IMAGE_DIR)
