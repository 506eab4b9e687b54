# backend/product_service/app/uploads.py

import logging
import os
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile

from .config import MAX_IMAGE_SIZE_KB
from .exceptions import InvalidImageUpload

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png"}

JPEG_SIGNATURE = b"\xff\xd8\xff"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image: the client's original filename and the file bytes."""

    filename: str
    content: bytes


def _looks_like_image(content: bytes) -> bool:
    return content.startswith(JPEG_SIGNATURE) or content.startswith(PNG_SIGNATURE)


def read_image_upload(
    upload: Optional[UploadFile], max_size_kb: int = MAX_IMAGE_SIZE_KB
) -> Optional[ImageUpload]:
    """
    Turns a multipart file part into an ImageUpload.

    Returns None when no file was sent (browsers post an empty part with no
    filename for an untouched file input). Raises InvalidImageUpload when the
    file is not a jpg/jpeg/png or is larger than ``max_size_kb``.
    """
    if upload is None or not upload.filename:
        return None

    extension = os.path.splitext(upload.filename)[1].lower()
    if extension not in ALLOWED_IMAGE_EXTENSIONS:
        raise InvalidImageUpload("The image must be a file of type: jpg, png, jpeg.")

    max_bytes = max_size_kb * 1024
    # One byte past the limit is enough to reject an oversized file
    content = upload.file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise InvalidImageUpload(
            f"The image must not be greater than {max_size_kb} kilobytes."
        )
    if not _looks_like_image(content):
        raise InvalidImageUpload("The image must be an image.")

    logger.info(
        f"Product Service: Accepted image upload '{upload.filename}' ({len(content)} bytes)."
    )
    return ImageUpload(filename=upload.filename, content=content)
