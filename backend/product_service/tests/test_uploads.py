# backend/product_service/tests/test_uploads.py

import io

import pytest
from app.exceptions import InvalidImageUpload
from app.uploads import read_image_upload
from fastapi import UploadFile

from conftest import JPEG_BYTES, PNG_BYTES


def _upload(filename, content):
    return UploadFile(file=io.BytesIO(content), filename=filename)


def test_no_file_or_blank_filename_means_no_upload():
    assert read_image_upload(None) is None
    assert read_image_upload(_upload("", b"")) is None


def test_accepts_png_and_jpeg():
    png = read_image_upload(_upload("photo.PNG", PNG_BYTES))
    jpeg = read_image_upload(_upload("photo.jpeg", JPEG_BYTES))

    assert png.filename == "photo.PNG"
    assert png.content == PNG_BYTES
    assert jpeg.content == JPEG_BYTES


def test_oversized_upload_is_rejected_without_reading_it_all():
    upload = _upload("big.png", PNG_BYTES + b"\x00" * 10 * 1024)

    with pytest.raises(InvalidImageUpload):
        read_image_upload(upload, max_size_kb=1)

    # Only one byte past the limit was read
    assert upload.file.tell() == 1024 + 1


def test_upload_at_exact_limit_is_accepted():
    content = PNG_BYTES + b"\x00" * (1024 - len(PNG_BYTES))

    image = read_image_upload(_upload("exact.png", content), max_size_kb=1)

    assert len(image.content) == 1024


def test_rejects_wrong_extension():
    with pytest.raises(InvalidImageUpload):
        read_image_upload(_upload("photo.gif", PNG_BYTES))
