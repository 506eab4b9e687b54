# backend/product_service/app/forms.py

import logging
from typing import Dict, Optional, Tuple, Type

from fastapi import UploadFile
from pydantic import BaseModel, ValidationError

from .exceptions import FormValidationError, InvalidImageUpload
from .schemas import validation_errors
from .uploads import ImageUpload, read_image_upload

logger = logging.getLogger(__name__)


def parse_product_form(
    model: Type[BaseModel],
    fields: Dict[str, Optional[str]],
    upload: Optional[UploadFile] = None,
    drop_blank: bool = False,
) -> Tuple[BaseModel, Optional[ImageUpload]]:
    """
    Validates submitted form fields against ``model`` and reads the optional
    image upload. Every failing field is collected before FormValidationError
    is raised, so the caller can report them all at once.

    With ``drop_blank`` empty strings are treated like missing fields, which is
    how partial updates leave a value unchanged.
    """
    submitted = {
        key: value
        for key, value in fields.items()
        if value is not None and not (drop_blank and value.strip() == "")
    }
    errors = {}
    data = None
    try:
        data = model.model_validate(submitted)
    except ValidationError as e:
        errors.update(validation_errors(e))

    image = None
    try:
        image = read_image_upload(upload)
    except InvalidImageUpload as e:
        errors["image"] = [str(e)]

    if errors:
        logger.warning(f"Product Service: Rejected product form: {errors}")
        raise FormValidationError(errors)
    return data, image
