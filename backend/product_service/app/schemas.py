# backend/product_service/app/schemas.py

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ProductBase(BaseModel):
    # Surrounding whitespace is trimmed before length checks
    model_config = ConfigDict(str_strip_whitespace=True)

    product_name: str = Field(..., min_length=3, max_length=255)
    details: str = Field(..., min_length=10)
    size: str = Field(..., min_length=1)
    color: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    """
    Partial update. A field left unset (or None) keeps the stored value;
    a concrete value replaces it.
    """

    product_name: Optional[str] = Field(None, min_length=3, max_length=255)
    details: Optional[str] = Field(None, min_length=10)
    size: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)

    def specified(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ProductResponse(ProductBase):
    id: int
    image: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProductListEnvelope(BaseModel):
    status: bool = True
    data: List[ProductResponse]


class ProductDataEnvelope(BaseModel):
    status: bool = True
    data: ProductResponse


class ProductMessageEnvelope(BaseModel):
    status: bool = True
    message: str
    data: ProductResponse


class MessageEnvelope(BaseModel):
    status: bool
    message: str


class ValidationErrorEnvelope(MessageEnvelope):
    status: bool = False
    message: str = "The given data was invalid."
    errors: Dict[str, List[str]]


def validation_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Group pydantic error messages by field name."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        errors.setdefault(field, []).append(error["msg"])
    return errors
