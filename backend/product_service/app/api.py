# backend/product_service/app/api.py

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from .exceptions import FormValidationError, ProductNotFound
from .forms import parse_product_form
from .models import Product
from .schemas import (
    MessageEnvelope,
    ProductCreate,
    ProductDataEnvelope,
    ProductListEnvelope,
    ProductMessageEnvelope,
    ProductResponse,
    ProductUpdate,
    ValidationErrorEnvelope,
)
from .services import ProductService, get_product_service


router = APIRouter(prefix="/api/products", tags=["products-api"])

NOT_FOUND_RESPONSE = {
    status.HTTP_404_NOT_FOUND: {"model": MessageEnvelope},
}
INVALID_RESPONSE = {
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ValidationErrorEnvelope},
}


def _not_found() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"status": False, "message": "Product Not Found"},
    )


def _invalid(exc: FormValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ValidationErrorEnvelope(errors=exc.errors).model_dump(),
    )


def _parse_product_id(raw: str) -> int:
    # Any id that is not an integer cannot match a row
    try:
        return int(raw)
    except ValueError:
        raise ProductNotFound(raw)


def to_response(product: Product, service: ProductService) -> ProductResponse:
    response = ProductResponse.model_validate(product)
    response.image_url = service.images.url_for(product.image)
    return response


@router.get("", response_model=ProductListEnvelope, summary="List products, newest first")
def api_list_products(service: ProductService = Depends(get_product_service)):
    products = service.list_products()
    return ProductListEnvelope(data=[to_response(p, service) for p in products])


@router.post(
    "",
    response_model=ProductMessageEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=INVALID_RESPONSE,
    summary="Create a product with an optional image",
)
def api_create_product(
    product_name: Optional[str] = Form(None),
    details: Optional[str] = Form(None),
    size: Optional[str] = Form(None),
    color: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: ProductService = Depends(get_product_service),
):
    fields = {
        "product_name": product_name,
        "details": details,
        "size": size,
        "color": color,
        "category": category,
    }
    try:
        data, upload = parse_product_form(ProductCreate, fields, image)
    except FormValidationError as e:
        return _invalid(e)

    product = service.create_product(data, upload)
    return ProductMessageEnvelope(
        message="Product Created Successfully", data=to_response(product, service)
    )


@router.get(
    "/{product_id}",
    response_model=ProductDataEnvelope,
    responses=NOT_FOUND_RESPONSE,
    summary="Retrieve a single product by ID",
)
def api_show_product(
    product_id: str, service: ProductService = Depends(get_product_service)
):
    try:
        product = service.get_product(_parse_product_id(product_id))
    except ProductNotFound:
        return _not_found()
    return ProductDataEnvelope(data=to_response(product, service))


@router.api_route(
    "/{product_id}",
    methods=["POST", "PUT"],
    response_model=ProductMessageEnvelope,
    responses={**NOT_FOUND_RESPONSE, **INVALID_RESPONSE},
    summary="Update a product; omitted fields keep their current value",
)
def api_update_product(
    product_id: str,
    product_name: Optional[str] = Form(None),
    details: Optional[str] = Form(None),
    size: Optional[str] = Form(None),
    color: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: ProductService = Depends(get_product_service),
):
    fields = {
        "product_name": product_name,
        "details": details,
        "size": size,
        "color": color,
        "category": category,
    }
    try:
        product_id = _parse_product_id(product_id)
        service.get_product(product_id)
        changes, upload = parse_product_form(
            ProductUpdate, fields, image, drop_blank=True
        )
        product = service.update_product(product_id, changes, upload)
    except ProductNotFound:
        return _not_found()
    except FormValidationError as e:
        return _invalid(e)

    return ProductMessageEnvelope(
        message="Product Updated Successfully", data=to_response(product, service)
    )


@router.delete(
    "/{product_id}",
    response_model=MessageEnvelope,
    responses=NOT_FOUND_RESPONSE,
    summary="Delete a product and its image",
)
def api_delete_product(
    product_id: str, service: ProductService = Depends(get_product_service)
):
    try:
        service.delete_product(_parse_product_id(product_id))
    except ProductNotFound:
        return _not_found()
    return MessageEnvelope(status=True, message="Product Deleted Successfully")
