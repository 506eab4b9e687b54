# backend/product_service/app/views.py

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from .exceptions import FormValidationError, ProductNotFound
from .forms import parse_product_form
from .schemas import ProductCreate, ProductUpdate
from .services import ProductService, get_product_service


templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

router = APIRouter(prefix="/products", tags=["products-web"], include_in_schema=False)


def _redirect_to_index(request: Request, message: str) -> RedirectResponse:
    url = request.url_for("products_index").include_query_params(success=message)
    return RedirectResponse(url=str(url), status_code=status.HTTP_303_SEE_OTHER)


def _find_or_404(service: ProductService, product_id: int):
    try:
        return service.get_product(product_id)
    except ProductNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
        )


@router.get("", response_class=HTMLResponse, name="products_index")
def index(request: Request, service: ProductService = Depends(get_product_service)):
    products = service.list_products()
    return templates.TemplateResponse(
        request,
        "products/index.html",
        {
            "products": products,
            "images": service.images,
            "success": request.query_params.get("success"),
        },
    )


@router.get("/new", response_class=HTMLResponse, name="products_create")
def create_form(request: Request):
    return templates.TemplateResponse(
        request, "products/create.html", {"errors": {}, "old": {}}
    )


@router.post("", response_class=HTMLResponse, name="products_store")
def store(
    request: Request,
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
        return templates.TemplateResponse(
            request,
            "products/create.html",
            {"errors": e.errors, "old": fields},
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    service.create_product(data, upload)
    return _redirect_to_index(request, "Product Created Successfully")


@router.get("/{product_id}/edit", response_class=HTMLResponse, name="products_edit")
def edit_form(
    request: Request,
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    product = _find_or_404(service, product_id)
    return templates.TemplateResponse(
        request,
        "products/edit.html",
        {"product": product, "images": service.images, "errors": {}, "old": {}},
    )


@router.api_route(
    "/{product_id}",
    methods=["POST", "PUT"],
    response_class=HTMLResponse,
    name="products_update",
)
def update(
    request: Request,
    product_id: int,
    product_name: Optional[str] = Form(None),
    details: Optional[str] = Form(None),
    size: Optional[str] = Form(None),
    color: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: ProductService = Depends(get_product_service),
):
    product = _find_or_404(service, product_id)
    fields = {
        "product_name": product_name,
        "details": details,
        "size": size,
        "color": color,
        "category": category,
    }
    # The edit form always posts every field back, so it is validated in full
    try:
        data, upload = parse_product_form(ProductCreate, fields, image)
    except FormValidationError as e:
        return templates.TemplateResponse(
            request,
            "products/edit.html",
            {
                "product": product,
                "images": service.images,
                "errors": e.errors,
                "old": fields,
            },
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    service.update_product(product_id, ProductUpdate(**data.model_dump()), upload)
    return _redirect_to_index(request, "Product Updated Successfully")


def _destroy(request: Request, product_id: int, service: ProductService):
    try:
        service.delete_product(product_id)
    except ProductNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
        )
    return _redirect_to_index(request, "Product Deleted Successfully")


@router.delete("/{product_id}", name="products_destroy")
def destroy(
    request: Request,
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    return _destroy(request, product_id, service)


@router.post("/{product_id}/delete", name="products_destroy_form")
def destroy_from_form(
    request: Request,
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    return _destroy(request, product_id, service)
