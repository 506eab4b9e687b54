# backend/product_service/app/services.py

import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from .db import get_db
from .models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductUpdate
from .storage import ImageStore, get_image_store
from .uploads import ImageUpload

logger = logging.getLogger(__name__)


class ProductService:
    """
    Create, update and delete products while keeping each row's ``image``
    consistent with the files in the image store.

    File operations run before the row is written and are never rolled back:
    if the database write fails after an image was saved, the file is left
    behind as an orphan.
    """

    def __init__(self, repository: ProductRepository, images: ImageStore):
        self.repository = repository
        self.images = images

    def list_products(self) -> List[Product]:
        return self.repository.list_newest_first()

    def get_product(self, product_id: int) -> Product:
        return self.repository.find_by_id(product_id)

    def create_product(
        self, data: ProductCreate, upload: Optional[ImageUpload] = None
    ) -> Product:
        logger.info(f"Product Service: Creating product: {data.product_name}")
        image_name = None
        if upload is not None:
            image_name = self.images.save(upload.filename, upload.content)

        fields = data.model_dump()
        fields["image"] = image_name
        return self.repository.create(fields)

    def update_product(
        self,
        product_id: int,
        changes: ProductUpdate,
        upload: Optional[ImageUpload] = None,
    ) -> Product:
        specified = changes.specified()
        logger.info(
            f"Product Service: Updating product with ID: {product_id} with data: {specified}"
        )
        product = self.repository.find_by_id(product_id)

        fields = {
            "product_name": product.product_name,
            "details": product.details,
            "image": product.image,
            "size": product.size,
            "color": product.color,
            "category": product.category,
        }
        fields.update(specified)

        if upload is not None:
            self.images.delete(product.image)
            fields["image"] = self.images.save(upload.filename, upload.content)

        return self.repository.update(product_id, fields)

    def delete_product(self, product_id: int) -> None:
        logger.info(f"Product Service: Attempting to delete product with ID: {product_id}")
        product = self.repository.find_by_id(product_id)
        if product.image:
            self.images.delete(product.image)
        self.repository.delete(product_id)


def get_product_service(
    db: Session = Depends(get_db), images: ImageStore = Depends(get_image_store)
) -> ProductService:
    return ProductService(ProductRepository(db), images)
