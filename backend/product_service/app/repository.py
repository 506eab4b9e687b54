# backend/product_service/app/repository.py

import logging
from typing import List

from sqlalchemy.orm import Session

from .exceptions import ProductNotFound
from .models import Product

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = ("product_name", "details", "image", "size", "color", "category")


class ProductRepository:
    """CRUD persistence for Product rows, one session per request."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str):
        try:
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Product Service: Error {action}: {e}", exc_info=True)
            raise

    def create(self, fields: dict) -> Product:
        product = Product(**{key: fields[key] for key in PRODUCT_FIELDS})
        self.db.add(product)
        self._commit("creating product")
        self.db.refresh(product)
        logger.info(
            f"Product Service: Product '{product.product_name}' (ID: {product.id}) created successfully."
        )
        return product

    def find_by_id(self, product_id: int) -> Product:
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if product is None:
            logger.warning(f"Product Service: Product with ID {product_id} not found.")
            raise ProductNotFound(product_id)
        return product

    def update(self, product_id: int, fields: dict) -> Product:
        """Overwrite every product field with the values in ``fields``."""
        product = self.find_by_id(product_id)
        for key in PRODUCT_FIELDS:
            setattr(product, key, fields[key])
        self.db.add(product)
        self._commit(f"updating product {product_id}")
        self.db.refresh(product)
        logger.info(f"Product Service: Product {product_id} updated successfully.")
        return product

    def delete(self, product_id: int) -> None:
        product = self.find_by_id(product_id)
        self.db.delete(product)
        self._commit(f"deleting product {product_id}")
        logger.info(
            f"Product Service: Product {product_id} deleted successfully. Name: {product.product_name}"
        )

    def list_newest_first(self) -> List[Product]:
        products = (
            self.db.query(Product)
            .order_by(Product.created_at.desc(), Product.id.desc())
            .all()
        )
        logger.info(f"Product Service: Retrieved {len(products)} products.")
        return products
