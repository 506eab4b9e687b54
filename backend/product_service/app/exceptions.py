# backend/product_service/app/exceptions.py


class ProductNotFound(Exception):
    """Raised when no product exists for the requested id."""

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found.")


class ImageStorageError(Exception):
    """Raised when an image file cannot be written to or removed from the asset area."""


class InvalidImageUpload(ValueError):
    """Raised when an uploaded image fails the type or size rules."""


class FormValidationError(Exception):
    """Raised when submitted product fields or the image upload are invalid."""

    def __init__(self, errors):
        self.errors = errors
        super().__init__("The given data was invalid.")
