# backend/product_service/app/models.py

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from .db import Base


class Product(Base):
    __tablename__ = "products"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    product_name = Column(String(255), nullable=False)
    details = Column(Text, nullable=False)
    image = Column(String(512), nullable=True)  # stored filename, not a path
    size = Column(String(255), nullable=False)
    color = Column(String(255), nullable=False)
    category = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<Product(id={self.id}, product_name='{self.product_name}', image='{self.image or 'None'}')>"
