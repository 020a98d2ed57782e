"""Product catalogue models."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from bonapp.database import Base


class ProductCategory(Base):
    """Category used to group products (dairy, vegetables, ...)."""

    __tablename__ = "product_category"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)

    products = relationship("Product", back_populates="category")


class Product(Base):
    """A product that can be put on a shopping list or stocked in the pantry."""

    __tablename__ = "product"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    unit = Column(String(20), nullable=True)  # "g", "ml", "szt", ...
    category_id = Column(Integer, ForeignKey("product_category.id"), nullable=True, index=True)

    category = relationship("ProductCategory", back_populates="products")
