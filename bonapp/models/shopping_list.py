"""Shopping list models."""

import uuid

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from bonapp.database import Base
from bonapp.models.mixins import TimestampMixin


def _new_list_id() -> str:
    return str(uuid.uuid4())


class ShoppingList(Base, TimestampMixin):
    """A named shopping list owned by one user."""

    __tablename__ = "shopping_list"

    id = Column(String(36), primary_key=True, default=_new_list_id)
    name = Column(String(255), nullable=False)
    owner_id = Column(String(64), nullable=False, index=True)  # identity provider "sub"

    items = relationship("ProductOnList", back_populates="shopping_list")


class ProductOnList(Base, TimestampMixin):
    """Raw shopping list line item.

    Several rows may reference the same product on one list; they are merged
    when the list is displayed.
    """

    __tablename__ = "product_on_list"

    id = Column(Integer, primary_key=True, index=True)
    shopping_list_id = Column(
        String(36), ForeignKey("shopping_list.id"), nullable=False, index=True
    )
    product_id = Column(Integer, ForeignKey("product.id"), nullable=False, index=True)
    quantity = Column(Float, nullable=False)
    is_bought = Column(Boolean, nullable=False, default=False, index=True)

    shopping_list = relationship("ShoppingList", back_populates="items")
    product = relationship("Product")
