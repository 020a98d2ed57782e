"""Pantry entry model for tracking household stock."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from bonapp.database import Base
from bonapp.models.mixins import TimestampMixin


class PantryEntry(Base, TimestampMixin):
    """Per-owner, per-product quantity record.

    One entry per (user_id, product_id) is kept by read-before-write merging
    in the services, not by a unique constraint.
    """

    __tablename__ = "pantry"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=False, index=True)
    quantity = Column(Float, nullable=False, default=0.0)

    product = relationship("Product")
