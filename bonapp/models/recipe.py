"""Recipe catalogue models."""

import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from bonapp.database import Base
from bonapp.models.mixins import TimestampMixin


def _new_recipe_id() -> str:
    return str(uuid.uuid4())


class RecipeCategory(Base):
    """Recipe category (breakfast, soups, ...)."""

    __tablename__ = "category"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)


class Recipe(Base, TimestampMixin):
    """Recipe model for storing recipe definitions."""

    __tablename__ = "recipe"

    id = Column(String(36), primary_key=True, default=_new_recipe_id)
    user_id = Column(String(64), nullable=False, index=True)  # author
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    prepare_time = Column(Integer, nullable=False)  # minutes
    visibility = Column(Boolean, nullable=False, default=False)  # public when true
    steps_list = Column(JSON, nullable=False)  # [{"order", "instruction"}]

    ingredients = relationship("ProductInRecipe", back_populates="recipe")


class RecipeCategoryLink(Base):
    """Many-to-many link between recipes and categories."""

    __tablename__ = "recipe_category"

    id = Column(Integer, primary_key=True)
    recipe_id = Column(String(36), ForeignKey("recipe.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("category.id"), nullable=False, index=True)


class ProductInRecipe(Base):
    """Ingredient within a recipe."""

    __tablename__ = "product_in_recipe"

    id = Column(Integer, primary_key=True)
    recipe_id = Column(String(36), ForeignKey("recipe.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=False, index=True)
    quantity = Column(Float, nullable=True)

    recipe = relationship("Recipe", back_populates="ingredients")
    product = relationship("Product")


class FavoriteRecipe(Base, TimestampMixin):
    """A recipe bookmarked by a user."""

    __tablename__ = "favorite_recipe"
    __table_args__ = (UniqueConstraint("user_id", "recipe_id", name="uq_favorite_recipe_user"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    recipe_id = Column(String(36), ForeignKey("recipe.id"), nullable=False, index=True)
