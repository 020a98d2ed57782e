"""add recipe catalogue

Revision ID: 9f3d2a61c8e5
Revises: 5c2e81d0b7a4
Create Date: 2026-10-19 11:02:17.730214

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "9f3d2a61c8e5"
down_revision: str | None = "5c2e81d0b7a4"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "category",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
    )

    op.create_table(
        "recipe",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("prepare_time", sa.Integer(), nullable=False),
        sa.Column("visibility", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("steps_list", sa.JSON(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    )
    op.create_index(op.f("ix_recipe_user_id"), "recipe", ["user_id"], unique=False)

    op.create_table(
        "recipe_category",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("recipe_id", sa.String(length=36), sa.ForeignKey("recipe.id"), nullable=False),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("category.id"), nullable=False),
    )
    op.create_index(
        op.f("ix_recipe_category_recipe_id"), "recipe_category", ["recipe_id"], unique=False
    )
    op.create_index(
        op.f("ix_recipe_category_category_id"), "recipe_category", ["category_id"], unique=False
    )

    op.create_table(
        "product_in_recipe",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("recipe_id", sa.String(length=36), sa.ForeignKey("recipe.id"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("product.id"), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=True),
    )
    op.create_index(
        op.f("ix_product_in_recipe_recipe_id"), "product_in_recipe", ["recipe_id"], unique=False
    )
    op.create_index(
        op.f("ix_product_in_recipe_product_id"), "product_in_recipe", ["product_id"], unique=False
    )

    op.create_table(
        "favorite_recipe",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("recipe_id", sa.String(length=36), sa.ForeignKey("recipe.id"), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.UniqueConstraint("user_id", "recipe_id", name="uq_favorite_recipe_user"),
    )
    op.create_index(
        op.f("ix_favorite_recipe_user_id"), "favorite_recipe", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_favorite_recipe_recipe_id"), "favorite_recipe", ["recipe_id"], unique=False
    )


def downgrade() -> None:
    op.drop_table("favorite_recipe")
    op.drop_table("product_in_recipe")
    op.drop_table("recipe_category")
    op.drop_table("recipe")
    op.drop_table("category")
