"""create pantry and shopping list tables

Revision ID: 5c2e81d0b7a4
Revises:
Create Date: 2026-10-19 09:12:44.512093

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c2e81d0b7a4"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "product_category",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
    )

    op.create_table(
        "product",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("unit", sa.String(length=20), nullable=True),
        sa.Column(
            "category_id", sa.Integer(), sa.ForeignKey("product_category.id"), nullable=True
        ),
    )
    op.create_index(op.f("ix_product_id"), "product", ["id"], unique=False)
    op.create_index(op.f("ix_product_name"), "product", ["name"], unique=False)
    op.create_index(op.f("ix_product_category_id"), "product", ["category_id"], unique=False)

    op.create_table(
        "shopping_list",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("owner_id", sa.String(length=64), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_shopping_list_owner_id"), "shopping_list", ["owner_id"], unique=False)

    op.create_table(
        "product_on_list",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "shopping_list_id",
            sa.String(length=36),
            sa.ForeignKey("shopping_list.id"),
            nullable=False,
        ),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("product.id"), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("is_bought", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_product_on_list_id"), "product_on_list", ["id"], unique=False)
    op.create_index(
        op.f("ix_product_on_list_shopping_list_id"),
        "product_on_list",
        ["shopping_list_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_product_on_list_product_id"), "product_on_list", ["product_id"], unique=False
    )
    op.create_index(
        op.f("ix_product_on_list_is_bought"), "product_on_list", ["is_bought"], unique=False
    )

    # No unique constraint on (user_id, product_id): merging is done on write
    op.create_table(
        "pantry",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("product.id"), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_pantry_id"), "pantry", ["id"], unique=False)
    op.create_index(op.f("ix_pantry_user_id"), "pantry", ["user_id"], unique=False)
    op.create_index(op.f("ix_pantry_product_id"), "pantry", ["product_id"], unique=False)


def downgrade() -> None:
    op.drop_table("pantry")
    op.drop_table("product_on_list")
    op.drop_table("shopping_list")
    op.drop_table("product")
    op.drop_table("product_category")
