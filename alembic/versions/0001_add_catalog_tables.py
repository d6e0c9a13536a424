"""add catalog tables

Revision ID: 0001
Revises: None
Create Date: 2026-10-19 00:00:00.000000

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("unique_id", sa.String(length=255), nullable=False, unique=True),
        sa.Column("master_code", sa.String(length=100), nullable=True),
        sa.Column("item_code", sa.String(length=100), nullable=True),
        sa.Column("item_name", sa.String(length=255), nullable=True),
        sa.Column("kind_name", sa.String(length=255), nullable=True),
        sa.Column("group_name", sa.String(length=255), nullable=True),
        sa.Column("category", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(length=100), nullable=True),
        sa.Column("size", sa.String(length=50), nullable=True),
        sa.Column("out_price", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("av_price", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("cur_qty", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("images", sa.Text(), nullable=True),
        sa.Column("stor_id", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("type_id", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("unit_name", sa.String(length=50), nullable=True),
        sa.Column("class_name", sa.String(length=255), nullable=True),
        sa.Column("place_name", sa.String(length=255), nullable=True),
        sa.Column("unit_convert", sa.Float(), nullable=False, server_default=sa.text("1.0")),
        sa.Column("is_basic_unit", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_products_master_code", "products", ["master_code"])
    op.create_index("ix_products_item_name", "products", ["item_name"])

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("kind", sa.String(length=100), nullable=True),
        sa.Column("sub", sa.String(length=255), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("categories")
    op.drop_index("ix_products_item_name", table_name="products")
    op.drop_index("ix_products_master_code", table_name="products")
    op.drop_table("products")
