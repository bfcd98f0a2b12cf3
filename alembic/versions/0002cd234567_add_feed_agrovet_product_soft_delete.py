"""add feed, agrovet_product, account.business_name and soft delete for animal/crop

Revision ID: 0002cd234567
Revises: 0001ab123456
Create Date: 2026-10-19 12:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002cd234567"
down_revision: Union[str, None] = "0001ab123456"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.add_column("account", sa.Column("business_name", sa.String(), nullable=True))

    for table in ("animal", "crop"):
        op.add_column(table, sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()))
        op.create_index(op.f(f"ix_{table}_is_active"), table, ["is_active"], unique=False)

    op.create_table(
        "feed",
        *_base_columns(),
        sa.Column("farmer_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("feed_type", sa.String(), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False, server_default="0"),
        sa.Column("unit", sa.String(), nullable=False, server_default="kg"),
        sa.Column("minimum_stock", sa.Float(), nullable=False, server_default="0"),
        sa.Column("unit_cost", sa.Float(), nullable=True),
        sa.Column("supplier", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["farmer_id"], ["account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_feed_farmer_id"), "feed", ["farmer_id"], unique=False)
    op.create_index(op.f("ix_feed_feed_type"), "feed", ["feed_type"], unique=False)

    op.create_table(
        "agrovet_product",
        *_base_columns(),
        sa.Column("agrovet_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False, server_default="0"),
        sa.Column("unit", sa.String(), nullable=True),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.ForeignKeyConstraint(["agrovet_id"], ["account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_agrovet_product_agrovet_id"), "agrovet_product", ["agrovet_id"], unique=False)
    op.create_index(op.f("ix_agrovet_product_name"), "agrovet_product", ["name"], unique=False)
    op.create_index(op.f("ix_agrovet_product_is_available"), "agrovet_product", ["is_available"], unique=False)


def downgrade() -> None:
    op.drop_table("agrovet_product")
    op.drop_table("feed")
    for table in ("crop", "animal"):
        op.drop_index(op.f(f"ix_{table}_is_active"), table_name=table)
        op.drop_column(table, "is_active")
    op.drop_column("account", "business_name")
