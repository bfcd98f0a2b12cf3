"""initial schema: account, farm, animal, crop, sale, contact, health_record

Revision ID: 0001ab123456
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001ab123456"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "account",
        *_base_columns(),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("role", sa.String(length=7), nullable=False, server_default="farmer"),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("clinic_name", sa.String(), nullable=True),
        sa.Column("specialization", sa.String(), nullable=True),
        sa.Column("license_number", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_account_email"),
        sa.CheckConstraint("role IN ('farmer', 'vet', 'agrovet', 'admin')", name="ck_account_role"),
    )
    op.create_index(op.f("ix_account_email"), "account", ["email"], unique=False)
    op.create_index(op.f("ix_account_role"), "account", ["role"], unique=False)

    op.create_table(
        "farm",
        *_base_columns(),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("area_hectares", sa.Float(), nullable=True),
        sa.Column("farm_type", sa.String(length=9), nullable=False, server_default="mixed"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.ForeignKeyConstraint(["owner_id"], ["account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_farm_owner_id"), "farm", ["owner_id"], unique=False)
    op.create_index(op.f("ix_farm_name"), "farm", ["name"], unique=False)
    op.create_index(op.f("ix_farm_is_active"), "farm", ["is_active"], unique=False)

    op.create_table(
        "animal",
        *_base_columns(),
        sa.Column("farm_id", sa.Uuid(), nullable=False),
        sa.Column("tag_number", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("species", sa.String(), nullable=False),
        sa.Column("breed", sa.String(), nullable=True),
        sa.Column("sex", sa.String(), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("weight_kg", sa.Float(), nullable=True),
        sa.Column("health_status", sa.String(), nullable=False, server_default="healthy"),
        sa.Column("notes", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["farm_id"], ["farm.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_animal_farm_id"), "animal", ["farm_id"], unique=False)
    op.create_index(op.f("ix_animal_tag_number"), "animal", ["tag_number"], unique=False)

    op.create_table(
        "crop",
        *_base_columns(),
        sa.Column("farm_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("variety", sa.String(), nullable=True),
        sa.Column("area_hectares", sa.Float(), nullable=True),
        sa.Column("planting_date", sa.Date(), nullable=True),
        sa.Column("expected_harvest_date", sa.Date(), nullable=True),
        sa.Column("actual_harvest_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=9), nullable=False, server_default="planted"),
        sa.Column("notes", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["farm_id"], ["farm.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_crop_farm_id"), "crop", ["farm_id"], unique=False)
    op.create_index(op.f("ix_crop_name"), "crop", ["name"], unique=False)
    op.create_index(op.f("ix_crop_status"), "crop", ["status"], unique=False)

    op.create_table(
        "sale",
        *_base_columns(),
        sa.Column("farmer_id", sa.Uuid(), nullable=False),
        sa.Column("customer_name", sa.String(), nullable=False),
        sa.Column("product", sa.String(), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(), nullable=True),
        sa.Column("unit_price", sa.Float(), nullable=False),
        sa.Column("total_amount", sa.Float(), nullable=False),
        sa.Column("amount_paid", sa.Float(), nullable=False, server_default="0"),
        sa.Column("amount_pending", sa.Float(), nullable=False, server_default="0"),
        sa.Column("payment_status", sa.String(length=7), nullable=False, server_default="pending"),
        sa.Column("sale_date", sa.Date(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["farmer_id"], ["account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sale_farmer_id"), "sale", ["farmer_id"], unique=False)
    op.create_index(op.f("ix_sale_payment_status"), "sale", ["payment_status"], unique=False)

    op.create_table(
        "contact",
        *_base_columns(),
        sa.Column("account_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("contact_type", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["account_id"], ["account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_contact_account_id"), "contact", ["account_id"], unique=False)
    op.create_index(op.f("ix_contact_contact_type"), "contact", ["contact_type"], unique=False)

    op.create_table(
        "health_record",
        *_base_columns(),
        sa.Column("farmer_id", sa.Uuid(), nullable=False),
        sa.Column("animal_id", sa.Uuid(), nullable=False),
        sa.Column("vet_id", sa.Uuid(), nullable=True),
        sa.Column("record_type", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("treatment", sa.String(), nullable=True),
        sa.Column("record_date", sa.Date(), nullable=False),
        sa.Column("next_due_date", sa.Date(), nullable=True),
        sa.Column("cost", sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(["farmer_id"], ["account.id"]),
        sa.ForeignKeyConstraint(["animal_id"], ["animal.id"]),
        sa.ForeignKeyConstraint(["vet_id"], ["account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_health_record_farmer_id"), "health_record", ["farmer_id"], unique=False)
    op.create_index(op.f("ix_health_record_animal_id"), "health_record", ["animal_id"], unique=False)
    op.create_index(op.f("ix_health_record_vet_id"), "health_record", ["vet_id"], unique=False)
    op.create_index(op.f("ix_health_record_record_type"), "health_record", ["record_type"], unique=False)
    op.create_index(op.f("ix_health_record_next_due_date"), "health_record", ["next_due_date"], unique=False)


def downgrade() -> None:
    op.drop_table("health_record")
    op.drop_table("contact")
    op.drop_table("sale")
    op.drop_table("crop")
    op.drop_table("animal")
    op.drop_table("farm")
    op.drop_table("account")
