"""create dashboard tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "master_data_values",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("field_name", sa.String(length=64), nullable=False),
        sa.Column("value", sa.String(length=255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("field_name", "value", name="uq_master_data_values_field_value"),
    )
    op.create_index("ix_master_data_values_field_name", "master_data_values", ["field_name"], unique=False)

    op.create_table(
        "chat_log_entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("date", sa.String(length=16), nullable=False),
        sa.Column("shift", sa.String(length=64), nullable=False),
        sa.Column("cs", sa.String(length=120), nullable=False),
        sa.Column("channel", sa.String(length=120), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("cust", sa.String(length=255), nullable=False),
        sa.Column("order_number", sa.String(length=120), nullable=False),
        sa.Column("intention", sa.String(length=120), nullable=False),
        sa.Column("case", sa.String(length=120), nullable=False),
        sa.Column("product_name", sa.String(length=255), nullable=False),
        sa.Column("closing_status", sa.String(length=64), nullable=False),
        sa.Column("note", sa.Text(), nullable=False),
        sa.Column("chat_status", sa.String(length=120), nullable=False),
        sa.Column("chat_status2", sa.String(length=120), nullable=False),
        sa.Column("follow_up", sa.String(length=120), nullable=False),
        sa.Column("survey", sa.String(length=8), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_chat_log_entries_channel", "chat_log_entries", ["channel"], unique=False)
    op.create_index("ix_chat_log_entries_cs", "chat_log_entries", ["cs"], unique=False)

    op.create_table(
        "stock_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sku", sa.String(length=120), nullable=False),
        sa.Column("product_name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=120), nullable=False),
        sa.Column("grade", sa.String(length=32), nullable=False),
        sa.Column("hpp", sa.String(length=32), nullable=False),
        sa.Column("hpj", sa.String(length=32), nullable=False),
        sa.Column("hpt", sa.String(length=32), nullable=False),
        sa.Column("artikel", sa.String(length=255), nullable=False),
        sa.Column("image_url", sa.String(length=1024), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("sku", name="uq_stock_items_sku"),
    )

    op.create_table(
        "warranty_claims",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("created_at", sa.String(length=64), nullable=False),
        sa.Column("channel", sa.String(length=120), nullable=False),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=False),
        sa.Column("order_number", sa.String(length=120), nullable=False),
        sa.Column("product_name", sa.String(length=255), nullable=False),
        sa.Column("serial_number", sa.String(length=120), nullable=False),
        sa.Column("status", sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_warranty_claims_channel", "warranty_claims", ["channel"], unique=False)

    op.create_table(
        "store_visits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("date", sa.String(length=16), nullable=False),
        sa.Column("taft_name", sa.String(length=120), nullable=False),
        sa.Column("store", sa.String(length=120), nullable=False),
        sa.Column("visitor", sa.String(length=16), nullable=False),
        sa.Column("intensi", sa.String(length=120), nullable=False),
        sa.Column("case", sa.String(length=120), nullable=False),
        sa.Column("product_name", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=64), nullable=False),
        sa.Column("reason", sa.String(length=255), nullable=False),
        sa.Column("ket", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_store_visits_store", "store_visits", ["store"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_store_visits_store", table_name="store_visits")
    op.drop_table("store_visits")
    op.drop_index("ix_warranty_claims_channel", table_name="warranty_claims")
    op.drop_table("warranty_claims")
    op.drop_table("stock_items")
    op.drop_index("ix_chat_log_entries_cs", table_name="chat_log_entries")
    op.drop_index("ix_chat_log_entries_channel", table_name="chat_log_entries")
    op.drop_table("chat_log_entries")
    op.drop_index("ix_master_data_values_field_name", table_name="master_data_values")
    op.drop_table("master_data_values")
