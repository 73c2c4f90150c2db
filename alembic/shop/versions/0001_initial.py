"""initial shop schema

Revision ID: 0001_shop
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_shop"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=254), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("purchase_value_cents", sa.Integer(), nullable=False),
        sa.Column("purchase_count", sa.Integer(), nullable=False),
        sa.Column("payment_ids", sa.Text(), nullable=False),
        sa.Column("date_created", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_customers_email", "customers", ["email"])
    op.create_index("ux_customers_email_lower", "customers", [sa.text("lower(email)")], unique=True)
    op.create_index("ix_customers_user_id", "customers", ["user_id"])

    op.create_table(
        "payments",
        sa.Column("payment_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("payment_id"),
    )
    op.create_index("ix_payments_status", "payments", ["status"])

    op.create_table(
        "payment_meta",
        sa.Column("meta_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("payment_id", sa.Integer(), nullable=False),
        sa.Column("meta_key", sa.String(), nullable=False),
        sa.Column("meta_value", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("meta_id"),
        sa.UniqueConstraint("payment_id", "meta_key", name="uq_payment_meta_key"),
    )
    op.create_index("ix_payment_meta_payment_id", "payment_meta", ["payment_id"])
    op.create_index("ix_payment_meta_meta_key", "payment_meta", ["meta_key"])


def downgrade() -> None:
    op.drop_index("ix_payment_meta_meta_key", table_name="payment_meta")
    op.drop_index("ix_payment_meta_payment_id", table_name="payment_meta")
    op.drop_table("payment_meta")
    op.drop_index("ix_payments_status", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_customers_user_id", table_name="customers")
    op.drop_index("ux_customers_email_lower", table_name="customers")
    op.drop_index("ix_customers_email", table_name="customers")
    op.drop_table("customers")
