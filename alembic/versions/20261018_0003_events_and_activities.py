"""procurements, sales, dispatches and activities

Revision ID: 20261018_0003
Revises: 20261018_0002
Create Date: 2026-10-18 10:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261018_0003"
down_revision: Union[str, Sequence[str], None] = "20261018_0002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    sale_status_enum = sa.Enum("PENDING", "COMPLETED", "REJECTED", name="sale_status")
    dispatch_status_enum = sa.Enum("PENDING", "COMPLETED", "REJECTED", name="dispatch_status")

    bind = op.get_bind()
    sale_status_enum.create(bind, checkfirst=True)
    dispatch_status_enum.create(bind, checkfirst=True)

    op.create_table(
        "procurements",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("procured_on", sa.Date(), nullable=False),
        sa.Column("farmer_id", sa.Integer(), nullable=True),
        sa.Column("farmer_name", sa.String(length=160), nullable=False),
        sa.Column("farmer_mobile_number", sa.String(length=10), nullable=False),
        sa.Column("farmer_village_name", sa.String(length=120), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("product_name", sa.String(length=160), nullable=False),
        sa.Column("quantity", sa.Numeric(precision=14, scale=3), nullable=False),
        sa.Column("rate", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("amount", sa.Numeric(precision=16, scale=2), nullable=False),
        sa.Column("cooperative_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["cooperative_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["farmer_id"], ["farmers.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_procurements_cooperative_id"), "procurements", ["cooperative_id"], unique=False)
    op.create_index(op.f("ix_procurements_farmer_id"), "procurements", ["farmer_id"], unique=False)
    op.create_index(op.f("ix_procurements_id"), "procurements", ["id"], unique=False)
    op.create_index(op.f("ix_procurements_procured_on"), "procurements", ["procured_on"], unique=False)
    op.create_index(op.f("ix_procurements_product_id"), "procurements", ["product_id"], unique=False)

    op.create_table(
        "sales",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("sold_on", sa.Date(), nullable=False),
        sa.Column("sold_time", sa.Time(), nullable=False),
        sa.Column("cooperative_id", sa.Integer(), nullable=False),
        sa.Column("cooperative_name", sa.String(length=160), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("product_name", sa.String(length=160), nullable=False),
        sa.Column("quantity", sa.Numeric(precision=14, scale=3), nullable=False),
        sa.Column("rate", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("amount", sa.Numeric(precision=16, scale=2), nullable=False),
        sa.Column("status", sale_status_enum, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["cooperative_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sales_cooperative_id"), "sales", ["cooperative_id"], unique=False)
    op.create_index(op.f("ix_sales_id"), "sales", ["id"], unique=False)
    op.create_index(op.f("ix_sales_product_id"), "sales", ["product_id"], unique=False)
    op.create_index(op.f("ix_sales_sold_on"), "sales", ["sold_on"], unique=False)
    op.create_index(op.f("ix_sales_status"), "sales", ["status"], unique=False)

    op.create_table(
        "dispatches",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("dispatched_on", sa.Date(), nullable=False),
        sa.Column("cooperative_id", sa.Integer(), nullable=False),
        sa.Column("cooperative_name", sa.String(length=160), nullable=False),
        sa.Column("retailer_id", sa.Integer(), nullable=False),
        sa.Column("retailer_name", sa.String(length=160), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("product_name", sa.String(length=160), nullable=False),
        sa.Column("quantity", sa.Numeric(precision=14, scale=3), nullable=False),
        sa.Column("rate", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("amount", sa.Numeric(precision=16, scale=2), nullable=False),
        sa.Column("status", dispatch_status_enum, nullable=False),
        sa.Column("lot_threshold", sa.Numeric(precision=14, scale=3), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["cooperative_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"]),
        sa.ForeignKeyConstraint(["retailer_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_dispatches_cooperative_id"), "dispatches", ["cooperative_id"], unique=False)
    op.create_index(op.f("ix_dispatches_dispatched_on"), "dispatches", ["dispatched_on"], unique=False)
    op.create_index(op.f("ix_dispatches_id"), "dispatches", ["id"], unique=False)
    op.create_index(op.f("ix_dispatches_product_id"), "dispatches", ["product_id"], unique=False)
    op.create_index(op.f("ix_dispatches_retailer_id"), "dispatches", ["retailer_id"], unique=False)
    op.create_index(op.f("ix_dispatches_status"), "dispatches", ["status"], unique=False)

    op.create_table(
        "activities",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("activity_date", sa.Date(), nullable=False),
        sa.Column("activity_time", sa.Time(), nullable=False),
        sa.Column("type", sa.String(length=40), nullable=False),
        sa.Column("quantity", sa.Numeric(precision=14, scale=3), nullable=False),
        sa.Column("product_name", sa.String(length=160), nullable=False),
        sa.Column("cooperative_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["cooperative_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_activities_activity_date"), "activities", ["activity_date"], unique=False)
    op.create_index(op.f("ix_activities_cooperative_id"), "activities", ["cooperative_id"], unique=False)
    op.create_index(op.f("ix_activities_created_at"), "activities", ["created_at"], unique=False)
    op.create_index(op.f("ix_activities_id"), "activities", ["id"], unique=False)
    op.create_index(op.f("ix_activities_type"), "activities", ["type"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_activities_type"), table_name="activities")
    op.drop_index(op.f("ix_activities_id"), table_name="activities")
    op.drop_index(op.f("ix_activities_created_at"), table_name="activities")
    op.drop_index(op.f("ix_activities_cooperative_id"), table_name="activities")
    op.drop_index(op.f("ix_activities_activity_date"), table_name="activities")
    op.drop_table("activities")

    op.drop_index(op.f("ix_dispatches_status"), table_name="dispatches")
    op.drop_index(op.f("ix_dispatches_retailer_id"), table_name="dispatches")
    op.drop_index(op.f("ix_dispatches_product_id"), table_name="dispatches")
    op.drop_index(op.f("ix_dispatches_id"), table_name="dispatches")
    op.drop_index(op.f("ix_dispatches_dispatched_on"), table_name="dispatches")
    op.drop_index(op.f("ix_dispatches_cooperative_id"), table_name="dispatches")
    op.drop_table("dispatches")

    op.drop_index(op.f("ix_sales_status"), table_name="sales")
    op.drop_index(op.f("ix_sales_sold_on"), table_name="sales")
    op.drop_index(op.f("ix_sales_product_id"), table_name="sales")
    op.drop_index(op.f("ix_sales_id"), table_name="sales")
    op.drop_index(op.f("ix_sales_cooperative_id"), table_name="sales")
    op.drop_table("sales")

    op.drop_index(op.f("ix_procurements_product_id"), table_name="procurements")
    op.drop_index(op.f("ix_procurements_procured_on"), table_name="procurements")
    op.drop_index(op.f("ix_procurements_id"), table_name="procurements")
    op.drop_index(op.f("ix_procurements_farmer_id"), table_name="procurements")
    op.drop_index(op.f("ix_procurements_cooperative_id"), table_name="procurements")
    op.drop_table("procurements")

    bind = op.get_bind()
    sa.Enum(name="dispatch_status").drop(bind, checkfirst=True)
    sa.Enum(name="sale_status").drop(bind, checkfirst=True)
