"""payments

Revision ID: 20261018_0004
Revises: 20261018_0003
Create Date: 2026-10-18 10:30:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261018_0004"
down_revision: Union[str, Sequence[str], None] = "20261018_0003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    payment_status_enum = sa.Enum("PENDING", "COMPLETED", "REJECTED", name="payment_status")
    payment_status_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("paid_on", sa.Date(), nullable=False),
        sa.Column("type", sa.String(length=40), nullable=False),
        sa.Column("amount", sa.Numeric(precision=16, scale=2), nullable=False),
        sa.Column("cooperative_id", sa.Integer(), nullable=False),
        sa.Column("cooperative_name", sa.String(length=160), nullable=False),
        sa.Column("farmer_id", sa.Integer(), nullable=True),
        sa.Column("farmer_name", sa.String(length=160), nullable=True),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("status", payment_status_enum, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["cooperative_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["farmer_id"], ["farmers.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_payments_cooperative_id"), "payments", ["cooperative_id"], unique=False)
    op.create_index(op.f("ix_payments_farmer_id"), "payments", ["farmer_id"], unique=False)
    op.create_index(op.f("ix_payments_id"), "payments", ["id"], unique=False)
    op.create_index(op.f("ix_payments_paid_on"), "payments", ["paid_on"], unique=False)
    op.create_index(op.f("ix_payments_status"), "payments", ["status"], unique=False)
    op.create_index(op.f("ix_payments_type"), "payments", ["type"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_payments_type"), table_name="payments")
    op.drop_index(op.f("ix_payments_status"), table_name="payments")
    op.drop_index(op.f("ix_payments_paid_on"), table_name="payments")
    op.drop_index(op.f("ix_payments_id"), table_name="payments")
    op.drop_index(op.f("ix_payments_farmer_id"), table_name="payments")
    op.drop_index(op.f("ix_payments_cooperative_id"), table_name="payments")
    op.drop_table("payments")

    sa.Enum(name="payment_status").drop(op.get_bind(), checkfirst=True)
