"""Initial schema — wallets and transfer_requests with optimistic version column.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "wallets",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("label", sa.String(255), nullable=False, server_default=""),
        sa.Column("coin", sa.String(20), nullable=False),
        sa.Column("wallet_type", sa.String(10), nullable=False),
        sa.Column("balance_string", sa.String(50), nullable=False, server_default="0"),
        sa.Column("confirmed_balance_string", sa.String(50), nullable=False, server_default="0"),
        sa.Column("spendable_balance_string", sa.String(50), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("frozen", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "wallet_type IN ('custodial', 'hot', 'warm', 'cold')",
            name="ck_wallets_wallet_type",
        ),
    )

    op.create_table(
        "transfer_requests",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "wallet_id", UUID(as_uuid=True),
            sa.ForeignKey("wallets.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("requested_by_user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("recipient_address", sa.String(255), nullable=False),
        sa.Column("amount_string", sa.String(50), nullable=False),
        sa.Column("coin", sa.String(20), nullable=False),
        sa.Column("transfer_type", sa.String(10), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("transaction_hash", sa.String(255), nullable=True),
        sa.Column("required_approvals", sa.Integer, nullable=False, server_default="1"),
        sa.Column("received_approvals", sa.Integer, nullable=False, server_default="0"),
        sa.Column("memo", sa.Text, nullable=True),
        sa.Column("fee_string", sa.String(50), nullable=True),
        sa.Column("estimated_fee_string", sa.String(50), nullable=True),
        sa.Column("workflow_metadata", sa.JSON, nullable=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("failed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "transfer_type IN ('custodial', 'hot', 'warm', 'cold')",
            name="ck_transfer_requests_transfer_type",
        ),
    )

    op.create_index("ix_transfer_requests_wallet_id", "transfer_requests", ["wallet_id"])
    op.create_index("ix_transfer_requests_requested_by_user_id", "transfer_requests", ["requested_by_user_id"])
    op.create_index("ix_transfer_requests_status", "transfer_requests", ["status"])
    op.create_index("ix_transfer_requests_transfer_type", "transfer_requests", ["transfer_type"])
    op.create_index("ix_transfer_requests_created_at", "transfer_requests", ["created_at"])


def downgrade() -> None:
    op.drop_table("transfer_requests")
    op.drop_table("wallets")
