"""Transfer Request ORM — persisted withdrawal requests and their workflow document.

Invariants:
    - Rows are never deleted; terminal statuses are just statuses
    - version starts at 1 and is bumped by every conditional UPDATE
    - workflow_metadata holds WorkflowMetadata.to_dict() for cold transfers, NULL otherwise

Design Decisions:
    - JSON column for workflow metadata: storage stays opaque, the core owns the shape
    - status/transfer_type as short strings with indexes: SLA and admin-queue
      queries filter on both
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from coldflow.db.base import Base


class TransferRequestModel(Base):
    """Transfer request row."""
    __tablename__ = "transfer_requests"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    wallet_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("wallets.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    requested_by_user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    recipient_address: Mapped[str] = mapped_column(String(255), nullable=False)
    amount_string: Mapped[str] = mapped_column(String(50), nullable=False)
    coin: Mapped[str] = mapped_column(String(20), nullable=False)
    transfer_type: Mapped[str] = mapped_column(
        String(10), nullable=False, index=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft", index=True,
    )
    transaction_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    required_approvals: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1,
    )
    received_approvals: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    memo: Mapped[str | None] = mapped_column(Text, nullable=True)
    fee_string: Mapped[str | None] = mapped_column(String(50), nullable=True)
    estimated_fee_string: Mapped[str | None] = mapped_column(
        String(50), nullable=True,
    )
    workflow_metadata: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    submitted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    approved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    failed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
