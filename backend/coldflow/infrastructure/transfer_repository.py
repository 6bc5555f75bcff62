"""SQL Transfer Repository — transfer_requests persistence with optimistic versioning.

Invariants:
    - Implements core.repository_protocols.TransferRepository
    - update() is a single conditional UPDATE ... WHERE id = ? AND version = ?;
      zero matched rows on an existing id raises ConcurrencyError
    - Every write commits its own unit of work; failures roll back and raise
      DatabaseError with the SQLAlchemy exception as __cause__
    - Datetimes read back are always timezone-aware UTC (SQLite drops tzinfo)

Design Decisions:
    - Explicit version column over SQLAlchemy version_id_col: the expected version
      comes from the caller's earlier read, not from an identity-mapped instance
"""

import logging
from datetime import datetime, timezone
from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coldflow.core.domain_types import TransferStatus, WalletType
from coldflow.core.errors import (
    ConcurrencyError, DatabaseError, ErrorContext, ResourceNotFoundError,
)
from coldflow.core.transfer_records import TransferRequest, WorkflowMetadata
from coldflow.models.transfer_request import TransferRequestModel

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def transfer_from_row(row: TransferRequestModel) -> TransferRequest:
    return TransferRequest(
        id=row.id,
        wallet_id=row.wallet_id,
        requested_by_user_id=row.requested_by_user_id,
        recipient_address=row.recipient_address,
        amount_string=row.amount_string,
        coin=row.coin,
        transfer_type=WalletType(row.transfer_type),
        status=TransferStatus(row.status),
        required_approvals=row.required_approvals,
        received_approvals=row.received_approvals,
        workflow=(
            WorkflowMetadata.from_dict(row.workflow_metadata)
            if row.workflow_metadata else None
        ),
        memo=row.memo,
        fee_string=row.fee_string,
        estimated_fee_string=row.estimated_fee_string,
        transaction_hash=row.transaction_hash,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
        submitted_at=_as_utc(row.submitted_at),
        approved_at=_as_utc(row.approved_at),
        completed_at=_as_utc(row.completed_at),
        failed_at=_as_utc(row.failed_at),
        version=row.version,
    )


def _mutable_columns(transfer: TransferRequest) -> dict:
    """Columns a transfer update may change (identity and payload are immutable)."""
    return {
        "status": transfer.status.value,
        "received_approvals": transfer.received_approvals,
        "transaction_hash": transfer.transaction_hash,
        "fee_string": transfer.fee_string,
        "estimated_fee_string": transfer.estimated_fee_string,
        "workflow_metadata": (
            transfer.workflow.to_dict() if transfer.workflow else None
        ),
        "submitted_at": transfer.submitted_at,
        "approved_at": transfer.approved_at,
        "completed_at": transfer.completed_at,
        "failed_at": transfer.failed_at,
        "updated_at": transfer.updated_at or datetime.now(timezone.utc),
    }


class SqlTransferRepository:
    """Transfer request persistence through a request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, transfer: TransferRequest) -> TransferRequest:
        row = TransferRequestModel(
            wallet_id=transfer.wallet_id,
            requested_by_user_id=transfer.requested_by_user_id,
            recipient_address=transfer.recipient_address,
            amount_string=transfer.amount_string,
            coin=transfer.coin,
            transfer_type=transfer.transfer_type.value,
            required_approvals=transfer.required_approvals,
            memo=transfer.memo,
            created_at=transfer.created_at,
            version=1,
            **_mutable_columns(transfer),
        )
        if transfer.id is not None:
            row.id = transfer.id
        try:
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Transfer insert failed: {e}")
            raise DatabaseError(
                "transfer insert failed", "commit",
                ErrorContext(wallet_id=str(transfer.wallet_id)),
            ) from e
        return transfer_from_row(row)

    async def get(self, transfer_id: UUID) -> TransferRequest | None:
        try:
            result = await self.db.execute(
                select(TransferRequestModel)
                .where(TransferRequestModel.id == transfer_id)
                .execution_options(populate_existing=True),
            )
        except SQLAlchemyError as e:
            logger.error(f"Transfer lookup failed: {e}")
            raise DatabaseError(
                "transfer lookup failed", "query",
                ErrorContext(transfer_id=str(transfer_id)),
            ) from e
        row = result.scalar_one_or_none()
        return transfer_from_row(row) if row else None

    async def update(
        self, transfer: TransferRequest, expected_version: int,
    ) -> TransferRequest:
        """Conditional write. Raises ConcurrencyError if the row moved on."""
        if transfer.id is None:
            raise ValueError("cannot update an unsaved transfer")

        try:
            result = await self.db.execute(
                update(TransferRequestModel)
                .where(TransferRequestModel.id == transfer.id)
                .where(TransferRequestModel.version == expected_version)
                .values(version=expected_version + 1, **_mutable_columns(transfer))
                .execution_options(synchronize_session=False),
            )
            matched = result.rowcount
            if matched == 0:
                await self.db.rollback()
            else:
                await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Transfer update failed: {e}")
            raise DatabaseError(
                "transfer update failed", "commit",
                ErrorContext(transfer_id=str(transfer.id)),
            ) from e

        if matched == 0:
            current = await self.get(transfer.id)
            if current is None:
                raise ResourceNotFoundError("Transfer", str(transfer.id))
            raise ConcurrencyError(
                f"Transfer '{transfer.id}' was modified concurrently "
                f"(expected version {expected_version}, found {current.version})",
                ErrorContext(transfer_id=str(transfer.id)),
            )

        updated = await self.get(transfer.id)
        if updated is None:
            raise ResourceNotFoundError("Transfer", str(transfer.id))
        return updated

    async def list_by_statuses(
        self,
        statuses: Sequence[TransferStatus],
        limit: int,
        offset: int = 0,
        transfer_type: WalletType | None = None,
    ) -> list[TransferRequest]:
        query = select(TransferRequestModel).where(
            TransferRequestModel.status.in_([s.value for s in statuses]),
        )
        if transfer_type is not None:
            query = query.where(
                TransferRequestModel.transfer_type == transfer_type.value,
            )
        query = (
            query
            .order_by(TransferRequestModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Transfer listing failed: {e}")
            raise DatabaseError("transfer listing failed", "query") from e
        return [transfer_from_row(row) for row in result.scalars().all()]
