"""SQL Wallet Repository — read-only wallet lookup backed by the wallets table.

Invariants:
    - Implements core.repository_protocols.WalletRepository
    - Returns None for unknown ids; store failures raise DatabaseError (cause chained)
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coldflow.core.domain_types import WalletType
from coldflow.core.errors import DatabaseError, ErrorContext
from coldflow.core.transfer_records import Wallet
from coldflow.models.wallet import WalletModel

logger = logging.getLogger(__name__)


def wallet_from_row(row: WalletModel) -> Wallet:
    return Wallet(
        id=row.id,
        wallet_type=WalletType(row.wallet_type),
        spendable_balance_string=row.spendable_balance_string,
        coin=row.coin,
        label=row.label,
        balance_string=row.balance_string,
        confirmed_balance_string=row.confirmed_balance_string,
    )


class SqlWalletRepository:
    """Wallet lookups through a request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, wallet_id: UUID) -> Wallet | None:
        try:
            result = await self.db.execute(
                select(WalletModel).where(WalletModel.id == wallet_id),
            )
        except SQLAlchemyError as e:
            logger.error(f"Wallet lookup failed: {e}", extra={"wallet_id": str(wallet_id)})
            raise DatabaseError(
                "wallet lookup failed", "query",
                ErrorContext(wallet_id=str(wallet_id)),
            ) from e
        row = result.scalar_one_or_none()
        return wallet_from_row(row) if row else None
