"""Wallet ORM — custody wallets whose balances are maintained by the wallet service.

Invariants:
    - id is UUID primary key
    - wallet_type in {custodial, hot, warm, cold}
    - Balances are decimal strings exactly as reported by the custodian

Design Decisions:
    - Balances stored as strings, not NUMERIC: the custodian reports base-unit strings
      and the core parses them with Decimal on demand
    - Read-only from this service: no route or repository method writes wallets
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from coldflow.db.base import Base


class WalletModel(Base):
    """Custody wallet row."""
    __tablename__ = "wallets"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    label: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    coin: Mapped[str] = mapped_column(String(20), nullable=False)
    wallet_type: Mapped[str] = mapped_column(String(10), nullable=False)
    balance_string: Mapped[str] = mapped_column(
        String(50), nullable=False, default="0",
    )
    confirmed_balance_string: Mapped[str] = mapped_column(
        String(50), nullable=False, default="0",
    )
    spendable_balance_string: Mapped[str] = mapped_column(
        String(50), nullable=False, default="0",
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    frozen: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
