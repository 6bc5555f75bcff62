"""API Dependencies — wires request-scoped repositories into cold-transfer services.

Invariants:
    - One AsyncSession per request, shared by every repository the request uses
    - Services receive the immutable ColdWalletConfig built from settings
    - Tests override get_notification_sink / get_db, never the services themselves
"""

from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from coldflow.config import get_settings
from coldflow.core.cold_wallet_config import ColdWalletConfig
from coldflow.core.repository_protocols import NotificationSink
from coldflow.infrastructure.database import get_db
from coldflow.infrastructure.transfer_repository import SqlTransferRepository
from coldflow.infrastructure.wallet_repository import SqlWalletRepository
from coldflow.services.cold_transfer_service import ColdTransferService
from coldflow.services.notification import build_notification_sink
from coldflow.services.offline_workflow_service import OfflineWorkflowService
from coldflow.services.sla_monitor import SLAMonitor


def get_cold_wallet_config() -> ColdWalletConfig:
    return get_settings().cold_wallet_config()


def get_notification_sink() -> NotificationSink:
    return build_notification_sink(get_settings())


def get_cold_transfer_service(
    db: AsyncSession = Depends(get_db),
    notifier: NotificationSink = Depends(get_notification_sink),
    config: ColdWalletConfig = Depends(get_cold_wallet_config),
) -> ColdTransferService:
    return ColdTransferService(
        SqlWalletRepository(db), SqlTransferRepository(db), notifier, config,
    )


def get_offline_workflow_service(
    db: AsyncSession = Depends(get_db),
) -> OfflineWorkflowService:
    return OfflineWorkflowService(SqlTransferRepository(db))


def get_sla_monitor(
    db: AsyncSession = Depends(get_db),
    config: ColdWalletConfig = Depends(get_cold_wallet_config),
) -> SLAMonitor:
    return SLAMonitor(SqlTransferRepository(db), config)


def get_current_user_id(x_user_id: str | None = Header(None)) -> UUID:
    """Requesting user from the X-User-Id header (set by the auth gateway)."""
    if not x_user_id:
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED, detail="X-User-Id header is required",
        )
    try:
        return UUID(x_user_id)
    except ValueError:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST, detail="X-User-Id must be a UUID",
        )
