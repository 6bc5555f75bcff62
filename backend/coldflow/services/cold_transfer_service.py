"""Cold Transfer Orchestrator — validate, build, persist and announce new cold transfers.

Invariants:
    - Any violation → ValidationFailedError with the full list; nothing persisted
    - Wallet re-fetched after validation; a vanished wallet → ResourceNotFoundError
    - Store failures propagate (DatabaseError), no retry
    - Notification is best-effort: failures are logged and never roll back creation

Design Decisions:
    - Validation and construction are pure core calls; this class only sequences IO
    - Dry-run validation exposed separately so clients can pre-check a form
"""

import logging
from uuid import UUID

from coldflow.core.build_transfer import build_cold_transfer_request
from coldflow.core.cold_wallet_config import ColdWalletConfig
from coldflow.core.errors import (
    ErrorContext, ResourceNotFoundError, ValidationFailedError,
)
from coldflow.core.repository_protocols import (
    NotificationSink, TransferRepository, WalletRepository,
)
from coldflow.core.transfer_records import (
    ColdTransferProposal, FieldViolation, TransferRequest,
)
from coldflow.core.validate_transfer import validate_cold_transfer
from coldflow.services.clock import Clock, utc_now

logger = logging.getLogger(__name__)


class ColdTransferService:
    """Creates cold transfer requests."""

    def __init__(
        self,
        wallets: WalletRepository,
        transfers: TransferRepository,
        notifier: NotificationSink,
        config: ColdWalletConfig,
        clock: Clock = utc_now,
    ):
        self.wallets = wallets
        self.transfers = transfers
        self.notifier = notifier
        self.config = config
        self.clock = clock

    async def validate_cold_transfer_request(
        self, proposal: ColdTransferProposal,
    ) -> list[FieldViolation]:
        """Look up the wallet and return every rule violation (no side effects)."""
        wallet = await self.wallets.get(proposal.wallet_id)
        return validate_cold_transfer(proposal, wallet, self.config)

    async def create_cold_transfer_request(
        self, proposal: ColdTransferProposal, requested_by: UUID,
    ) -> TransferRequest:
        """Validate and persist a new cold transfer. Returns the stored record."""
        violations = await self.validate_cold_transfer_request(proposal)
        if violations:
            logger.info(
                f"Cold transfer rejected with {len(violations)} violation(s)",
                extra={
                    "event": "cold_transfer_rejected",
                    "wallet_id": str(proposal.wallet_id),
                    "user_id": str(requested_by),
                },
            )
            raise ValidationFailedError(
                violations, ErrorContext(wallet_id=str(proposal.wallet_id)),
            )

        wallet = await self.wallets.get(proposal.wallet_id)
        if wallet is None:
            raise ResourceNotFoundError("Wallet", str(proposal.wallet_id))

        transfer = build_cold_transfer_request(
            proposal, requested_by, self.config, self.clock(),
        )
        created = await self.transfers.create(transfer)

        await self._notify_created(created)

        logger.info(
            "Cold transfer request created",
            extra={
                "event": "cold_transfer_created",
                "transfer_id": str(created.id),
                "wallet_id": str(created.wallet_id),
                "user_id": str(requested_by),
                "amount": created.amount_string,
                "coin": created.coin,
                "urgency": proposal.urgency_level,
                "requires_manual_review": created.workflow.requires_manual_review,
            },
        )
        return created

    async def _notify_created(self, transfer: TransferRequest) -> None:
        # Best-effort: the transfer is already committed
        try:
            await self.notifier.notify_transfer_created(transfer)
        except Exception as e:
            logger.warning(
                f"Cold transfer notification failed: {e}",
                exc_info=True,
                extra={
                    "event": "cold_transfer_notification_failed",
                    "transfer_id": str(transfer.id),
                    "error_code": getattr(e, "code", None),
                },
            )
