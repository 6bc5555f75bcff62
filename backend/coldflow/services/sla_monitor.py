"""SLA Monitor — pull-based SLA report and operator admin queue for in-flight cold transfers.

Invariants:
    - Read-only: never transitions, escalates or notifies
    - Snapshot bounded by SLA_SNAPSHOT_LIMIT; in-flight = submitted, pending_approval, approved
    - Admin queue limit clamped to [1, MAX_QUEUE_LIMIT]
    - Cold-only filtering happens in the query, before limit/offset

Design Decisions:
    - Computed at call time, no background scheduler: alerting, if wanted, is a
      separate component that polls this report
"""

from coldflow.core.cold_wallet_config import ColdWalletConfig
from coldflow.core.domain_types import IN_FLIGHT_STATUSES, WalletType
from coldflow.core.repository_protocols import TransferRepository
from coldflow.core.sla import compute_sla_report
from coldflow.core.transfer_records import TransferRequest
from coldflow.services.clock import Clock, utc_now


SLA_SNAPSHOT_LIMIT: int = 1000
DEFAULT_QUEUE_LIMIT: int = 50
MAX_QUEUE_LIMIT: int = 500


class SLAMonitor:
    """Reports SLA compliance across in-flight cold transfers."""

    def __init__(
        self,
        transfers: TransferRepository,
        config: ColdWalletConfig,
        clock: Clock = utc_now,
    ):
        self.transfers = transfers
        self.config = config
        self.clock = clock

    async def get_cold_transfers_sla_status(self) -> dict:
        snapshot = await self.transfers.list_by_statuses(
            IN_FLIGHT_STATUSES, SLA_SNAPSHOT_LIMIT, transfer_type=WalletType.COLD,
        )
        return compute_sla_report(snapshot, self.config, self.clock())

    async def get_admin_queue(
        self, limit: int = DEFAULT_QUEUE_LIMIT, offset: int = 0,
    ) -> tuple[list[TransferRequest], dict, dict]:
        """Return (cold transfers page, SLA summary, pagination echo)."""
        limit = min(max(limit, 1), MAX_QUEUE_LIMIT)
        offset = max(offset, 0)
        cold = await self.transfers.list_by_statuses(
            IN_FLIGHT_STATUSES, limit, offset, transfer_type=WalletType.COLD,
        )
        summary = await self.get_cold_transfers_sla_status()
        return cold, summary, {"limit": limit, "offset": offset}
