"""Offline Workflow Service — load, transition and conditionally persist a cold transfer.

Invariants:
    - Only cold transfers move through the offline workflow (TypeMismatchError otherwise)
    - The write is conditional on the version read here; a concurrent writer
      surfaces as ConcurrencyError, never as a silently lost update
    - Status derivation happens in core.offline_workflow, never here
"""

import logging
from uuid import UUID

from coldflow.core.domain_types import OfflineWorkflowState
from coldflow.core.errors import (
    ConcurrencyError, ErrorContext, ResourceNotFoundError, TypeMismatchError,
)
from coldflow.core.offline_workflow import apply_offline_transition
from coldflow.core.repository_protocols import TransferRepository
from coldflow.core.transfer_records import TransferRequest
from coldflow.services.clock import Clock, utc_now

logger = logging.getLogger(__name__)


class OfflineWorkflowService:
    """Advances cold transfers through the offline custody workflow."""

    def __init__(self, transfers: TransferRepository, clock: Clock = utc_now):
        self.transfers = transfers
        self.clock = clock

    async def get_cold_transfer(self, transfer_id: UUID) -> TransferRequest:
        transfer = await self.transfers.get(transfer_id)
        if transfer is None:
            raise ResourceNotFoundError("Transfer", str(transfer_id))
        if not transfer.is_cold:
            raise TypeMismatchError(
                "Transfer", str(transfer_id), transfer.transfer_type.value,
                ErrorContext(transfer_id=str(transfer_id)),
            )
        return transfer

    async def update_offline_workflow_state(
        self,
        transfer_id: UUID,
        new_state: OfflineWorkflowState,
        notes: str = "",
        expected_version: int | None = None,
    ) -> TransferRequest:
        """Move a cold transfer to new_state and persist it. Returns the stored record."""
        transfer = await self.get_cold_transfer(transfer_id)

        if expected_version is not None and expected_version != transfer.version:
            raise ConcurrencyError(
                f"Transfer '{transfer_id}' is at version {transfer.version}, "
                f"not {expected_version}",
                ErrorContext(transfer_id=str(transfer_id)),
            )

        old_state = transfer.workflow.offline_state.value if transfer.workflow else None
        updated = apply_offline_transition(transfer, new_state, notes, self.clock())
        stored = await self.transfers.update(updated, expected_version=transfer.version)

        logger.info(
            f"Cold transfer offline state updated: {old_state} -> {new_state.value}",
            extra={
                "event": "offline_state_updated",
                "transfer_id": str(transfer_id),
                "old_state": old_state,
                "new_state": new_state.value,
                "status": stored.status.value,
                "notes": notes or None,
                "version": stored.version,
            },
        )
        return stored
