"""Cold Transfer Routes — create, validate, advance and monitor cold transfers.

Invariants:
    - Domain errors propagate to the global ColdFlowError handler (no local try/except)
    - Static paths (/sla, /admin-queue, /validate) declared before /{transfer_id}
    - Every response body is camelCase

Design Decisions:
    - PATCH for offline-state: partial update of one transfer, optional
      expectedVersion gives clients an If-Match style precondition
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from coldflow.api.dependencies import (
    get_cold_transfer_service, get_current_user_id,
    get_offline_workflow_service, get_sla_monitor,
)
from coldflow.schemas.cold_transfer import (
    ColdTransferCreate, OfflineStateUpdate, TransferRequestResponse,
    ValidationReport, FieldViolationResponse,
)
from coldflow.services.cold_transfer_service import ColdTransferService
from coldflow.services.offline_workflow_service import OfflineWorkflowService
from coldflow.services.sla_monitor import (
    DEFAULT_QUEUE_LIMIT, MAX_QUEUE_LIMIT, SLAMonitor,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/transfers/cold", tags=["cold-transfers"])


@router.post(
    "", response_model=TransferRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_cold_transfer(
    body: ColdTransferCreate,
    user_id: UUID = Depends(get_current_user_id),
    service: ColdTransferService = Depends(get_cold_transfer_service),
):
    """Create a cold transfer request. Requires manual approval; may take up to the completion SLA."""
    transfer = await service.create_cold_transfer_request(body.to_proposal(), user_id)
    return TransferRequestResponse.from_domain(transfer)


@router.post("/validate", response_model=ValidationReport)
async def validate_cold_transfer(
    body: ColdTransferCreate,
    service: ColdTransferService = Depends(get_cold_transfer_service),
):
    """Dry-run validation: report every violation without creating anything."""
    violations = await service.validate_cold_transfer_request(body.to_proposal())
    return ValidationReport(
        valid=not violations,
        violations=[
            FieldViolationResponse(field=v.field, message=v.message)
            for v in violations
        ],
    )


@router.get("/sla")
async def get_cold_transfers_sla(
    monitor: SLAMonitor = Depends(get_sla_monitor),
):
    """SLA compliance across in-flight cold transfers."""
    return await monitor.get_cold_transfers_sla_status()


@router.get("/admin-queue")
async def get_cold_transfers_admin_queue(
    limit: int = Query(DEFAULT_QUEUE_LIMIT, ge=1, le=MAX_QUEUE_LIMIT),
    offset: int = Query(0, ge=0),
    monitor: SLAMonitor = Depends(get_sla_monitor),
):
    """In-flight cold transfers for operator review, with the SLA summary."""
    transfers, summary, pagination = await monitor.get_admin_queue(limit, offset)
    return {
        "transfers": [
            TransferRequestResponse.from_domain(t).model_dump(
                mode="json", by_alias=True,
            )
            for t in transfers
        ],
        "count": len(transfers),
        "slaSummary": summary,
        "pagination": pagination,
    }


@router.get("/{transfer_id}", response_model=TransferRequestResponse)
async def get_cold_transfer(
    transfer_id: UUID,
    service: OfflineWorkflowService = Depends(get_offline_workflow_service),
):
    """Get one cold transfer with its workflow metadata."""
    transfer = await service.get_cold_transfer(transfer_id)
    return TransferRequestResponse.from_domain(transfer)


@router.patch(
    "/{transfer_id}/offline-state", response_model=TransferRequestResponse,
)
async def update_offline_workflow_state(
    transfer_id: UUID,
    body: OfflineStateUpdate,
    service: OfflineWorkflowService = Depends(get_offline_workflow_service),
):
    """Advance the offline custody workflow of a cold transfer."""
    transfer = await service.update_offline_workflow_state(
        transfer_id, body.state, body.notes, body.expected_version,
    )
    return TransferRequestResponse.from_domain(transfer)
