"""Offline Workflow Transitions — state → status table and the pure transition step.

Invariants:
    - TRANSITION_TABLE covers every OfflineWorkflowState exactly once
    - Derived status depends on the target state only, never on the previous state
    - ESCALATED never changes status: it sets escalated=True and refreshes escalated_at
    - SUBMITTED is creation-only: applying it keeps the current status
    - apply_offline_transition is PURE: returns a new TransferRequest, input untouched

Design Decisions:
    - No source→target legality check: operators may fast-track (e.g. SUBMITTED →
      EXECUTED) or move a transfer back out of ESCALATED; every move is recorded
      in state_updated_at/state_notes and the audit log instead
    - Table of TransitionRule over a switch: one place to read the whole mapping,
      loading and persisting live in services/offline_workflow_service.py
"""

from dataclasses import dataclass, replace
from datetime import datetime

from coldflow.core.domain_types import OfflineWorkflowState, TransferStatus
from coldflow.core.transfer_records import TransferRequest


@dataclass(frozen=True)
class TransitionRule:
    """Effect of entering an offline state. status None = keep current status."""
    status: TransferStatus | None
    escalates: bool = False


TRANSITION_TABLE: dict[OfflineWorkflowState, TransitionRule] = {
    OfflineWorkflowState.SUBMITTED: TransitionRule(None),
    OfflineWorkflowState.SECURITY_REVIEW: TransitionRule(TransferStatus.PENDING_APPROVAL),
    OfflineWorkflowState.COMPLIANCE_CHECK: TransitionRule(TransferStatus.PENDING_APPROVAL),
    OfflineWorkflowState.OPERATOR_QUEUED: TransitionRule(TransferStatus.APPROVED),
    OfflineWorkflowState.MANUAL_PROCESSING: TransitionRule(TransferStatus.APPROVED),
    OfflineWorkflowState.AWAITING_HSM: TransitionRule(TransferStatus.SIGNED),
    OfflineWorkflowState.READY_TO_EXECUTE: TransitionRule(TransferStatus.SIGNED),
    OfflineWorkflowState.EXECUTED: TransitionRule(TransferStatus.BROADCAST),
    OfflineWorkflowState.ESCALATED: TransitionRule(None, escalates=True),
}


def derive_transfer_status(
    new_state: OfflineWorkflowState, current: TransferStatus,
) -> TransferStatus:
    """Status a transfer shows after entering new_state."""
    rule = TRANSITION_TABLE[new_state]
    return rule.status if rule.status is not None else current


def apply_offline_transition(
    transfer: TransferRequest,
    new_state: OfflineWorkflowState,
    notes: str,
    now: datetime,
) -> TransferRequest:
    """Return a copy of transfer moved to new_state. Caller persists it."""
    if transfer.workflow is None:
        raise ValueError("transfer has no workflow metadata")

    rule = TRANSITION_TABLE[new_state]
    workflow = replace(
        transfer.workflow,
        offline_state=new_state,
        state_updated_at=now,
    )
    if notes and notes.strip():
        workflow = replace(workflow, state_notes=notes)
    if rule.escalates:
        workflow = replace(workflow, escalated=True, escalated_at=now)

    status = derive_transfer_status(new_state, transfer.status)
    approved_at = transfer.approved_at
    if status == TransferStatus.APPROVED and approved_at is None:
        approved_at = now

    return replace(
        transfer,
        status=status,
        workflow=workflow,
        approved_at=approved_at,
        updated_at=now,
    )
