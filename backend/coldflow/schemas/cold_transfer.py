"""Cold Transfer Schemas — Pydantic models for the cold transfer API boundary.

Invariants:
    - JSON uses camelCase (walletId, amountString, ...) — the same names used in
      validation violations, so clients map errors straight to form fields
    - Request models only check shape (types, ids); business rules are applied
      by core.validate_transfer so every violation is reported together
    - Responses are built from core dataclasses, never from ORM rows

Design Decisions:
    - alias_generator=to_camel + populate_by_name: snake_case in Python, camelCase on the wire
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from coldflow.core.domain_types import OfflineWorkflowState
from coldflow.core.transfer_records import ColdTransferProposal, TransferRequest


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ColdTransferCreate(CamelModel):
    """Proposed cold withdrawal."""
    wallet_id: UUID
    recipient_address: str = ""
    amount_string: str = ""
    coin: str = ""
    business_purpose: str = ""
    requestor_name: str = ""
    requestor_email: str = ""
    urgency_level: str = ""
    memo: str | None = Field(None, max_length=1000)

    def to_proposal(self) -> ColdTransferProposal:
        return ColdTransferProposal(
            wallet_id=self.wallet_id,
            recipient_address=self.recipient_address,
            amount_string=self.amount_string,
            coin=self.coin,
            business_purpose=self.business_purpose,
            requestor_name=self.requestor_name,
            requestor_email=self.requestor_email,
            urgency_level=self.urgency_level,
            memo=self.memo or "",
        )


class OfflineStateUpdate(CamelModel):
    """Offline workflow advance request."""
    state: OfflineWorkflowState
    notes: str = Field("", max_length=5000)
    expected_version: int | None = Field(None, ge=1)


class FieldViolationResponse(CamelModel):
    field: str
    message: str


class ValidationReport(CamelModel):
    valid: bool
    violations: list[FieldViolationResponse]


class SLADeadlinesResponse(CamelModel):
    initial_response: datetime
    processing: datetime
    completion: datetime


class WorkflowResponse(CamelModel):
    business_purpose: str
    requestor_name: str
    requestor_email: str
    urgency_level: str
    offline_state: OfflineWorkflowState
    sla_deadlines: SLADeadlinesResponse
    requires_manual_review: bool
    escalated: bool
    escalated_at: datetime | None = None
    state_updated_at: datetime | None = None
    state_notes: str | None = None


class TransferRequestResponse(CamelModel):
    """Public-facing transfer request."""
    id: UUID
    wallet_id: UUID
    requested_by_user_id: UUID
    recipient_address: str
    amount_string: str
    coin: str
    transfer_type: str
    status: str
    required_approvals: int
    received_approvals: int
    memo: str | None = None
    fee_string: str | None = None
    estimated_fee_string: str | None = None
    transaction_hash: str | None = None
    workflow: WorkflowResponse | None = None
    version: int
    created_at: datetime
    updated_at: datetime | None = None
    submitted_at: datetime | None = None
    approved_at: datetime | None = None
    completed_at: datetime | None = None
    failed_at: datetime | None = None

    @classmethod
    def from_domain(cls, transfer: TransferRequest) -> "TransferRequestResponse":
        workflow = None
        if transfer.workflow is not None:
            wf = transfer.workflow
            workflow = WorkflowResponse(
                business_purpose=wf.business_purpose,
                requestor_name=wf.requestor_name,
                requestor_email=wf.requestor_email,
                urgency_level=wf.urgency_level,
                offline_state=wf.offline_state,
                sla_deadlines=SLADeadlinesResponse(
                    initial_response=wf.sla_deadlines.initial_response,
                    processing=wf.sla_deadlines.processing,
                    completion=wf.sla_deadlines.completion,
                ),
                requires_manual_review=wf.requires_manual_review,
                escalated=wf.escalated,
                escalated_at=wf.escalated_at,
                state_updated_at=wf.state_updated_at,
                state_notes=wf.state_notes,
            )
        return cls(
            id=transfer.id,
            wallet_id=transfer.wallet_id,
            requested_by_user_id=transfer.requested_by_user_id,
            recipient_address=transfer.recipient_address,
            amount_string=transfer.amount_string,
            coin=transfer.coin,
            transfer_type=transfer.transfer_type.value,
            status=transfer.status.value,
            required_approvals=transfer.required_approvals,
            received_approvals=transfer.received_approvals,
            memo=transfer.memo,
            fee_string=transfer.fee_string,
            estimated_fee_string=transfer.estimated_fee_string,
            transaction_hash=transfer.transaction_hash,
            workflow=workflow,
            version=transfer.version,
            created_at=transfer.created_at,
            updated_at=transfer.updated_at,
            submitted_at=transfer.submitted_at,
            approved_at=transfer.approved_at,
            completed_at=transfer.completed_at,
            failed_at=transfer.failed_at,
        )
