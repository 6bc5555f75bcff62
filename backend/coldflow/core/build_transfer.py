"""Cold Transfer Construction — builds the initial TransferRequest for a validated proposal.

Invariants:
    - Only called after validate_cold_transfer returned no violations
    - status == SUBMITTED and offline_state == SUBMITTED at creation, nowhere else
    - SLA deadlines are absolute: created_at + configured SLA windows
    - required_approvals copied from config; received_approvals starts at 0

Design Decisions:
    - `now` passed in: deterministic, testable without freezing the clock
"""

from datetime import datetime
from uuid import UUID

from coldflow.core.amounts import requires_manual_review
from coldflow.core.cold_wallet_config import ColdWalletConfig
from coldflow.core.domain_types import (
    OfflineWorkflowState, TransferStatus, WalletType,
)
from coldflow.core.transfer_records import (
    ColdTransferProposal, SLADeadlines, TransferRequest, WorkflowMetadata,
)


def compute_sla_deadlines(created_at: datetime, config: ColdWalletConfig) -> SLADeadlines:
    return SLADeadlines(
        initial_response=created_at + config.initial_response_sla,
        processing=created_at + config.processing_sla,
        completion=created_at + config.completion_sla,
    )


def build_cold_transfer_request(
    proposal: ColdTransferProposal,
    requested_by: UUID,
    config: ColdWalletConfig,
    now: datetime,
) -> TransferRequest:
    """Assemble an unsaved cold TransferRequest (id assigned by the repository)."""
    workflow = WorkflowMetadata(
        business_purpose=proposal.business_purpose.strip(),
        requestor_name=proposal.requestor_name.strip(),
        requestor_email=proposal.requestor_email,
        urgency_level=proposal.urgency_level,
        offline_state=OfflineWorkflowState.SUBMITTED,
        sla_deadlines=compute_sla_deadlines(now, config),
        requires_manual_review=requires_manual_review(
            proposal.amount_string, config.manual_review_threshold,
        ),
    )
    return TransferRequest(
        wallet_id=proposal.wallet_id,
        requested_by_user_id=requested_by,
        recipient_address=proposal.recipient_address,
        amount_string=proposal.amount_string.strip(),
        coin=proposal.coin,
        transfer_type=WalletType.COLD,
        status=TransferStatus.SUBMITTED,
        required_approvals=config.required_approvals,
        received_approvals=0,
        memo=proposal.memo if proposal.memo and proposal.memo.strip() else None,
        workflow=workflow,
        created_at=now,
        updated_at=now,
        submitted_at=now,
    )
