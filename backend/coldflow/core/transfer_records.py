"""Transfer Records — pure dataclasses the core reads and returns.

Invariants:
    - Wallet is read-only for the core (frozen)
    - WorkflowMetadata is the only place offline-workflow data lives: no string-keyed maps
    - All timestamps are timezone-aware UTC
    - TransferRequest.version starts at 1 and only the repository increments it

Design Decisions:
    - Dataclasses over ORM models in core: keeps core free of SQLAlchemy and IO
    - WorkflowMetadata.to_dict/from_dict own the JSON shape stored in the
      `workflow_metadata` column, so storage stays opaque to everything else
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from coldflow.core.domain_types import (
    OfflineWorkflowState, TransferStatus, WalletType,
)


def _dt_to_str(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _str_to_dt(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Wallet:
    """Wallet as seen by the cold-transfer core."""
    id: UUID
    wallet_type: WalletType
    spendable_balance_string: str
    coin: str = ""
    label: str = ""
    balance_string: str = "0"
    confirmed_balance_string: str = "0"


@dataclass(frozen=True)
class ColdTransferProposal:
    """A requested withdrawal from a cold wallet, before validation."""
    wallet_id: UUID
    recipient_address: str
    amount_string: str
    coin: str
    business_purpose: str
    requestor_name: str
    requestor_email: str
    urgency_level: str
    memo: str = ""


@dataclass(frozen=True)
class FieldViolation:
    """One failed validation rule, addressed by its API field name."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class SLADeadlines:
    """Absolute deadlines computed once at creation time."""
    initial_response: datetime
    processing: datetime
    completion: datetime

    def to_dict(self) -> dict:
        return {
            "initial_response": _dt_to_str(self.initial_response),
            "processing": _dt_to_str(self.processing),
            "completion": _dt_to_str(self.completion),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SLADeadlines":
        return cls(
            initial_response=_str_to_dt(data["initial_response"]),
            processing=_str_to_dt(data["processing"]),
            completion=_str_to_dt(data["completion"]),
        )


@dataclass
class WorkflowMetadata:
    """Cold-transfer workflow record, persisted as one JSON document."""
    business_purpose: str
    requestor_name: str
    requestor_email: str
    urgency_level: str
    offline_state: OfflineWorkflowState
    sla_deadlines: SLADeadlines
    requires_manual_review: bool
    escalated: bool = False
    escalated_at: datetime | None = None
    state_updated_at: datetime | None = None
    state_notes: str | None = None

    def to_dict(self) -> dict:
        return {
            "business_purpose": self.business_purpose,
            "requestor_name": self.requestor_name,
            "requestor_email": self.requestor_email,
            "urgency_level": self.urgency_level,
            "offline_state": self.offline_state.value,
            "sla_deadlines": self.sla_deadlines.to_dict(),
            "requires_manual_review": self.requires_manual_review,
            "escalated": self.escalated,
            "escalated_at": _dt_to_str(self.escalated_at),
            "state_updated_at": _dt_to_str(self.state_updated_at),
            "state_notes": self.state_notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkflowMetadata":
        return cls(
            business_purpose=data["business_purpose"],
            requestor_name=data["requestor_name"],
            requestor_email=data["requestor_email"],
            urgency_level=data["urgency_level"],
            offline_state=OfflineWorkflowState(data["offline_state"]),
            sla_deadlines=SLADeadlines.from_dict(data["sla_deadlines"]),
            requires_manual_review=bool(data.get("requires_manual_review", True)),
            escalated=bool(data.get("escalated", False)),
            escalated_at=_str_to_dt(data.get("escalated_at")),
            state_updated_at=_str_to_dt(data.get("state_updated_at")),
            state_notes=data.get("state_notes"),
        )


@dataclass
class TransferRequest:
    """A transfer request record. Never deleted — terminal states are just states."""
    wallet_id: UUID
    requested_by_user_id: UUID
    recipient_address: str
    amount_string: str
    coin: str
    transfer_type: WalletType
    status: TransferStatus
    required_approvals: int
    workflow: WorkflowMetadata | None
    created_at: datetime
    id: UUID | None = None
    received_approvals: int = 0
    memo: str | None = None
    fee_string: str | None = None
    estimated_fee_string: str | None = None
    transaction_hash: str | None = None
    updated_at: datetime | None = None
    submitted_at: datetime | None = None
    approved_at: datetime | None = None
    completed_at: datetime | None = None
    failed_at: datetime | None = None
    version: int = 1

    @property
    def is_cold(self) -> bool:
        return self.transfer_type == WalletType.COLD
