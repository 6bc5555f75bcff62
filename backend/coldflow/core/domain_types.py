"""Domain Types — identity wrappers and enums for wallets and cold transfers.

Invariants:
    - WalletId, TransferId, UserId wrap UUIDs — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching
    - OfflineWorkflowState is a closed set: the cold-transfer workflow is not configurable

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and DB string columns without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

WalletId = NewType("WalletId", UUID)
TransferId = NewType("TransferId", UUID)
UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class WalletType(str, Enum):
    """Custody model of a wallet — maps to `wallet_type` / `transfer_type` columns."""
    CUSTODIAL = "custodial"
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"


class TransferStatus(str, Enum):
    """Externally visible transfer status — maps to DB `status` column."""
    DRAFT = "draft"
    SUBMITTED = "submitted"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    SIGNED = "signed"
    BROADCAST = "broadcast"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    FAILED = "failed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class OfflineWorkflowState(str, Enum):
    """Stages of the offline custody workflow a cold transfer moves through."""
    SUBMITTED = "submitted"
    SECURITY_REVIEW = "security_review"
    COMPLIANCE_CHECK = "compliance_check"
    OPERATOR_QUEUED = "operator_queued"
    MANUAL_PROCESSING = "manual_processing"
    AWAITING_HSM = "awaiting_hsm"
    READY_TO_EXECUTE = "ready_to_execute"
    EXECUTED = "executed"
    ESCALATED = "escalated"


class UrgencyLevel(str, Enum):
    """Requestor-declared urgency for a cold transfer."""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


# Statuses the SLA monitor and admin queue treat as "in flight"
IN_FLIGHT_STATUSES: tuple[TransferStatus, ...] = (
    TransferStatus.SUBMITTED,
    TransferStatus.PENDING_APPROVAL,
    TransferStatus.APPROVED,
)
