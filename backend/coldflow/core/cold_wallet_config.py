"""Cold Wallet Configuration — immutable thresholds injected into every cold-transfer component.

Invariants:
    - Frozen: thresholds never change for the lifetime of a service instance
    - Amount limits are Decimal, durations are timedelta — no unit guessing downstream
    - required_approvals >= 1

Design Decisions:
    - Dataclass in core, built from pydantic Settings by the shell: core never reads env vars
    - Defaults mirror the production profile so tests can construct ColdWalletConfig() bare
"""

from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal


@dataclass(frozen=True)
class ColdWalletConfig:
    """Business and SLA thresholds for cold transfers."""

    # Validation
    max_daily_transfer_limit: Decimal = Decimal("10.0")
    max_single_transfer_limit: Decimal = Decimal("5.0")
    allowed_address_patterns: tuple[str, ...] = ()
    required_approvals: int = 3
    approval_timeout_hours: int = 72

    # SLA
    initial_response_sla: timedelta = timedelta(hours=2)
    processing_sla: timedelta = timedelta(hours=24)
    completion_sla: timedelta = timedelta(hours=72)

    # Offline workflow
    manual_review_threshold: Decimal = Decimal("1.0")
    operator_notification_list: tuple[str, ...] = field(default_factory=tuple)
    escalation_threshold: timedelta = timedelta(hours=48)

    def __post_init__(self):
        if self.required_approvals < 1:
            raise ValueError("required_approvals must be at least 1")
