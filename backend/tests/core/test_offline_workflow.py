"""Offline Workflow Transitions — tests for the state → status table and transition step.

Tests cover:
    - Every offline state has exactly one rule
    - Each state derives its documented status
    - ESCALATED keeps status, sets escalated, refreshes escalated_at on re-entry
    - Notes only overwrite when non-blank
    - approved_at stamped once
    - Input transfer never mutated; applying the same state twice is stable
"""

from datetime import timedelta

import pytest

from coldflow.core.domain_types import OfflineWorkflowState as S, TransferStatus
from coldflow.core.offline_workflow import (
    TRANSITION_TABLE, apply_offline_transition, derive_transfer_status,
)
from tests.factories import T0, make_cold_transfer

LATER = T0 + timedelta(hours=3)


# ─── Table ───────────────────────────────────────────────────────

def test_table_covers_every_state():
    assert set(TRANSITION_TABLE) == set(S)


@pytest.mark.parametrize("state,expected", [
    (S.SECURITY_REVIEW, TransferStatus.PENDING_APPROVAL),
    (S.COMPLIANCE_CHECK, TransferStatus.PENDING_APPROVAL),
    (S.OPERATOR_QUEUED, TransferStatus.APPROVED),
    (S.MANUAL_PROCESSING, TransferStatus.APPROVED),
    (S.AWAITING_HSM, TransferStatus.SIGNED),
    (S.READY_TO_EXECUTE, TransferStatus.SIGNED),
    (S.EXECUTED, TransferStatus.BROADCAST),
])
def test_state_derives_status(state, expected):
    assert derive_transfer_status(state, TransferStatus.SUBMITTED) == expected


@pytest.mark.parametrize("state", [S.SUBMITTED, S.ESCALATED])
def test_state_keeps_current_status(state):
    assert derive_transfer_status(state, TransferStatus.SIGNED) == TransferStatus.SIGNED


def test_only_escalated_escalates():
    assert [s for s, rule in TRANSITION_TABLE.items() if rule.escalates] == [S.ESCALATED]


# ─── apply_offline_transition ────────────────────────────────────

def test_security_review_moves_to_pending_approval():
    transfer = make_cold_transfer()
    updated = apply_offline_transition(transfer, S.SECURITY_REVIEW, "HSM team notified", LATER)
    assert updated.status == TransferStatus.PENDING_APPROVAL
    assert updated.workflow.offline_state == S.SECURITY_REVIEW
    assert updated.workflow.state_updated_at == LATER
    assert updated.workflow.state_notes == "HSM team notified"
    assert updated.updated_at == LATER


def test_input_not_mutated():
    transfer = make_cold_transfer()
    apply_offline_transition(transfer, S.EXECUTED, "done", LATER)
    assert transfer.status == TransferStatus.SUBMITTED
    assert transfer.workflow.offline_state == S.SUBMITTED
    assert transfer.workflow.state_notes is None


def test_escalation_keeps_status_and_flags():
    transfer = apply_offline_transition(make_cold_transfer(), S.COMPLIANCE_CHECK, "", T0)
    escalated = apply_offline_transition(transfer, S.ESCALATED, "stuck", LATER)
    assert escalated.status == TransferStatus.PENDING_APPROVAL
    assert escalated.workflow.escalated is True
    assert escalated.workflow.escalated_at == LATER


def test_escalation_reentry_refreshes_timestamp():
    first = apply_offline_transition(make_cold_transfer(), S.ESCALATED, "", LATER)
    again = apply_offline_transition(first, S.ESCALATED, "", LATER + timedelta(hours=1))
    assert again.workflow.escalated is True
    assert again.workflow.escalated_at == LATER + timedelta(hours=1)


def test_leaving_escalated_keeps_flag():
    escalated = apply_offline_transition(make_cold_transfer(), S.ESCALATED, "", LATER)
    resumed = apply_offline_transition(escalated, S.OPERATOR_QUEUED, "", LATER)
    assert resumed.status == TransferStatus.APPROVED
    assert resumed.workflow.escalated is True


def test_blank_notes_keep_previous_notes():
    noted = apply_offline_transition(make_cold_transfer(), S.SECURITY_REVIEW, "first", T0)
    updated = apply_offline_transition(noted, S.COMPLIANCE_CHECK, "   ", LATER)
    assert updated.workflow.state_notes == "first"


def test_approved_at_stamped_once():
    queued = apply_offline_transition(make_cold_transfer(), S.OPERATOR_QUEUED, "", T0)
    assert queued.approved_at == T0
    manual = apply_offline_transition(queued, S.MANUAL_PROCESSING, "", LATER)
    assert manual.approved_at == T0


def test_same_state_twice_is_stable():
    once = apply_offline_transition(make_cold_transfer(), S.AWAITING_HSM, "n", LATER)
    twice = apply_offline_transition(once, S.AWAITING_HSM, "n", LATER)
    assert twice == once


def test_submitted_keeps_status():
    signed = apply_offline_transition(make_cold_transfer(), S.READY_TO_EXECUTE, "", T0)
    back = apply_offline_transition(signed, S.SUBMITTED, "", LATER)
    assert back.status == TransferStatus.SIGNED
    assert back.workflow.offline_state == S.SUBMITTED


def test_missing_workflow_rejected():
    transfer = make_cold_transfer()
    transfer.workflow = None
    with pytest.raises(ValueError):
        apply_offline_transition(transfer, S.EXECUTED, "", LATER)
