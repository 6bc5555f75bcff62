"""Transfer Records — tests for the workflow_metadata JSON document shape."""

from coldflow.core.domain_types import OfflineWorkflowState
from coldflow.core.transfer_records import WorkflowMetadata
from tests.factories import T0, make_cold_transfer


def test_workflow_document_keys():
    doc = make_cold_transfer().workflow.to_dict()
    assert doc["offline_state"] == "submitted"
    assert doc["sla_deadlines"]["completion"] == "2026-01-08T09:00:00+00:00"
    assert doc["escalated"] is False
    assert doc["escalated_at"] is None


def test_naive_timestamps_read_as_utc():
    doc = make_cold_transfer().workflow.to_dict()
    doc["state_updated_at"] = "2026-01-05T10:00:00"
    workflow = WorkflowMetadata.from_dict(doc)
    assert workflow.state_updated_at.tzinfo is not None
    assert workflow.state_updated_at.hour == 10
    assert workflow.sla_deadlines.initial_response == T0.replace(hour=11)


def test_missing_optional_keys_default():
    doc = make_cold_transfer().workflow.to_dict()
    for key in ("escalated", "escalated_at", "state_updated_at", "state_notes"):
        doc.pop(key)
    workflow = WorkflowMetadata.from_dict(doc)
    assert workflow.escalated is False
    assert workflow.offline_state == OfflineWorkflowState.SUBMITTED
