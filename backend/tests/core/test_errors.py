"""Error Hierarchy — tests for codes, HTTP statuses and the response envelope.

Tests cover:
    - Each error class maps to its code, category and HTTP status
    - ValidationFailedError carries every violation in details
    - to_response prefers user_message and never includes debug_info
"""

import pytest

from coldflow.core.errors import (
    AmountParseError, ColdFlowError, ConcurrencyError, DatabaseError, ErrorCategory,
    ErrorContext, NotificationError, ResourceNotFoundError, TypeMismatchError,
    ValidationFailedError,
)
from coldflow.core.transfer_records import FieldViolation


@pytest.mark.parametrize("error,code,status", [
    (ResourceNotFoundError("Transfer", "t-1"), "RESOURCE_NOT_FOUND", 404),
    (TypeMismatchError("Transfer", "t-1", "hot"), "TYPE_MISMATCH", 400),
    (AmountParseError("x"), "AMOUNT_PARSE_ERROR", 400),
    (ConcurrencyError("moved"), "CONCURRENCY_CONFLICT", 409),
    (DatabaseError("down", "query"), "DATABASE_ERROR", 503),
    (NotificationError("500", "webhook"), "NOTIFICATION_ERROR", 502),
])
def test_error_codes_and_statuses(error, code, status):
    assert isinstance(error, ColdFlowError)
    assert error.code == code
    assert error.http_status == status


def test_validation_failed_carries_all_violations():
    violations = [
        FieldViolation("walletId", "Wallet is not a cold storage wallet"),
        FieldViolation("urgencyLevel", "Urgency level must be one of: low, normal, high, critical"),
    ]
    error = ValidationFailedError(violations)
    assert error.http_status == 400
    assert error.category == ErrorCategory.VALIDATION
    body = error.to_response()["error"]
    assert body["code"] == "VALIDATION_FAILED"
    assert body["details"] == [v.to_dict() for v in violations]
    assert "walletId, urgencyLevel" in body["message"]


def test_type_mismatch_message():
    error = TypeMismatchError("Transfer", "t-1", "hot")
    assert error.message == "Transfer 't-1' is not a cold storage transfer (type: hot)"


def test_response_envelope_hides_debug_info():
    context = ErrorContext(
        transfer_id="t-9", user_message="Try again later",
        debug_info={"sql": "UPDATE ..."},
    )
    body = DatabaseError("deadlock", "commit", context).to_response()["error"]
    assert body["message"] == "Try again later"
    assert body["context"] == {"transfer_id": "t-9", "wallet_id": None}
    assert body["category"] == "database"
    assert body["severity"] == "critical"
    assert "details" not in body
    assert "UPDATE" not in str(body)
