"""Tests for domain exceptions (error_code, error_class, details)."""

from app.domain.exceptions import (
    AlreadyAwardedException,
    AuthorizationDeniedException,
    DuplicateResponseException,
    InvalidStateException,
    ResourceNotFoundException,
    RfpFlowException,
    SqlNotConfiguredException,
    TransientStorageException,
    ValidationException,
)


def test_rfpflow_exception_default_error_code() -> None:
    """Base RfpFlowException uses class name as error_code when not provided."""
    exc = RfpFlowException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "RfpFlowException"
    assert exc.details == {}
    assert exc.error_class == "bad_request"
    assert exc.retryable is False


def test_to_dict_omits_empty_details() -> None:
    exc = RfpFlowException("Oops", error_code="CUSTOM")
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops"}


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Rejection reason is required", field="reason")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "reason"}
    assert exc.error_class == "bad_request"


def test_authorization_denied_exposes_reason_only() -> None:
    """Denials carry the reason code, resource kind and action; nothing from the policy."""
    exc = AuthorizationDeniedException("not_owner", "rfp", "publish")
    assert exc.reason == "not_owner"
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.error_class == "forbidden"
    assert exc.details == {"reason": "not_owner", "resource": "rfp", "action": "publish"}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("supplier_response", "r-1")
    assert "r-1" in exc.message
    assert exc.error_code == "NOT_FOUND"
    assert exc.error_class == "not_found"
    assert exc.details == {"resource_type": "supplier_response", "resource_id": "r-1"}


def test_invalid_state_exception_default_and_custom_message() -> None:
    exc = InvalidStateException("rfp", "publish", "Closed")
    assert exc.message == "Cannot publish rfp in status 'Closed'"
    assert exc.error_class == "conflict"
    assert exc.details["current_status"] == "Closed"

    custom = InvalidStateException("rfp", "respond", "Draft", message="Not open")
    assert custom.message == "Not open"


def test_conflict_exceptions() -> None:
    awarded = AlreadyAwardedException("rfp-1")
    assert awarded.error_code == "ALREADY_AWARDED"
    assert awarded.error_class == "conflict"
    assert awarded.details == {"rfp_id": "rfp-1"}

    duplicate = DuplicateResponseException("rfp-1", "sup-1")
    assert duplicate.error_code == "DUPLICATE_RESPONSE"
    assert duplicate.error_class == "conflict"
    assert duplicate.details == {"rfp_id": "rfp-1", "supplier_id": "sup-1"}


def test_transient_storage_exception_is_retryable() -> None:
    exc = TransientStorageException()
    assert exc.retryable is True
    assert exc.error_class == "retryable"
    assert exc.error_code == "STORAGE_UNAVAILABLE"


def test_sql_not_configured_exception() -> None:
    exc = SqlNotConfiguredException()
    assert exc.error_code == "SERVICE_UNAVAILABLE"
    assert "DATABASE_URL" in exc.message
