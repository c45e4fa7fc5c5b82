"""Domain exceptions for the rfpflow application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Callers (or the
FastAPI exception handlers in app.core) map them to responses using
error_class: forbidden, not_found, conflict, bad_request, retryable.
"""

from typing import Any


class RfpFlowException(Exception):
    """Base exception for all rfpflow errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. reason, resource_id).
        error_class: Coarse class callers map to a response (e.g. 403/409).
        retryable: True when the caller may retry the whole operation.
    """

    error_class: str = "bad_request"
    retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        payload: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationException(RfpFlowException):
    """Raised when input validation fails (e.g. empty rejection reason)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthorizationDeniedException(RfpFlowException):
    """Raised when the authorization gate denies an action.

    Only the reason code is exposed; the policy that produced it is not.
    """

    error_class = "forbidden"

    def __init__(self, reason: str, resource: str, action: str) -> None:
        """Initialize with deny reason, resource kind and action.

        Args:
            reason: Deny reason code (e.g. 'not_owner').
            resource: Resource kind (e.g. 'rfp').
            action: Attempted action (e.g. 'publish').
        """
        self.reason = reason
        super().__init__(
            f"Permission denied: {action} on {resource} ({reason})",
            "PERMISSION_DENIED",
            {"reason": reason, "resource": resource, "action": action},
        )


class ResourceNotFoundException(RfpFlowException):
    """Raised when a requested resource is missing or soft-deleted."""

    error_class = "not_found"

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and ID.

        Args:
            resource_type: Kind of resource (e.g. 'rfp', 'supplier_response').
            resource_id: ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidStateException(RfpFlowException):
    """Raised when an action is not legal from the entity's current status."""

    error_class = "conflict"

    def __init__(
        self,
        entity: str,
        action: str,
        current_status: str,
        message: str | None = None,
    ) -> None:
        """Initialize with entity kind, action and current status.

        Args:
            entity: Entity kind (e.g. 'rfp').
            action: Lifecycle action that was attempted.
            current_status: Status the entity holds.
            message: Optional override of the default message.
        """
        super().__init__(
            message or f"Cannot {action} {entity} in status '{current_status}'",
            "INVALID_STATE",
            {"entity": entity, "action": action, "current_status": current_status},
        )


class AlreadyAwardedException(RfpFlowException):
    """Raised when an RFP already has an awarded response."""

    error_class = "conflict"

    def __init__(self, rfp_id: str) -> None:
        """Initialize with the RFP that is already awarded.

        Args:
            rfp_id: The RFP ID.
        """
        super().__init__(
            f"RFP {rfp_id} has already been awarded",
            "ALREADY_AWARDED",
            {"rfp_id": rfp_id},
        )


class DuplicateResponseException(RfpFlowException):
    """Raised when a supplier already has a response for the RFP."""

    error_class = "conflict"

    def __init__(self, rfp_id: str, supplier_id: str) -> None:
        """Initialize with the RFP and supplier pair.

        Args:
            rfp_id: The RFP ID.
            supplier_id: The supplier (actor) ID.
        """
        super().__init__(
            "A response from this supplier already exists for the RFP",
            "DUPLICATE_RESPONSE",
            {"rfp_id": rfp_id, "supplier_id": supplier_id},
        )


class TransientStorageException(RfpFlowException):
    """Raised when the storage layer is temporarily unavailable.

    No state change was committed; the whole operation may be retried.
    """

    error_class = "retryable"
    retryable = True

    def __init__(self, message: str = "Storage temporarily unavailable") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the storage failure.
        """
        super().__init__(message, "STORAGE_UNAVAILABLE")


class SqlNotConfiguredException(RfpFlowException):
    """Raised when the SQL database is used but DATABASE_URL is not set."""

    error_class = "retryable"

    def __init__(self) -> None:
        """Initialize with a fixed message."""
        super().__init__(
            "SQL database not configured; set DATABASE_URL.",
            "SERVICE_UNAVAILABLE",
        )
