"""Domain enumerations for the RFP workflow.

Status codes are the wire-level strings stored in the database and referenced
by role permission documents. They are defined once here and reused by the
policy loader, the lifecycles and the persistence layer.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class RfpStatus(_ValuesMixin, str, Enum):
    """RFP lifecycle status.

    Draft is the only status in which versions can be added or switched.
    Cancelled and Awarded are terminal; Closed can still be awarded.
    """

    DRAFT = "Draft"
    PUBLISHED = "Published"
    CLOSED = "Closed"
    CANCELLED = "Cancelled"
    AWARDED = "Awarded"


class ResponseStatus(_ValuesMixin, str, Enum):
    """Supplier response lifecycle status."""

    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    UNDER_REVIEW = "Under Review"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    AWARDED = "Awarded"


class ResourceKind(_ValuesMixin, str, Enum):
    """Resource kinds a permission document can grant actions on.

    RFP_VERSION is only used for ownership/status resolution of documents
    attached to an RFP version; policies do not grant on it directly.
    """

    RFP = "rfp"
    SUPPLIER_RESPONSE = "supplier_response"
    DOCUMENTS = "documents"
    AUDIT = "audit"
    ADMIN = "admin"
    RFP_VERSION = "rfp_version"


class PermissionScope(_ValuesMixin, str, Enum):
    """Qualifier restricting a granted action to related resources."""

    NONE = "none"
    OWN = "own"
    PUBLISHED = "published"
    RFP_OWNER = "rfp_owner"


class DenyReason(_ValuesMixin, str, Enum):
    """Reason carried by every Deny decision."""

    NOT_GRANTED = "not_granted"
    NOT_OWNER = "not_owner"
    NOT_PUBLISHED = "not_published"
    NOT_RFP_OWNER = "not_rfp_owner"
    STATUS_NOT_ALLOWED = "status_not_allowed"
    TRANSITION_NOT_ALLOWED = "transition_not_allowed"
    MISSING_TARGET_STATUS = "missing_target_status"


def status_codes_for(kind: str) -> frozenset[str]:
    """Return the status codes a permission rule on `kind` may reference.

    rfp rules reference RFP codes, supplier_response rules reference response
    codes; any other kind may reference either set.
    """
    if kind == ResourceKind.RFP.value:
        return frozenset(RfpStatus.values())
    if kind == ResourceKind.SUPPLIER_RESPONSE.value:
        return frozenset(ResponseStatus.values())
    return frozenset(RfpStatus.values()) | frozenset(ResponseStatus.values())
