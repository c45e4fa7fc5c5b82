"""Shared enumerations for the rfpflow application.

Cross-cutting enums used by application and infrastructure (audit action
codes). Domain-specific enums (e.g. RfpStatus) live in
app.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class AuditAction(_ValuesMixin, str, Enum):
    """Audit action codes written after each committed transition."""

    RFP_CREATED = "RFP_CREATED"
    RFP_UPDATED = "RFP_UPDATED"
    RFP_VERSION_CREATED = "RFP_VERSION_CREATED"
    RFP_VERSION_SWITCHED = "RFP_VERSION_SWITCHED"
    RFP_PUBLISHED = "RFP_PUBLISHED"
    RFP_STATUS_CHANGED = "RFP_STATUS_CHANGED"
    RFP_DELETED = "RFP_DELETED"
    RESPONSE_CREATED = "RESPONSE_CREATED"
    RESPONSE_UPDATED = "RESPONSE_UPDATED"
    RESPONSE_SUBMITTED = "RESPONSE_SUBMITTED"
    RESPONSE_MOVED_TO_REVIEW = "RESPONSE_MOVED_TO_REVIEW"
    RESPONSE_APPROVED = "RESPONSE_APPROVED"
    RESPONSE_REJECTED = "RESPONSE_REJECTED"
    RESPONSE_REOPENED = "RESPONSE_REOPENED"
    RESPONSE_AWARDED = "RESPONSE_AWARDED"
    RESPONSE_DELETED = "RESPONSE_DELETED"
    PERMISSIONS_UPDATED = "PERMISSIONS_UPDATED"
