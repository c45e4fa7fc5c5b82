"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.audit_entry import AuditEntry
from app.infrastructure.persistence.models.mixins import (
    AuditedModel,
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.rfp import Rfp, RfpVersion
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.supplier_response import SupplierResponse

__all__ = [
    "AuditEntry",
    "AuditedModel",
    "CuidMixin",
    "Rfp",
    "RfpVersion",
    "Role",
    "SoftDeleteMixin",
    "SupplierResponse",
    "TimestampMixin",
]
