"""Application DTOs (no ORM dependency)."""

from app.application.dtos.audit_entry import AuditEntryCreate, AuditEntryResult
from app.application.dtos.rfp import RfpCreate, RfpUpdate, RfpVersionData
from app.application.dtos.supplier_response import SupplierResponseData

__all__ = [
    "AuditEntryCreate",
    "AuditEntryResult",
    "RfpCreate",
    "RfpUpdate",
    "RfpVersionData",
    "SupplierResponseData",
]
