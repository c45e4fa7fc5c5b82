"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.audit_entry_repo import (
    AuditEntryRepository,
)
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.rfp_repo import RfpRepository
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.infrastructure.persistence.repositories.supplier_response_repo import (
    SupplierResponseRepository,
)

__all__ = [
    "AuditEntryRepository",
    "BaseRepository",
    "RfpRepository",
    "RoleRepository",
    "SupplierResponseRepository",
]
