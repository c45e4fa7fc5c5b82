"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities or application DTOs only; no infrastructure
imports. Soft-deleted rows are invisible to every read unless stated otherwise.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.audit_entry import AuditEntryCreate, AuditEntryResult
    from app.application.dtos.rfp import RfpVersionData
    from app.application.dtos.supplier_response import SupplierResponseData
    from app.domain.entities.rfp import RfpEntity, RfpVersionEntity
    from app.domain.entities.role import RoleEntity
    from app.domain.entities.supplier_response import SupplierResponseEntity


# RFP repository interface
class IRfpRepository(Protocol):
    """Protocol for RFP and RFP version persistence (DIP)."""

    async def get(self, rfp_id: str) -> RfpEntity | None:
        """Return the RFP, or None when missing or soft-deleted."""

    async def create(
        self, title: str, buyer_id: str, content: RfpVersionData
    ) -> tuple[RfpEntity, RfpVersionEntity]:
        """Create a Draft RFP with version 1 as its current version."""

    async def list_rfps(
        self,
        *,
        buyer_id: str | None = None,
        statuses: Collection[str] | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[RfpEntity]:
        """Return RFPs (newest first) filtered by buyer and/or status."""

    async def get_version(self, version_id: str) -> RfpVersionEntity | None:
        """Return a version by ID."""

    async def list_versions(self, rfp_id: str) -> list[RfpVersionEntity]:
        """Return versions of the RFP, newest first."""

    async def add_version(
        self, rfp_id: str, content: RfpVersionData
    ) -> RfpVersionEntity:
        """Append a version numbered max(existing) + 1."""

    async def set_current_version(
        self, rfp_id: str, version_id: str, *, title: str | None = None
    ) -> RfpEntity | None:
        """Point the Draft RFP at version_id. None when the RFP is no longer Draft."""

    async def update_version_content(
        self, version_id: str, content: RfpVersionData
    ) -> RfpVersionEntity:
        """Overwrite the content of an existing version in place."""

    async def update_title(self, rfp_id: str, title: str) -> None:
        """Change the RFP title."""

    async def transition_status(
        self,
        rfp_id: str,
        from_statuses: Collection[str],
        to_status: str,
        changes: dict[str, Any] | None = None,
    ) -> RfpEntity | None:
        """Conditionally move status; None when the row is no longer in from_statuses."""

    async def mark_awarded(
        self,
        rfp_id: str,
        response_id: str,
        from_statuses: Collection[str],
        awarded_at: datetime,
    ) -> bool:
        """Set Awarded and awarded_response_id only if not yet awarded. Returns success."""

    async def soft_delete(self, rfp_id: str, deleted_at: datetime) -> bool:
        """Set deleted_at; False when already deleted or missing."""


# Supplier response repository interface
class ISupplierResponseRepository(Protocol):
    """Protocol for supplier response persistence (DIP)."""

    async def get(self, response_id: str) -> SupplierResponseEntity | None:
        """Return the response, or None when missing or soft-deleted."""

    async def get_for_supplier(
        self, rfp_id: str, supplier_id: str
    ) -> SupplierResponseEntity | None:
        """Return the supplier's live response to the RFP, if any."""

    async def create(
        self, rfp_id: str, supplier_id: str, data: SupplierResponseData
    ) -> SupplierResponseEntity:
        """Create a Draft response. Raises DuplicateResponseException on (rfp, supplier) clash."""

    async def update_content(
        self, response_id: str, data: SupplierResponseData, expected_status: str
    ) -> SupplierResponseEntity | None:
        """Overwrite content only while status == expected_status; None otherwise."""

    async def transition_status(
        self,
        response_id: str,
        from_statuses: Collection[str],
        to_status: str,
        changes: dict[str, Any] | None = None,
    ) -> SupplierResponseEntity | None:
        """Conditionally move status; None when the row is no longer in from_statuses."""

    async def mark_awarded(
        self, response_id: str, rfp_id: str, decided_at: datetime
    ) -> bool:
        """Approved -> Awarded for a response of rfp_id. Returns success."""

    async def list_for_rfp(
        self,
        rfp_id: str,
        *,
        supplier_id: str | None = None,
        exclude_statuses: Collection[str] | None = None,
    ) -> list[SupplierResponseEntity]:
        """Return live responses for the RFP (oldest first)."""

    async def soft_delete(
        self,
        response_id: str,
        deleted_at: datetime,
        exclude_statuses: Collection[str] = (),
    ) -> bool:
        """Set deleted_at unless status is in exclude_statuses. Returns success."""


# Role repository interface
class IRoleRepository(Protocol):
    """Protocol for role persistence (DIP)."""

    async def get_by_name(self, name: str) -> RoleEntity | None:
        """Return role by unique name with its parsed policy."""

    async def upsert(
        self, name: str, description: str | None, document: dict[str, Any]
    ) -> RoleEntity:
        """Create the role or replace its description and permission document."""

    async def update_document(
        self, name: str, document: dict[str, Any]
    ) -> RoleEntity | None:
        """Replace the permission document; None when the role does not exist."""


# Audit entry repository interface
class IAuditEntryRepository(Protocol):
    """Protocol for the append-only audit trail (DIP)."""

    async def append(self, entry: AuditEntryCreate) -> AuditEntryResult:
        """Append one entry."""

    async def list_entries(
        self,
        *,
        actor_id: str | None = None,
        target_kind: str | None = None,
        target_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[AuditEntryResult]:
        """Return entries newest first with optional filters."""
