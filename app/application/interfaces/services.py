"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        IAuditEntryRepository,
        IRfpRepository,
        IRoleRepository,
        ISupplierResponseRepository,
    )


# Resource context resolver interface
class IResourceContextResolver(Protocol):
    """Read-only lookups the authorization gate needs.

    Every method raises ResourceNotFoundException when the resource does not
    exist or is soft-deleted.
    """

    async def get_owner(self, resource_kind: str, resource_id: str) -> str:
        """Return the owner id: RFP buyer, response supplier, or buyer of a version's RFP."""

    async def get_status(self, resource_kind: str, resource_id: str) -> str:
        """Return the current status code (a version reports its RFP's status)."""

    async def get_parent_rfp_owner(self, response_id: str) -> str:
        """Return the buyer id of the RFP a response belongs to."""


# Audit recorder interface
class IAuditRecorder(Protocol):
    """Fire-and-forget write of one audit entry after a committed transition.

    Implementations log and suppress their own failures.
    """

    async def record(
        self,
        actor_id: str,
        action_code: str,
        target_kind: str,
        target_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Append an audit entry."""


# Transition hook interface
class ITransitionHook(Protocol):
    """Post-commit observer of lifecycle transitions (e.g. notifications)."""

    async def on_transition(
        self,
        entity_kind: str,
        entity_id: str,
        from_status: str | None,
        to_status: str,
    ) -> None:
        """Handle a committed transition. from_status is None on creation."""


# Unit of work interface
class IUnitOfWork(Protocol):
    """Repositories bound to one open transaction."""

    rfps: IRfpRepository
    responses: ISupplierResponseRepository
    roles: IRoleRepository
    audit_entries: IAuditEntryRepository


# Transaction manager interface
class ITransactionManager(Protocol):
    """Opens units of work. Commits on clean exit, rolls back on exception.

    Storage outages surface as TransientStorageException.
    """

    def transaction(self) -> AbstractAsyncContextManager[IUnitOfWork]:
        """Return an async context manager yielding a unit of work."""
