"""Resolves owners and statuses from the DB (implements IResourceContextResolver)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.domain.enums import ResourceKind
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.persistence.models.rfp import Rfp, RfpVersion
from app.infrastructure.persistence.models.supplier_response import SupplierResponse


def _live_response(column: Any, response_id: str) -> Any:
    """Response column, hidden when the response or its RFP is soft-deleted."""
    return (
        select(column)
        .join(Rfp, Rfp.id == SupplierResponse.rfp_id)
        .where(
            SupplierResponse.id == response_id,
            SupplierResponse.deleted_at.is_(None),
            Rfp.deleted_at.is_(None),
        )
    )


def _owner_query(resource_kind: str, resource_id: str) -> Any:
    if resource_kind == ResourceKind.RFP.value:
        return select(Rfp.buyer_id).where(Rfp.id == resource_id, Rfp.deleted_at.is_(None))
    if resource_kind == ResourceKind.SUPPLIER_RESPONSE.value:
        return _live_response(SupplierResponse.supplier_id, resource_id)
    if resource_kind == ResourceKind.RFP_VERSION.value:
        return (
            select(Rfp.buyer_id)
            .join(RfpVersion, RfpVersion.rfp_id == Rfp.id)
            .where(RfpVersion.id == resource_id, Rfp.deleted_at.is_(None))
        )
    return None


def _status_query(resource_kind: str, resource_id: str) -> Any:
    if resource_kind == ResourceKind.RFP.value:
        return select(Rfp.status).where(Rfp.id == resource_id, Rfp.deleted_at.is_(None))
    if resource_kind == ResourceKind.SUPPLIER_RESPONSE.value:
        return _live_response(SupplierResponse.status, resource_id)
    if resource_kind == ResourceKind.RFP_VERSION.value:
        return (
            select(Rfp.status)
            .join(RfpVersion, RfpVersion.rfp_id == Rfp.id)
            .where(RfpVersion.id == resource_id, Rfp.deleted_at.is_(None))
        )
    return None


class ResourceContextResolver:
    """Read-only owner/status lookups; one short session per lookup.

    Soft-deleted rows and unsupported kinds raise ResourceNotFoundException.
    """

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] | None = None
    ) -> None:
        self._session_factory = session_factory

    async def _scalar(self, query: Any, resource_kind: str, resource_id: str) -> str:
        if query is None:
            raise ResourceNotFoundException(resource_kind, resource_id)
        factory = self._session_factory or get_session_factory()
        async with factory() as session:
            value = (await session.execute(query)).scalar_one_or_none()
        if value is None:
            raise ResourceNotFoundException(resource_kind, resource_id)
        return value

    async def get_owner(self, resource_kind: str, resource_id: str) -> str:
        """Return the buyer (RFP, RFP version) or supplier (response) id."""
        return await self._scalar(
            _owner_query(resource_kind, resource_id), resource_kind, resource_id
        )

    async def get_status(self, resource_kind: str, resource_id: str) -> str:
        """Return the current status code; a version reports its RFP's status."""
        return await self._scalar(
            _status_query(resource_kind, resource_id), resource_kind, resource_id
        )

    async def get_parent_rfp_owner(self, response_id: str) -> str:
        """Return the buyer id of the response's RFP."""
        query = (
            select(Rfp.buyer_id)
            .join(SupplierResponse, SupplierResponse.rfp_id == Rfp.id)
            .where(
                SupplierResponse.id == response_id,
                SupplierResponse.deleted_at.is_(None),
                Rfp.deleted_at.is_(None),
            )
        )
        return await self._scalar(
            query, ResourceKind.SUPPLIER_RESPONSE.value, response_id
        )
