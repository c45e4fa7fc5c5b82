"""Supplier response repository. Returns domain entities."""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.supplier_response import SupplierResponseData
from app.domain.entities.supplier_response import SupplierResponseEntity
from app.domain.enums import ResponseStatus
from app.domain.exceptions import DuplicateResponseException
from app.infrastructure.persistence.models.supplier_response import SupplierResponse
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _orm_to_entity(r: SupplierResponse) -> SupplierResponseEntity:
    """Map SupplierResponse ORM to SupplierResponseEntity."""
    return SupplierResponseEntity(
        id=r.id,
        rfp_id=r.rfp_id,
        supplier_id=r.supplier_id,
        status=r.status,
        proposed_budget=r.proposed_budget,
        timeline=r.timeline,
        cover_letter=r.cover_letter,
        rejection_reason=r.rejection_reason,
        reviewed_at=ensure_utc(r.reviewed_at),
        decided_at=ensure_utc(r.decided_at),
        deleted_at=ensure_utc(r.deleted_at),
        created_at=ensure_utc(r.created_at),
        updated_at=ensure_utc(r.updated_at),
    )


def _content_values(data: SupplierResponseData) -> dict[str, Any]:
    return {
        "proposed_budget": data.proposed_budget,
        "timeline": data.timeline,
        "cover_letter": data.cover_letter,
    }


class SupplierResponseRepository(BaseRepository[SupplierResponse]):
    """Supplier response repository (ISupplierResponseRepository)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, SupplierResponse)

    def _live(self, response_id: str) -> list[Any]:
        return [SupplierResponse.id == response_id, SupplierResponse.deleted_at.is_(None)]

    async def get(self, response_id: str) -> SupplierResponseEntity | None:
        row = await self.get_by_id(response_id)
        return _orm_to_entity(row) if row else None

    async def get_for_supplier(
        self, rfp_id: str, supplier_id: str
    ) -> SupplierResponseEntity | None:
        result = await self.db.execute(
            select(SupplierResponse).where(
                SupplierResponse.rfp_id == rfp_id,
                SupplierResponse.supplier_id == supplier_id,
                SupplierResponse.deleted_at.is_(None),
            )
        )
        row = result.scalar_one_or_none()
        return _orm_to_entity(row) if row else None

    async def create(
        self, rfp_id: str, supplier_id: str, data: SupplierResponseData
    ) -> SupplierResponseEntity:
        """Insert a Draft response; the (rfp_id, supplier_id) constraint decides races."""
        obj = SupplierResponse(
            rfp_id=rfp_id,
            supplier_id=supplier_id,
            status=ResponseStatus.DRAFT.value,
            **_content_values(data),
        )
        try:
            obj = await self.add(obj)
        except IntegrityError:
            raise DuplicateResponseException(rfp_id, supplier_id) from None
        return _orm_to_entity(obj)

    async def update_content(
        self, response_id: str, data: SupplierResponseData, expected_status: str
    ) -> SupplierResponseEntity | None:
        ok = await self._conditional_update(
            [*self._live(response_id), SupplierResponse.status == expected_status],
            _content_values(data),
        )
        return await self.get(response_id) if ok else None

    async def transition_status(
        self,
        response_id: str,
        from_statuses: Collection[str],
        to_status: str,
        changes: dict[str, Any] | None = None,
    ) -> SupplierResponseEntity | None:
        ok = await self._conditional_update(
            [*self._live(response_id), SupplierResponse.status.in_(list(from_statuses))],
            {"status": to_status, **(changes or {})},
        )
        return await self.get(response_id) if ok else None

    async def mark_awarded(
        self, response_id: str, rfp_id: str, decided_at: datetime
    ) -> bool:
        return await self._conditional_update(
            [
                *self._live(response_id),
                SupplierResponse.rfp_id == rfp_id,
                SupplierResponse.status == ResponseStatus.APPROVED.value,
            ],
            {"status": ResponseStatus.AWARDED.value, "decided_at": decided_at},
        )

    async def list_for_rfp(
        self,
        rfp_id: str,
        *,
        supplier_id: str | None = None,
        exclude_statuses: Collection[str] | None = None,
    ) -> list[SupplierResponseEntity]:
        q = select(SupplierResponse).where(
            SupplierResponse.rfp_id == rfp_id, SupplierResponse.deleted_at.is_(None)
        )
        if supplier_id is not None:
            q = q.where(SupplierResponse.supplier_id == supplier_id)
        if exclude_statuses:
            q = q.where(SupplierResponse.status.not_in(list(exclude_statuses)))
        q = q.order_by(SupplierResponse.created_at, SupplierResponse.id)
        result = await self.db.execute(q)
        return [_orm_to_entity(r) for r in result.scalars().all()]

    async def soft_delete(
        self,
        response_id: str,
        deleted_at: datetime,
        exclude_statuses: Collection[str] = (),
    ) -> bool:
        where = self._live(response_id)
        if exclude_statuses:
            where.append(SupplierResponse.status.not_in(list(exclude_statuses)))
        return await self._conditional_update(where, {"deleted_at": deleted_at})
