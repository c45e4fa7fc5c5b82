"""RFP and RFP version repository. Returns domain entities."""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.rfp import RfpVersionData
from app.domain.entities.rfp import RfpEntity, RfpVersionEntity
from app.domain.enums import RfpStatus
from app.domain.exceptions import TransientStorageException
from app.infrastructure.persistence.models.rfp import Rfp, RfpVersion
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _rfp_to_entity(r: Rfp) -> RfpEntity:
    """Map Rfp ORM to RfpEntity."""
    return RfpEntity(
        id=r.id,
        title=r.title,
        buyer_id=r.buyer_id,
        status=r.status,
        current_version_id=r.current_version_id,
        awarded_response_id=r.awarded_response_id,
        awarded_at=ensure_utc(r.awarded_at),
        closed_at=ensure_utc(r.closed_at),
        deleted_at=ensure_utc(r.deleted_at),
        created_at=ensure_utc(r.created_at),
        updated_at=ensure_utc(r.updated_at),
    )


def _version_to_entity(v: RfpVersion) -> RfpVersionEntity:
    """Map RfpVersion ORM to RfpVersionEntity."""
    return RfpVersionEntity(
        id=v.id,
        rfp_id=v.rfp_id,
        version_number=v.version_number,
        description=v.description,
        requirements=v.requirements,
        budget_min=v.budget_min,
        budget_max=v.budget_max,
        deadline=ensure_utc(v.deadline),
        notes=v.notes,
        created_at=ensure_utc(v.created_at),
    )


def _content_values(content: RfpVersionData) -> dict[str, Any]:
    return {
        "description": content.description,
        "requirements": content.requirements,
        "budget_min": content.budget_min,
        "budget_max": content.budget_max,
        "deadline": content.deadline,
        "notes": content.notes,
    }


class RfpRepository(BaseRepository[Rfp]):
    """RFP repository (IRfpRepository). Soft-deleted RFPs are invisible."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Rfp)

    def _live(self, rfp_id: str) -> list[Any]:
        return [Rfp.id == rfp_id, Rfp.deleted_at.is_(None)]

    async def get(self, rfp_id: str) -> RfpEntity | None:
        row = await self.get_by_id(rfp_id)
        return _rfp_to_entity(row) if row else None

    async def create(
        self, title: str, buyer_id: str, content: RfpVersionData
    ) -> tuple[RfpEntity, RfpVersionEntity]:
        """Create a Draft RFP and its version 1, then point the RFP at it."""
        rfp = await self.add(
            Rfp(title=title, buyer_id=buyer_id, status=RfpStatus.DRAFT.value)
        )
        version = RfpVersion(rfp_id=rfp.id, version_number=1, **_content_values(content))
        self.db.add(version)
        await self.db.flush()
        await self.db.refresh(version)
        rfp.current_version_id = version.id
        await self.db.flush()
        await self.db.refresh(rfp)
        return _rfp_to_entity(rfp), _version_to_entity(version)

    async def list_rfps(
        self,
        *,
        buyer_id: str | None = None,
        statuses: Collection[str] | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[RfpEntity]:
        q = select(Rfp).where(Rfp.deleted_at.is_(None))
        if buyer_id is not None:
            q = q.where(Rfp.buyer_id == buyer_id)
        if statuses is not None:
            q = q.where(Rfp.status.in_(list(statuses)))
        q = q.order_by(Rfp.created_at.desc(), Rfp.id.desc()).offset(skip).limit(limit)
        result = await self.db.execute(q)
        return [_rfp_to_entity(r) for r in result.scalars().all()]

    async def get_version(self, version_id: str) -> RfpVersionEntity | None:
        result = await self.db.execute(
            select(RfpVersion)
            .where(RfpVersion.id == version_id)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return _version_to_entity(row) if row else None

    async def list_versions(self, rfp_id: str) -> list[RfpVersionEntity]:
        result = await self.db.execute(
            select(RfpVersion)
            .where(RfpVersion.rfp_id == rfp_id)
            .order_by(RfpVersion.version_number.desc())
        )
        return [_version_to_entity(v) for v in result.scalars().all()]

    async def add_version(
        self, rfp_id: str, content: RfpVersionData
    ) -> RfpVersionEntity:
        """Insert version max+1. A concurrent insert of the same number is retryable."""
        result = await self.db.execute(
            select(func.max(RfpVersion.version_number)).where(
                RfpVersion.rfp_id == rfp_id
            )
        )
        next_number = (result.scalar() or 0) + 1
        version = RfpVersion(
            rfp_id=rfp_id, version_number=next_number, **_content_values(content)
        )
        self.db.add(version)
        try:
            await self.db.flush()
        except IntegrityError:
            raise TransientStorageException(
                "Concurrent version creation for this RFP; retry"
            ) from None
        await self.db.refresh(version)
        return _version_to_entity(version)

    async def set_current_version(
        self, rfp_id: str, version_id: str, *, title: str | None = None
    ) -> RfpEntity | None:
        values: dict[str, Any] = {"current_version_id": version_id}
        if title is not None:
            values["title"] = title
        ok = await self._conditional_update(
            [*self._live(rfp_id), Rfp.status == RfpStatus.DRAFT.value], values
        )
        return await self.get(rfp_id) if ok else None

    async def update_version_content(
        self, version_id: str, content: RfpVersionData
    ) -> RfpVersionEntity:
        await self.db.execute(
            update(RfpVersion)
            .where(RfpVersion.id == version_id)
            .values(**_content_values(content))
            .execution_options(synchronize_session=False)
        )
        updated = await self.get_version(version_id)
        assert updated is not None
        return updated

    async def update_title(self, rfp_id: str, title: str) -> None:
        await self._conditional_update(self._live(rfp_id), {"title": title})

    async def transition_status(
        self,
        rfp_id: str,
        from_statuses: Collection[str],
        to_status: str,
        changes: dict[str, Any] | None = None,
    ) -> RfpEntity | None:
        ok = await self._conditional_update(
            [*self._live(rfp_id), Rfp.status.in_(list(from_statuses))],
            {"status": to_status, **(changes or {})},
        )
        return await self.get(rfp_id) if ok else None

    async def mark_awarded(
        self,
        rfp_id: str,
        response_id: str,
        from_statuses: Collection[str],
        awarded_at: datetime,
    ) -> bool:
        return await self._conditional_update(
            [
                *self._live(rfp_id),
                Rfp.awarded_response_id.is_(None),
                Rfp.status.in_(list(from_statuses)),
            ],
            {
                "status": RfpStatus.AWARDED.value,
                "awarded_response_id": response_id,
                "awarded_at": awarded_at,
            },
        )

    async def soft_delete(self, rfp_id: str, deleted_at: datetime) -> bool:
        return await self._conditional_update(
            self._live(rfp_id), {"deleted_at": deleted_at}
        )
