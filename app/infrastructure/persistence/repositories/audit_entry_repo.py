"""Audit entry repository: append-only insert and filtered list."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.audit_entry import AuditEntryCreate, AuditEntryResult
from app.infrastructure.persistence.models.audit_entry import AuditEntry
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc, utc_now


def _orm_to_result(row: AuditEntry) -> AuditEntryResult:
    """Map ORM to AuditEntryResult."""
    return AuditEntryResult(
        id=row.id,
        actor_id=row.actor_id,
        action=row.action,
        target_kind=row.target_kind,
        target_id=row.target_id,
        details=row.details,
        created_at=ensure_utc(row.created_at) or utc_now(),
    )


class AuditEntryRepository(BaseRepository[AuditEntry]):
    """Audit entry repository (IAuditEntryRepository). No update or delete."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AuditEntry)

    async def append(self, entry: AuditEntryCreate) -> AuditEntryResult:
        row = await self.add(
            AuditEntry(
                actor_id=entry.actor_id,
                action=entry.action,
                target_kind=entry.target_kind,
                target_id=entry.target_id,
                details=entry.details,
            )
        )
        return _orm_to_result(row)

    async def list_entries(
        self,
        *,
        actor_id: str | None = None,
        target_kind: str | None = None,
        target_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[AuditEntryResult]:
        q = select(AuditEntry)
        if actor_id is not None:
            q = q.where(AuditEntry.actor_id == actor_id)
        if target_kind is not None:
            q = q.where(AuditEntry.target_kind == target_kind)
        if target_id is not None:
            q = q.where(AuditEntry.target_id == target_id)
        q = q.order_by(AuditEntry.created_at.desc(), AuditEntry.id.desc())
        result = await self.db.execute(q.offset(skip).limit(limit))
        return [_orm_to_result(r) for r in result.scalars().all()]
