"""Role repository. Parses the stored permission document into a PermissionPolicy."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.role import RoleEntity
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.schemas.permission_policy import parse_policy_document


def _orm_to_entity(r: Role) -> RoleEntity:
    """Map Role ORM to RoleEntity, validating the permission document."""
    return RoleEntity(
        id=r.id,
        name=r.name,
        description=r.description,
        policy=parse_policy_document(r.permissions),
    )


class RoleRepository(BaseRepository[Role]):
    """Role repository (IRoleRepository)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    async def _get_row(self, name: str) -> Role | None:
        result = await self.db.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> RoleEntity | None:
        row = await self._get_row(name)
        return _orm_to_entity(row) if row else None

    async def upsert(
        self, name: str, description: str | None, document: dict[str, Any]
    ) -> RoleEntity:
        row = await self._get_row(name)
        if row is None:
            row = await self.add(
                Role(name=name, description=description, permissions=document)
            )
        else:
            row.description = description
            row.permissions = document
            await self.db.flush()
        return _orm_to_entity(row)

    async def update_document(
        self, name: str, document: dict[str, Any]
    ) -> RoleEntity | None:
        row = await self._get_row(name)
        if row is None:
            return None
        row.permissions = document
        await self.db.flush()
        return _orm_to_entity(row)
