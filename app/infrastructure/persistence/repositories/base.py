"""Base repository: add, get and conditional update helpers."""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository bound to one session (one unit of work).

    Status changes go through _conditional_update so the WHERE clause carries
    the expected current state; a row count other than 1 means another
    transaction got there first.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None (soft-deleted rows excluded)."""
        model: Any = self.model
        q = select(self.model).where(model.id == entity_id)
        if hasattr(model, "deleted_at"):
            q = q.where(model.deleted_at.is_(None))
        result = await self.db.execute(q.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def add(self, obj: ModelType) -> ModelType:
        """Persist a new record and load server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _conditional_update(
        self, where: list[ColumnElement[bool]], values: dict[str, Any]
    ) -> bool:
        """UPDATE ... WHERE <where>; True only when exactly one row changed."""
        result = await self.db.execute(
            update(self.model)
            .where(*where)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
