"""Audit entry ORM model. Append-only record of committed workflow actions."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Connection, DateTime, String, event
from sqlalchemy.orm import Mapped, Mapper, mapped_column
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base
from app.shared.utils.generators import generate_cuid


class AuditEntry(Base):
    """Audit trail entry. Who did what to which RFP/response, when. No update/delete."""

    __tablename__ = "audit_entry"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    actor_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    action: Mapped[str] = mapped_column(String, nullable=False)
    target_kind: Mapped[str] = mapped_column(String, nullable=False)
    target_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )


@event.listens_for(AuditEntry, "before_update")
def _prevent_audit_entry_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditEntry
) -> None:
    """Audit entries are append-only; updates are forbidden."""
    raise ValueError("Audit entries are immutable and cannot be updated.")


@event.listens_for(AuditEntry, "before_delete")
def _prevent_audit_entry_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditEntry
) -> None:
    """Audit entries cannot be deleted."""
    raise ValueError("Audit entries cannot be deleted.")
