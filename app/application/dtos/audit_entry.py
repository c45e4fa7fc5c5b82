"""DTOs for the workflow audit trail."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditEntryCreate:
    """Input for appending one audit entry. Append-only; no update."""

    actor_id: str
    action: str
    target_kind: str
    target_id: str
    details: dict[str, Any] | None


@dataclass(frozen=True)
class AuditEntryResult:
    """Single audit entry (read-model for list)."""

    id: str
    actor_id: str
    action: str
    target_kind: str
    target_id: str
    details: dict[str, Any] | None
    created_at: datetime
