"""Audit recorder: writes workflow audit entries in their own transaction."""

from __future__ import annotations

from typing import Any

from app.application.dtos.audit_entry import AuditEntryCreate
from app.application.interfaces.services import ITransactionManager
from app.core.config import get_settings
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class SqlAuditRecorder:
    """IAuditRecorder backed by the audit_entry table.

    Called after the business transaction committed. A failed write is
    logged and suppressed; the transition it describes stays committed.
    """

    def __init__(
        self, transactions: ITransactionManager, enabled: bool | None = None
    ) -> None:
        self._transactions = transactions
        self._enabled = get_settings().audit_enabled if enabled is None else enabled

    async def record(
        self,
        actor_id: str,
        action_code: str,
        target_kind: str,
        target_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Append one audit entry."""
        if not self._enabled:
            logger.info(
                "Audit (disabled): %s %s %s by %s", action_code, target_kind, target_id, actor_id
            )
            return
        entry = AuditEntryCreate(
            actor_id=actor_id,
            action=action_code,
            target_kind=target_kind,
            target_id=target_id,
            details=details,
        )
        try:
            async with self._transactions.transaction() as uow:
                await uow.audit_entries.append(entry)
        except Exception:
            logger.exception(
                "Failed to write audit entry %s for %s %s", action_code, target_kind, target_id
            )
