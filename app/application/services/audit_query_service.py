"""Audit trail queries, narrowed by the actor's audit/view rule."""

from __future__ import annotations

from app.application.dtos.audit_entry import AuditEntryResult
from app.application.interfaces.services import ITransactionManager
from app.application.services.authorization_gate import AuthorizationGate
from app.domain.enums import PermissionScope, ResourceKind
from app.domain.value_objects.policy import Actor

_AUDIT = ResourceKind.AUDIT.value


class AuditQueryService:
    """List audit entries; scope own restricts to entries the actor wrote."""

    def __init__(self, gate: AuthorizationGate, transactions: ITransactionManager) -> None:
        self.gate = gate
        self.transactions = transactions

    async def list_entries(
        self,
        actor: Actor,
        *,
        target_kind: str | None = None,
        target_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[AuditEntryResult]:
        """Return audit entries newest first."""
        await self.gate.require(actor, _AUDIT, "view")
        rule = actor.policy.rule_for(_AUDIT, "view")
        actor_filter = actor.id if rule and rule.scope == PermissionScope.OWN else None
        async with self.transactions.transaction() as uow:
            return await uow.audit_entries.list_entries(
                actor_id=actor_filter,
                target_kind=target_kind,
                target_id=target_id,
                skip=skip,
                limit=limit,
            )
