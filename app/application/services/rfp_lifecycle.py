"""RFP lifecycle: versions while Draft, then publish/close/cancel/award.

Every operation asks the authorization gate first, runs its mutation in one
transaction, and publishes the audit entry and hooks after commit.
"""

from __future__ import annotations

from app.application.dtos.rfp import RfpCreate, RfpUpdate, RfpVersionData
from app.application.interfaces.services import ITransactionManager, IUnitOfWork
from app.application.services.authorization_gate import AuthorizationGate
from app.application.services.award_service import AwardResult, AwardService
from app.application.services.transition_publisher import TransitionPublisher
from app.domain.entities.rfp import RfpEntity, RfpVersionEntity
from app.domain.enums import PermissionScope, ResourceKind, RfpStatus
from app.domain.exceptions import InvalidStateException, ResourceNotFoundException
from app.domain.state_machine import RFP_LIFECYCLE
from app.domain.value_objects.policy import Actor, ResourceRef
from app.shared.enums import AuditAction
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_RFP = ResourceKind.RFP.value


def _content_details(title: str, content: RfpVersionData) -> dict[str, object]:
    return {
        "title": title,
        "description": content.description,
        "requirements": content.requirements,
        "budget_min": str(content.budget_min) if content.budget_min is not None else None,
        "budget_max": str(content.budget_max) if content.budget_max is not None else None,
        "deadline": content.deadline.isoformat() if content.deadline else None,
    }


class RfpLifecycleService:
    """Buyer-side RFP operations gated by the actor's policy snapshot."""

    def __init__(
        self,
        gate: AuthorizationGate,
        transactions: ITransactionManager,
        publisher: TransitionPublisher,
        award_service: AwardService,
    ) -> None:
        self.gate = gate
        self.transactions = transactions
        self.publisher = publisher
        self.award_service = award_service

    async def _load(self, uow: IUnitOfWork, rfp_id: str) -> RfpEntity:
        rfp = await uow.rfps.get(rfp_id)
        if rfp is None:
            raise ResourceNotFoundException(_RFP, rfp_id)
        return rfp

    # Reads

    async def get(self, actor: Actor, rfp_id: str) -> RfpEntity:
        """Return the RFP if the actor may view it."""
        await self.gate.require(actor, _RFP, "view", ResourceRef(rfp_id))
        async with self.transactions.transaction() as uow:
            return await self._load(uow, rfp_id)

    async def list_versions(self, actor: Actor, rfp_id: str) -> list[RfpVersionEntity]:
        """Return all versions of the RFP, newest first."""
        await self.gate.require(actor, _RFP, "view", ResourceRef(rfp_id))
        async with self.transactions.transaction() as uow:
            await self._load(uow, rfp_id)
            return await uow.rfps.list_versions(rfp_id)

    async def list_rfps(
        self,
        actor: Actor,
        *,
        status: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[RfpEntity]:
        """Return RFPs visible to the actor under its rfp/view rule.

        scope own narrows to the actor's RFPs, scope published to Published
        ones, and allowed statuses (when declared) restrict the status filter.
        """
        await self.gate.require(actor, _RFP, "view")
        rule = actor.policy.rule_for(_RFP, "view")
        assert rule is not None
        buyer_id = actor.id if rule.scope == PermissionScope.OWN else None
        statuses: set[str] | None = None
        if rule.scope == PermissionScope.PUBLISHED:
            statuses = {RfpStatus.PUBLISHED.value}
        if rule.allowed_resource_statuses is not None:
            statuses = (
                set(rule.allowed_resource_statuses)
                if statuses is None
                else statuses & rule.allowed_resource_statuses
            )
        if status is not None:
            statuses = {status} if statuses is None else statuses & {status}
        if statuses is not None and not statuses:
            return []
        async with self.transactions.transaction() as uow:
            return await uow.rfps.list_rfps(
                buyer_id=buyer_id, statuses=statuses, skip=skip, limit=limit
            )

    # Content and versions

    async def create(self, actor: Actor, data: RfpCreate) -> RfpEntity:
        """Create a Draft RFP owned by the actor with version 1 as current."""
        await self.gate.require(actor, _RFP, "create")
        async with self.transactions.transaction() as uow:
            rfp, version = await uow.rfps.create(data.title, actor.id, data.content)
        logger.info("RFP %s created by %s", rfp.id, actor.id)
        await self.publisher.publish(
            actor_id=actor.id,
            action_code=AuditAction.RFP_CREATED.value,
            entity_kind=_RFP,
            entity_id=rfp.id,
            to_status=rfp.status,
            details={
                **_content_details(rfp.title, data.content),
                "version_number": version.version_number,
            },
        )
        return rfp

    async def create_version(
        self,
        actor: Actor,
        rfp_id: str,
        content: RfpVersionData,
        *,
        title: str | None = None,
    ) -> RfpVersionEntity:
        """Add version max+1 to a Draft RFP and make it current."""
        await self.gate.require(actor, _RFP, "edit", ResourceRef(rfp_id))
        async with self.transactions.transaction() as uow:
            version = await self._add_version(uow, rfp_id, content, title)
        await self.publisher.publish(
            actor_id=actor.id,
            action_code=AuditAction.RFP_VERSION_CREATED.value,
            entity_kind=_RFP,
            entity_id=rfp_id,
            details={"version_id": version.id, "version_number": version.version_number},
        )
        return version

    async def _add_version(
        self,
        uow: IUnitOfWork,
        rfp_id: str,
        content: RfpVersionData,
        title: str | None,
    ) -> RfpVersionEntity:
        rfp = await self._load(uow, rfp_id)
        if rfp.versions_frozen:
            raise InvalidStateException(_RFP, "create_version", rfp.status)
        version = await uow.rfps.add_version(rfp_id, content)
        if await uow.rfps.set_current_version(rfp_id, version.id, title=title) is None:
            raise InvalidStateException(_RFP, "create_version", rfp.status)
        return version

    async def switch_version(
        self, actor: Actor, rfp_id: str, version_id: str
    ) -> RfpEntity:
        """Point a Draft RFP at one of its existing versions."""
        await self.gate.require(actor, _RFP, "edit", ResourceRef(rfp_id))
        async with self.transactions.transaction() as uow:
            rfp = await self._load(uow, rfp_id)
            if rfp.versions_frozen:
                raise InvalidStateException(_RFP, "switch_version", rfp.status)
            target = await uow.rfps.get_version(version_id)
            if target is None or target.rfp_id != rfp_id:
                raise ResourceNotFoundException(ResourceKind.RFP_VERSION.value, version_id)
            previous = (
                await uow.rfps.get_version(rfp.current_version_id)
                if rfp.current_version_id
                else None
            )
            updated = await uow.rfps.set_current_version(rfp_id, version_id)
            if updated is None:
                raise InvalidStateException(_RFP, "switch_version", rfp.status)
        await self.publisher.publish(
            actor_id=actor.id,
            action_code=AuditAction.RFP_VERSION_SWITCHED.value,
            entity_kind=_RFP,
            entity_id=rfp_id,
            details={
                "previous_version_number": previous.version_number if previous else None,
                "new_version_number": target.version_number,
            },
        )
        return updated

    async def update(self, actor: Actor, rfp_id: str, data: RfpUpdate) -> RfpEntity:
        """Edit the RFP: new version while Draft, in-place current version otherwise."""
        await self.gate.require(actor, _RFP, "edit", ResourceRef(rfp_id))
        async with self.transactions.transaction() as uow:
            rfp = await self._load(uow, rfp_id)
            if not rfp.versions_frozen:
                version = await self._add_version(uow, rfp_id, data.content, data.title)
            else:
                if rfp.current_version_id is None:
                    raise ResourceNotFoundException(ResourceKind.RFP_VERSION.value, rfp_id)
                version = await uow.rfps.update_version_content(
                    rfp.current_version_id, data.content
                )
                if data.title is not None:
                    await uow.rfps.update_title(rfp_id, data.title)
            updated = await self._load(uow, rfp_id)
        await self.publisher.publish(
            actor_id=actor.id,
            action_code=AuditAction.RFP_UPDATED.value,
            entity_kind=_RFP,
            entity_id=rfp_id,
            details={
                **_content_details(updated.title, data.content),
                "version_number": version.version_number,
                "new_version": not rfp.versions_frozen,
            },
        )
        return updated

    # Status transitions

    async def _transition(
        self, actor: Actor, rfp_id: str, action: str, audit_action: AuditAction
    ) -> RfpEntity:
        await self.gate.require(actor, _RFP, action, ResourceRef(rfp_id))
        async with self.transactions.transaction() as uow:
            rfp = await self._load(uow, rfp_id)
            target = RFP_LIFECYCLE.target_for(action, rfp.status)
            changes = {"closed_at": utc_now()} if action == "close" else None
            updated = await uow.rfps.transition_status(
                rfp_id, {rfp.status}, target, changes
            )
            if updated is None:
                raise InvalidStateException(_RFP, action, rfp.status)
        logger.info("RFP %s %s -> %s by %s", rfp_id, rfp.status, target, actor.id)
        await self.publisher.publish(
            actor_id=actor.id,
            action_code=audit_action.value,
            entity_kind=_RFP,
            entity_id=rfp_id,
            from_status=rfp.status,
            to_status=target,
        )
        return updated

    async def publish(self, actor: Actor, rfp_id: str) -> RfpEntity:
        """Draft -> Published."""
        return await self._transition(actor, rfp_id, "publish", AuditAction.RFP_PUBLISHED)

    async def close(self, actor: Actor, rfp_id: str) -> RfpEntity:
        """Published -> Closed."""
        return await self._transition(actor, rfp_id, "close", AuditAction.RFP_STATUS_CHANGED)

    async def cancel(self, actor: Actor, rfp_id: str) -> RfpEntity:
        """Draft or Published -> Cancelled."""
        return await self._transition(actor, rfp_id, "cancel", AuditAction.RFP_STATUS_CHANGED)

    async def award(self, actor: Actor, rfp_id: str, response_id: str) -> AwardResult:
        """Award a response; RFP and response change together or not at all."""
        return await self.award_service.award(actor, rfp_id, response_id)

    async def delete(self, actor: Actor, rfp_id: str) -> None:
        """Soft-delete the RFP; afterwards every operation on it is not_found."""
        await self.gate.require(actor, _RFP, "delete", ResourceRef(rfp_id))
        async with self.transactions.transaction() as uow:
            rfp = await self._load(uow, rfp_id)
            if not await uow.rfps.soft_delete(rfp_id, utc_now()):
                raise ResourceNotFoundException(_RFP, rfp_id)
        await self.publisher.publish(
            actor_id=actor.id,
            action_code=AuditAction.RFP_DELETED.value,
            entity_kind=_RFP,
            entity_id=rfp_id,
            details={"title": rfp.title, "status": rfp.status},
        )
