"""Supplier response lifecycle: Draft -> Submitted -> Under Review -> Approved/Rejected -> Awarded.

Rejected responses can be reopened to Draft. Award is delegated to
AwardService so the RFP and the response change together.
"""

from __future__ import annotations

from typing import Any

from app.application.dtos.supplier_response import SupplierResponseData
from app.application.interfaces.services import ITransactionManager, IUnitOfWork
from app.application.services.authorization_gate import AuthorizationGate
from app.application.services.award_service import AwardResult, AwardService
from app.application.services.transition_publisher import TransitionPublisher
from app.domain.entities.supplier_response import SupplierResponseEntity
from app.domain.enums import PermissionScope, ResourceKind, ResponseStatus, RfpStatus
from app.domain.exceptions import (
    DuplicateResponseException,
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.state_machine import RESPONSE_LIFECYCLE
from app.domain.value_objects.policy import Actor, ResourceRef
from app.shared.enums import AuditAction
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_RFP = ResourceKind.RFP.value
_RESPONSE = ResourceKind.SUPPLIER_RESPONSE.value


class ResponseLifecycleService:
    """Supplier response operations gated by the actor's policy snapshot."""

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

    async def _load(self, uow: IUnitOfWork, response_id: str) -> SupplierResponseEntity:
        response = await uow.responses.get(response_id)
        if response is None or await uow.rfps.get(response.rfp_id) is None:
            raise ResourceNotFoundException(_RESPONSE, response_id)
        return response

    async def _ref(self, response_id: str) -> ResourceRef:
        """Reference carrying the parent RFP id for published-scope rules."""
        async with self.transactions.transaction() as uow:
            response = await self._load(uow, response_id)
        return ResourceRef(response_id, parent_id=response.rfp_id)

    async def _require(self, actor: Actor, action: str, response_id: str) -> None:
        """Grant check before the lookup; ungranted actors never learn whether the id exists."""
        await self.gate.require(actor, _RESPONSE, action)
        await self.gate.require(actor, _RESPONSE, action, await self._ref(response_id))

    # Reads

    async def get(self, actor: Actor, response_id: str) -> SupplierResponseEntity:
        """Return the response if the actor may view it."""
        await self._require(actor, "view", response_id)
        async with self.transactions.transaction() as uow:
            return await self._load(uow, response_id)

    async def list_for_rfp(
        self, actor: Actor, rfp_id: str
    ) -> list[SupplierResponseEntity]:
        """Return responses to the RFP visible to the actor.

        Actors whose supplier_response/view rule is scope own see only their
        own responses (any status); others see every non-Draft response.
        """
        await self.gate.require(actor, _RFP, "read_responses", ResourceRef(rfp_id))
        view_rule = actor.policy.rule_for(_RESPONSE, "view")
        async with self.transactions.transaction() as uow:
            if await uow.rfps.get(rfp_id) is None:
                raise ResourceNotFoundException(_RFP, rfp_id)
            if view_rule is not None and view_rule.scope == PermissionScope.OWN:
                return await uow.responses.list_for_rfp(rfp_id, supplier_id=actor.id)
            return await uow.responses.list_for_rfp(
                rfp_id, exclude_statuses={ResponseStatus.DRAFT.value}
            )

    # Content

    async def create(
        self, actor: Actor, rfp_id: str, data: SupplierResponseData
    ) -> SupplierResponseEntity:
        """Create the actor's Draft response to a Published RFP (one per supplier)."""
        await self.gate.require(actor, _RESPONSE, "create")
        async with self.transactions.transaction() as uow:
            rfp = await uow.rfps.get(rfp_id)
            if rfp is None:
                raise ResourceNotFoundException(_RFP, rfp_id)
            if rfp.status != RfpStatus.PUBLISHED.value:
                raise InvalidStateException(
                    _RFP,
                    "respond",
                    rfp.status,
                    message="Responses can only be created for Published RFPs",
                )
            if await uow.responses.get_for_supplier(rfp_id, actor.id) is not None:
                raise DuplicateResponseException(rfp_id, actor.id)
            response = await uow.responses.create(rfp_id, actor.id, data)
        logger.info("Response %s created for RFP %s by %s", response.id, rfp_id, actor.id)
        await self.publisher.publish(
            actor_id=actor.id,
            action_code=AuditAction.RESPONSE_CREATED.value,
            entity_kind=_RESPONSE,
            entity_id=response.id,
            to_status=response.status,
            details={"rfp_id": rfp_id, "rfp_title": rfp.title},
        )
        return response

    async def update(
        self, actor: Actor, response_id: str, data: SupplierResponseData
    ) -> SupplierResponseEntity:
        """Replace the response content; only while Draft."""
        await self._require(actor, "edit", response_id)
        async with self.transactions.transaction() as uow:
            response = await self._load(uow, response_id)
            if response.status != ResponseStatus.DRAFT.value:
                raise InvalidStateException(_RESPONSE, "edit", response.status)
            updated = await uow.responses.update_content(
                response_id, data, ResponseStatus.DRAFT.value
            )
            if updated is None:
                raise InvalidStateException(_RESPONSE, "edit", response.status)
        await self.publisher.publish(
            actor_id=actor.id,
            action_code=AuditAction.RESPONSE_UPDATED.value,
            entity_kind=_RESPONSE,
            entity_id=response_id,
            details={"rfp_id": response.rfp_id},
        )
        return updated

    async def delete(self, actor: Actor, response_id: str) -> None:
        """Soft-delete the response; an Awarded response cannot be deleted."""
        await self._require(actor, "delete", response_id)
        async with self.transactions.transaction() as uow:
            response = await self._load(uow, response_id)
            if response.status == ResponseStatus.AWARDED.value:
                raise InvalidStateException(_RESPONSE, "delete", response.status)
            if not await uow.responses.soft_delete(
                response_id, utc_now(), {ResponseStatus.AWARDED.value}
            ):
                raise InvalidStateException(_RESPONSE, "delete", response.status)
        await self.publisher.publish(
            actor_id=actor.id,
            action_code=AuditAction.RESPONSE_DELETED.value,
            entity_kind=_RESPONSE,
            entity_id=response_id,
            details={"rfp_id": response.rfp_id, "status": response.status},
        )

    # Status transitions

    async def _transition(
        self,
        actor: Actor,
        response_id: str,
        action: str,
        gate_action: str,
        audit_action: AuditAction,
        changes: dict[str, Any] | None = None,
        details: dict[str, Any] | None = None,
    ) -> SupplierResponseEntity:
        await self._require(actor, gate_action, response_id)
        async with self.transactions.transaction() as uow:
            response = await self._load(uow, response_id)
            target = RESPONSE_LIFECYCLE.target_for(action, response.status)
            updated = await uow.responses.transition_status(
                response_id, {response.status}, target, changes
            )
            if updated is None:
                raise InvalidStateException(_RESPONSE, action, response.status)
        logger.info(
            "Response %s %s -> %s by %s", response_id, response.status, target, actor.id
        )
        await self.publisher.publish(
            actor_id=actor.id,
            action_code=audit_action.value,
            entity_kind=_RESPONSE,
            entity_id=response_id,
            from_status=response.status,
            to_status=target,
            details={"rfp_id": response.rfp_id, **(details or {})},
        )
        return updated

    async def submit(self, actor: Actor, response_id: str) -> SupplierResponseEntity:
        """Draft -> Submitted."""
        return await self._transition(
            actor, response_id, "submit", "submit", AuditAction.RESPONSE_SUBMITTED
        )

    async def move_to_review(
        self, actor: Actor, response_id: str
    ) -> SupplierResponseEntity:
        """Submitted -> Under Review (gated as review)."""
        return await self._transition(
            actor,
            response_id,
            "move_to_review",
            "review",
            AuditAction.RESPONSE_MOVED_TO_REVIEW,
            changes={"reviewed_at": utc_now()},
        )

    async def approve(self, actor: Actor, response_id: str) -> SupplierResponseEntity:
        """Under Review -> Approved."""
        return await self._transition(
            actor,
            response_id,
            "approve",
            "approve",
            AuditAction.RESPONSE_APPROVED,
            changes={"decided_at": utc_now()},
        )

    async def reject(
        self, actor: Actor, response_id: str, reason: str
    ) -> SupplierResponseEntity:
        """Under Review -> Rejected with a mandatory reason."""
        if not reason or not reason.strip():
            raise ValidationException("Rejection reason is required", field="reason")
        reason = reason.strip()
        return await self._transition(
            actor,
            response_id,
            "reject",
            "reject",
            AuditAction.RESPONSE_REJECTED,
            changes={"rejection_reason": reason, "decided_at": utc_now()},
            details={"rejection_reason": reason},
        )

    async def reopen(self, actor: Actor, response_id: str) -> SupplierResponseEntity:
        """Rejected -> Draft; clears the rejection reason and decision time."""
        return await self._transition(
            actor,
            response_id,
            "reopen",
            "reopen",
            AuditAction.RESPONSE_REOPENED,
            changes={"rejection_reason": None, "decided_at": None},
        )

    async def award(self, actor: Actor, response_id: str) -> AwardResult:
        """Award this response on its RFP (atomic with the RFP's own transition)."""
        await self.gate.require(actor, _RESPONSE, "award")
        ref = await self._ref(response_id)
        assert ref.parent_id is not None
        return await self.award_service.award(actor, ref.parent_id, response_id)
