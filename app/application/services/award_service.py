"""Award: the one operation that moves an RFP and one of its responses to Awarded together.

Both rows change in a single transaction using conditional UPDATEs, so at
most one response per RFP can ever be Awarded even when award calls race.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.application.interfaces.services import ITransactionManager
from app.application.services.authorization_gate import AuthorizationGate
from app.application.services.transition_publisher import TransitionPublisher
from app.domain.entities.rfp import RfpEntity
from app.domain.entities.supplier_response import SupplierResponseEntity
from app.domain.enums import DenyReason, ResourceKind, ResponseStatus, RfpStatus
from app.domain.exceptions import (
    AlreadyAwardedException,
    AuthorizationDeniedException,
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.state_machine import RESPONSE_LIFECYCLE, RFP_LIFECYCLE
from app.domain.value_objects.policy import Actor, ResourceRef
from app.shared.enums import AuditAction
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_RFP = ResourceKind.RFP.value
_RESPONSE = ResourceKind.SUPPLIER_RESPONSE.value


@dataclass(frozen=True)
class AwardResult:
    """Both entities as committed by a successful award."""

    rfp: RfpEntity
    response: SupplierResponseEntity


class AwardService:
    """Award a response on its RFP (check-then-set under one transaction)."""

    def __init__(
        self,
        gate: AuthorizationGate,
        transactions: ITransactionManager,
        publisher: TransitionPublisher,
    ) -> None:
        self.gate = gate
        self.transactions = transactions
        self.publisher = publisher

    async def award(self, actor: Actor, rfp_id: str, response_id: str) -> AwardResult:
        """Award response_id on rfp_id.

        Raises:
            AuthorizationDeniedException: Gate denied rfp/award or supplier_response/award.
            ResourceNotFoundException: RFP or response missing or deleted.
            ValidationException: The response belongs to a different RFP.
            AlreadyAwardedException: The RFP already has an awarded response.
            InvalidStateException: RFP not Published/Closed or response not Approved.
        """
        await self.gate.require(actor, _RFP, "award")
        try:
            await self.gate.require(actor, _RFP, "award", ResourceRef(rfp_id))
            await self.gate.require(
                actor, _RESPONSE, "award", ResourceRef(response_id, parent_id=rfp_id)
            )
        except AuthorizationDeniedException as exc:
            # An Awarded RFP fails the scoped status rule; report the award instead.
            if (
                exc.reason == DenyReason.STATUS_NOT_ALLOWED.value
                and await self._awarded_response_id(rfp_id) is not None
            ):
                raise AlreadyAwardedException(rfp_id) from None
            raise

        async with self.transactions.transaction() as uow:
            rfp = await uow.rfps.get(rfp_id)
            if rfp is None:
                raise ResourceNotFoundException(_RFP, rfp_id)
            response = await uow.responses.get(response_id)
            if response is None:
                raise ResourceNotFoundException(_RESPONSE, response_id)
            if response.rfp_id != rfp.id:
                raise ValidationException(
                    "Response does not belong to this RFP", field="response_id"
                )
            if rfp.awarded_response_id is not None:
                raise AlreadyAwardedException(rfp_id)
            RFP_LIFECYCLE.target_for("award", rfp.status)
            RESPONSE_LIFECYCLE.target_for("award", response.status)

            now = utc_now()
            if not await uow.rfps.mark_awarded(
                rfp_id,
                response_id,
                RFP_LIFECYCLE.transitions["award"].sources,
                now,
            ):
                raise AlreadyAwardedException(rfp_id)
            if not await uow.responses.mark_awarded(response_id, rfp_id, now):
                # Raising here rolls back the RFP update above.
                raise InvalidStateException(_RESPONSE, "award", response.status)

            awarded_rfp = await uow.rfps.get(rfp_id)
            awarded_response = await uow.responses.get(response_id)
            assert awarded_rfp is not None and awarded_response is not None

        logger.info(
            "RFP %s awarded to response %s by actor %s", rfp_id, response_id, actor.id
        )
        await self.publisher.publish(
            actor_id=actor.id,
            action_code=AuditAction.RFP_STATUS_CHANGED.value,
            entity_kind=_RFP,
            entity_id=rfp_id,
            from_status=rfp.status,
            to_status=RfpStatus.AWARDED.value,
            details={"awarded_response_id": response_id},
        )
        await self.publisher.publish(
            actor_id=actor.id,
            action_code=AuditAction.RESPONSE_AWARDED.value,
            entity_kind=_RESPONSE,
            entity_id=response_id,
            from_status=ResponseStatus.APPROVED.value,
            to_status=ResponseStatus.AWARDED.value,
            details={"rfp_id": rfp_id},
        )
        return AwardResult(rfp=awarded_rfp, response=awarded_response)

    async def _awarded_response_id(self, rfp_id: str) -> str | None:
        async with self.transactions.transaction() as uow:
            rfp = await uow.rfps.get(rfp_id)
        return rfp.awarded_response_id if rfp else None
