"""Presentation-layer dependency injection (composition root).

build_workflow_services() wires the workflow services from infrastructure
implementations; the lifespan stores the result on app.state and routes
reach it through get_workflow_services().
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.interfaces.services import ITransitionHook
from app.application.services.audit_query_service import AuditQueryService
from app.application.services.authorization_gate import AuthorizationGate
from app.application.services.award_service import AwardService
from app.application.services.response_lifecycle import ResponseLifecycleService
from app.application.services.rfp_lifecycle import RfpLifecycleService
from app.application.services.role_service import RoleService
from app.application.services.transition_publisher import TransitionPublisher
from app.infrastructure.persistence.unit_of_work import SqlAlchemyTransactionManager
from app.infrastructure.services.audit_recorder import SqlAuditRecorder
from app.infrastructure.services.resource_context_resolver import (
    ResourceContextResolver,
)
from app.infrastructure.services.transition_notification_service import (
    LogOnlyTransitionHook,
)


@dataclass(frozen=True)
class WorkflowServices:
    """Process-wide workflow services sharing one gate and publisher."""

    gate: AuthorizationGate
    publisher: TransitionPublisher
    rfps: RfpLifecycleService
    responses: ResponseLifecycleService
    awards: AwardService
    roles: RoleService
    audit: AuditQueryService


def build_workflow_services(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    hooks: Sequence[ITransitionHook] | None = None,
) -> WorkflowServices:
    """Build all workflow services over the SQL backend.

    session_factory defaults to the process-wide factory, resolved lazily on
    first use so building does not require DATABASE_URL.
    """
    transactions = SqlAlchemyTransactionManager(session_factory)
    gate = AuthorizationGate(ResourceContextResolver(session_factory))
    publisher = TransitionPublisher(
        SqlAuditRecorder(transactions),
        hooks if hooks is not None else [LogOnlyTransitionHook()],
    )
    awards = AwardService(gate, transactions, publisher)
    return WorkflowServices(
        gate=gate,
        publisher=publisher,
        rfps=RfpLifecycleService(gate, transactions, publisher, awards),
        responses=ResponseLifecycleService(gate, transactions, publisher, awards),
        awards=awards,
        roles=RoleService(transactions, gate, publisher),
        audit=AuditQueryService(gate, transactions),
    )


def get_workflow_services(request: Request) -> WorkflowServices:
    """Return the services built at startup."""
    return request.app.state.services


WorkflowServicesDep = Annotated[WorkflowServices, Depends(get_workflow_services)]
