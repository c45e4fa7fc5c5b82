"""Application services: authorization gate, lifecycles, award, roles, audit."""

from app.application.services.audit_query_service import AuditQueryService
from app.application.services.authorization_gate import AuthorizationGate
from app.application.services.award_service import AwardResult, AwardService
from app.application.services.response_lifecycle import ResponseLifecycleService
from app.application.services.rfp_lifecycle import RfpLifecycleService
from app.application.services.role_service import RoleService
from app.application.services.transition_publisher import TransitionPublisher

__all__ = [
    "AuditQueryService",
    "AuthorizationGate",
    "AwardResult",
    "AwardService",
    "ResponseLifecycleService",
    "RfpLifecycleService",
    "RoleService",
    "TransitionPublisher",
]
