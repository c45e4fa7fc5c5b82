"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.audit_recorder import SqlAuditRecorder
from app.infrastructure.services.resource_context_resolver import (
    ResourceContextResolver,
)
from app.infrastructure.services.role_initialization_service import (
    DEFAULT_ROLES,
    RoleInitializationService,
    load_role_definitions,
)
from app.infrastructure.services.transition_notification_service import (
    LogOnlyTransitionHook,
)

__all__ = [
    "DEFAULT_ROLES",
    "LogOnlyTransitionHook",
    "ResourceContextResolver",
    "RoleInitializationService",
    "SqlAuditRecorder",
    "load_role_definitions",
]
