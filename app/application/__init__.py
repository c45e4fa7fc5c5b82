"""Application layer: interfaces, DTOs, services.

Depends only on domain and protocol definitions. Infrastructure implements
the interfaces (repositories, resolver, audit recorder, hooks).
"""

from app.application.interfaces import (
    IAuditEntryRepository,
    IAuditRecorder,
    IResourceContextResolver,
    IRfpRepository,
    IRoleRepository,
    ISupplierResponseRepository,
    ITransactionManager,
    ITransitionHook,
    IUnitOfWork,
)
from app.application.services import (
    AuditQueryService,
    AuthorizationGate,
    AwardService,
    ResponseLifecycleService,
    RfpLifecycleService,
    RoleService,
    TransitionPublisher,
)

__all__ = [
    "AuditQueryService",
    "AuthorizationGate",
    "AwardService",
    "IAuditEntryRepository",
    "IAuditRecorder",
    "IResourceContextResolver",
    "IRfpRepository",
    "IRoleRepository",
    "ISupplierResponseRepository",
    "ITransactionManager",
    "ITransitionHook",
    "IUnitOfWork",
    "ResponseLifecycleService",
    "RfpLifecycleService",
    "RoleService",
    "TransitionPublisher",
]
