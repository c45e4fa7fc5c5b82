"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import (
    IAuditEntryRepository,
    IRfpRepository,
    IRoleRepository,
    ISupplierResponseRepository,
)
from app.application.interfaces.services import (
    IAuditRecorder,
    IResourceContextResolver,
    ITransactionManager,
    ITransitionHook,
    IUnitOfWork,
)

__all__ = [
    "IAuditEntryRepository",
    "IAuditRecorder",
    "IResourceContextResolver",
    "IRfpRepository",
    "IRoleRepository",
    "ISupplierResponseRepository",
    "ITransactionManager",
    "ITransitionHook",
    "IUnitOfWork",
]
