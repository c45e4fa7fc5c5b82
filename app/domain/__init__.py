"""Domain layer: entities, value objects, enums, state machines and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import (
    RfpEntity,
    RfpVersionEntity,
    RoleEntity,
    SupplierResponseEntity,
)
from app.domain.enums import (
    DenyReason,
    PermissionScope,
    ResourceKind,
    ResponseStatus,
    RfpStatus,
)
from app.domain.exceptions import (
    AlreadyAwardedException,
    AuthorizationDeniedException,
    DuplicateResponseException,
    InvalidStateException,
    ResourceNotFoundException,
    RfpFlowException,
    TransientStorageException,
    ValidationException,
)
from app.domain.value_objects import (
    Actor,
    Decision,
    PermissionPolicy,
    PermissionRule,
    ResourceRef,
)

__all__ = [
    # Entities
    "RfpEntity",
    "RfpVersionEntity",
    "RoleEntity",
    "SupplierResponseEntity",
    # Enums
    "DenyReason",
    "PermissionScope",
    "ResourceKind",
    "ResponseStatus",
    "RfpStatus",
    # Exceptions
    "AlreadyAwardedException",
    "AuthorizationDeniedException",
    "DuplicateResponseException",
    "InvalidStateException",
    "ResourceNotFoundException",
    "RfpFlowException",
    "TransientStorageException",
    "ValidationException",
    # Value objects
    "Actor",
    "Decision",
    "PermissionPolicy",
    "PermissionRule",
    "ResourceRef",
]
