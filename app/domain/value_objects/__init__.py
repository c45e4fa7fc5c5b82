"""Domain value objects and shared value types."""

from app.domain.value_objects.policy import (
    Actor,
    Decision,
    PermissionPolicy,
    PermissionRule,
    ResourceRef,
)

__all__ = [
    "Actor",
    "Decision",
    "PermissionPolicy",
    "PermissionRule",
    "ResourceRef",
]
