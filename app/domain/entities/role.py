"""Role domain entity."""

from dataclasses import dataclass

from app.domain.value_objects.policy import PermissionPolicy


@dataclass
class RoleEntity:
    """Domain entity for a named role and its parsed permission policy."""

    id: str
    name: str
    description: str | None
    policy: PermissionPolicy
