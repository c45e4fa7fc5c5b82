"""Role application service: resolve actors and administer permission documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.application.interfaces.services import ITransactionManager
from app.application.services.authorization_gate import AuthorizationGate
from app.application.services.transition_publisher import TransitionPublisher
from app.domain.entities.role import RoleEntity
from app.domain.enums import ResourceKind
from app.domain.exceptions import ResourceNotFoundException
from app.domain.value_objects.policy import Actor
from app.schemas.permission_policy import parse_policy_document, policy_to_document
from app.shared.enums import AuditAction


class RoleService:
    """Attach policy snapshots to actors and update role documents."""

    def __init__(
        self,
        transactions: ITransactionManager,
        gate: AuthorizationGate,
        publisher: TransitionPublisher,
    ) -> None:
        self._transactions = transactions
        self._gate = gate
        self._publisher = publisher

    async def get_role(self, role_name: str) -> RoleEntity:
        """Return the role with its parsed policy.

        Raises:
            ResourceNotFoundException: If no role has that name.
        """
        async with self._transactions.transaction() as uow:
            role = await uow.roles.get_by_name(role_name)
        if role is None:
            raise ResourceNotFoundException("role", role_name)
        return role

    async def resolve_actor(self, user_id: str, role_name: str) -> Actor:
        """Build the authenticated actor with an immutable policy snapshot.

        Call once per request; later role edits do not affect this actor.
        """
        role = await self.get_role(role_name)
        return Actor(id=user_id, role=role.name, policy=role.policy)

    async def update_policy(
        self, actor: Actor, role_name: str, document: Mapping[str, Any]
    ) -> RoleEntity:
        """Validate and store a new permission document for the role.

        Raises:
            AuthorizationDeniedException: Actor lacks admin/manage_roles.
            ValidationException: Document is malformed or names unknown statuses.
            ResourceNotFoundException: If the role does not exist.
        """
        await self._gate.require(actor, ResourceKind.ADMIN.value, "manage_roles")
        policy = parse_policy_document(document)
        canonical = policy_to_document(policy)
        async with self._transactions.transaction() as uow:
            role = await uow.roles.update_document(role_name, canonical)
        if role is None:
            raise ResourceNotFoundException("role", role_name)
        await self._publisher.publish(
            actor_id=actor.id,
            action_code=AuditAction.PERMISSIONS_UPDATED.value,
            entity_kind="role",
            entity_id=role.id,
            details={"role": role.name, "permissions": canonical},
        )
        return role
