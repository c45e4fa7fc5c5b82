"""Authorization gate: decide Permit/Deny for (actor, resource kind, action, resource).

The actor carries its policy snapshot; the gate only reads resource context
(owner, status, parent RFP owner) through IResourceContextResolver. Checks
run cheapest first and the first failing check determines the deny reason.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.application.interfaces.services import IResourceContextResolver
from app.domain.enums import DenyReason, PermissionScope, ResourceKind, RfpStatus
from app.domain.exceptions import AuthorizationDeniedException
from app.domain.value_objects.policy import Actor, Decision, PermissionRule, ResourceRef
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Document actions name the thing the document is attached to.
_DOCUMENT_ATTACHMENT_KINDS: dict[str, str] = {
    "_for_rfp": ResourceKind.RFP_VERSION.value,
    "_for_response": ResourceKind.SUPPLIER_RESPONSE.value,
}


def _subject_of(resource_kind: str, action: str, ref: ResourceRef) -> tuple[str, str]:
    """Return (resolution kind, id) whose owner and status the rule is about."""
    if resource_kind == ResourceKind.DOCUMENTS.value:
        for suffix, kind in _DOCUMENT_ATTACHMENT_KINDS.items():
            if action.endswith(suffix):
                return kind, ref.id
        return ResourceKind.RFP.value, ref.parent_id or ref.id
    return resource_kind, ref.id


class AuthorizationGate:
    """Pure decision function over a policy snapshot plus resolver reads."""

    def __init__(self, resolver: IResourceContextResolver) -> None:
        self.resolver = resolver

    async def decide(
        self,
        actor: Actor,
        resource_kind: str,
        action: str,
        resource_ref: ResourceRef | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> Decision:
        """Return Permit or Deny(reason).

        Scope and status checks need resource_ref; without one (creation and
        listing actions) only the grant itself is checked. ResourceNotFound
        from the resolver propagates unchanged.
        """
        rule = actor.policy.rule_for(resource_kind, action)
        if rule is None or not rule.allowed:
            return self._deny(actor, resource_kind, action, DenyReason.NOT_GRANTED)
        if resource_ref is None:
            return Decision.permit()

        subject_kind, subject_id = _subject_of(resource_kind, action, resource_ref)

        reason = await self._check_scope(
            actor, rule, resource_kind, subject_kind, subject_id, resource_ref
        )
        if reason is None:
            reason = await self._check_status(rule, subject_kind, subject_id, payload)
        if reason is not None:
            return self._deny(actor, resource_kind, action, reason)
        return Decision.permit()

    async def require(
        self,
        actor: Actor,
        resource_kind: str,
        action: str,
        resource_ref: ResourceRef | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> None:
        """Raise AuthorizationDeniedException unless decide() permits."""
        decision = await self.decide(actor, resource_kind, action, resource_ref, payload)
        if not decision.permitted:
            reason = decision.reason or DenyReason.NOT_GRANTED
            raise AuthorizationDeniedException(reason.value, resource_kind, action)

    async def _check_scope(
        self,
        actor: Actor,
        rule: PermissionRule,
        resource_kind: str,
        subject_kind: str,
        subject_id: str,
        ref: ResourceRef,
    ) -> DenyReason | None:
        if rule.scope == PermissionScope.OWN:
            owner = await self.resolver.get_owner(subject_kind, subject_id)
            if owner != actor.id:
                return DenyReason.NOT_OWNER
        elif rule.scope == PermissionScope.PUBLISHED:
            rfp_id = ref.id if resource_kind == ResourceKind.RFP.value else ref.parent_id
            if rfp_id is None:
                return DenyReason.NOT_PUBLISHED
            status = await self.resolver.get_status(ResourceKind.RFP.value, rfp_id)
            if status != RfpStatus.PUBLISHED.value:
                return DenyReason.NOT_PUBLISHED
        elif rule.scope == PermissionScope.RFP_OWNER:
            response_id = (
                subject_id
                if subject_kind == ResourceKind.SUPPLIER_RESPONSE.value
                else ref.parent_id
            )
            if response_id is None:
                return DenyReason.NOT_RFP_OWNER
            owner = await self.resolver.get_parent_rfp_owner(response_id)
            if owner != actor.id:
                return DenyReason.NOT_RFP_OWNER
        return None

    async def _check_status(
        self,
        rule: PermissionRule,
        subject_kind: str,
        subject_id: str,
        payload: Mapping[str, Any] | None,
    ) -> DenyReason | None:
        if rule.allowed_resource_statuses is not None:
            current = await self.resolver.get_status(subject_kind, subject_id)
            if current not in rule.allowed_resource_statuses:
                return DenyReason.STATUS_NOT_ALLOWED
        if rule.allowed_transitions is not None:
            target = (payload or {}).get("status")
            if not target:
                return DenyReason.MISSING_TARGET_STATUS
            current = await self.resolver.get_status(subject_kind, subject_id)
            if target not in rule.allowed_transitions.get(current, frozenset()):
                return DenyReason.TRANSITION_NOT_ALLOWED
        return None

    @staticmethod
    def _deny(
        actor: Actor, resource_kind: str, action: str, reason: DenyReason
    ) -> Decision:
        logger.info(
            "Denied %s on %s for actor %s (role %s): %s",
            action,
            resource_kind,
            actor.id,
            actor.role,
            reason.value,
        )
        return Decision.deny(reason)
