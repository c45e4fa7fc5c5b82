"""Permission policy value objects.

A role's permission document is parsed once into an immutable
PermissionPolicy (resource kind -> action -> PermissionRule). The policy is
attached to the Actor at authentication time and handed to the gate as a
snapshot; the gate never re-reads it from storage.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from app.domain.enums import DenyReason, PermissionScope


@dataclass(frozen=True)
class PermissionRule:
    """What a role may do for one (resource kind, action) pair.

    allowed_resource_statuses: the resource's current status must be in the
    set when present. allowed_transitions: current status -> permitted
    target statuses; the target is read from the request payload.
    """

    allowed: bool
    scope: PermissionScope = PermissionScope.NONE
    allowed_resource_statuses: frozenset[str] | None = None
    allowed_transitions: Mapping[str, frozenset[str]] | None = None

    def __post_init__(self) -> None:
        if self.allowed_transitions is not None:
            frozen = {k: frozenset(v) for k, v in self.allowed_transitions.items()}
            object.__setattr__(self, "allowed_transitions", MappingProxyType(frozen))


@dataclass(frozen=True)
class PermissionPolicy:
    """Immutable mapping of resource kind -> action -> PermissionRule."""

    rules: Mapping[str, Mapping[str, PermissionRule]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_rules(
        cls, rules: Mapping[str, Mapping[str, PermissionRule]]
    ) -> "PermissionPolicy":
        """Build a policy, freezing the nested mappings."""
        frozen = {kind: MappingProxyType(dict(actions)) for kind, actions in rules.items()}
        return cls(rules=MappingProxyType(frozen))

    def rule_for(self, resource_kind: str, action: str) -> PermissionRule | None:
        """Return the rule for (kind, action), or None when not declared."""
        actions = self.rules.get(resource_kind)
        if actions is None:
            return None
        return actions.get(action)

    def is_allowed(self, resource_kind: str, action: str) -> bool:
        """Return whether (kind, action) is granted at all, ignoring scope."""
        rule = self.rule_for(resource_kind, action)
        return rule is not None and rule.allowed


@dataclass(frozen=True)
class Actor:
    """Authenticated identity with its role and resolved policy snapshot."""

    id: str
    role: str
    policy: PermissionPolicy


@dataclass(frozen=True)
class ResourceRef:
    """Reference to the resource an action targets.

    parent_id is the optional second id: the RFP a response or document hangs
    off, or the RFP version / response a document is attached to.
    """

    id: str
    parent_id: str | None = None


@dataclass(frozen=True)
class Decision:
    """Outcome of an authorization decision. Deny always carries a reason."""

    permitted: bool
    reason: DenyReason | None = None

    @classmethod
    def permit(cls) -> "Decision":
        return cls(permitted=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(permitted=False, reason=reason)
