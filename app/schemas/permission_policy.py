"""Permission document schemas.

Role permission documents are JSON objects of the form
{resource_kind: {action: rule}}. They are validated once, when a role is
loaded or updated, and converted to the immutable domain PermissionPolicy.
Status codes are checked against the shared status vocabulary so a typo is
a load error instead of a permanent Deny.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from app.domain.enums import PermissionScope, ResourceKind, status_codes_for
from app.domain.exceptions import ValidationException
from app.domain.value_objects.policy import PermissionPolicy, PermissionRule
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Kinds a document may grant on; rfp_version is resolution-only.
GRANTABLE_KINDS = frozenset(ResourceKind.values()) - {ResourceKind.RFP_VERSION.value}


class PermissionRuleDocument(BaseModel):
    """One rule inside a permission document.

    allowed_rfp_statuses / allowed_response_statuses are accepted as legacy
    spellings of allowed_resource_statuses.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    allowed: bool
    scope: PermissionScope = PermissionScope.NONE
    allowed_resource_statuses: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "allowed_resource_statuses",
            "allowed_rfp_statuses",
            "allowed_response_statuses",
        ),
    )
    allowed_transitions: dict[str, list[str]] | None = None

    def referenced_statuses(self) -> set[str]:
        """Return every status code the rule mentions."""
        codes = set(self.allowed_resource_statuses or [])
        for current, targets in (self.allowed_transitions or {}).items():
            codes.add(current)
            codes.update(targets)
        return codes

    def to_rule(self) -> PermissionRule:
        """Convert to the immutable domain rule."""
        transitions = None
        if self.allowed_transitions is not None:
            transitions = {
                current: frozenset(targets)
                for current, targets in self.allowed_transitions.items()
            }
        return PermissionRule(
            allowed=self.allowed,
            scope=self.scope,
            allowed_resource_statuses=(
                frozenset(self.allowed_resource_statuses)
                if self.allowed_resource_statuses is not None
                else None
            ),
            allowed_transitions=transitions,
        )


def _parse_rule(kind: str, action: str, raw: Any) -> PermissionRule:
    try:
        doc = PermissionRuleDocument.model_validate(raw)
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(p) for p in first.get("loc", ()))
        where = f"{kind}.{action}" + (f".{loc}" if loc else "")
        raise ValidationException(
            f"Invalid permission rule at {where}: {first.get('msg')}",
            field=where,
        ) from e
    unknown = doc.referenced_statuses() - status_codes_for(kind)
    if unknown:
        raise ValidationException(
            f"Unknown status code(s) {sorted(unknown)} in permission rule {kind}.{action}",
            field=f"{kind}.{action}",
        )
    return doc.to_rule()


def parse_policy_document(document: Mapping[str, Any]) -> PermissionPolicy:
    """Validate a raw permission document and return the domain policy.

    Non-object top-level entries (e.g. UI navigation strings stored next to
    the rules) are ignored.

    Raises:
        ValidationException: When a kind, rule key or status code is invalid.
    """
    if not isinstance(document, Mapping):
        raise ValidationException("Permission document must be an object", field="permissions")
    rules: dict[str, dict[str, PermissionRule]] = {}
    for kind, actions in document.items():
        if not isinstance(actions, Mapping):
            logger.warning("Ignoring non-rule entry %r in permission document", kind)
            continue
        if kind not in GRANTABLE_KINDS:
            raise ValidationException(
                f"Unknown resource kind in permission document: {kind}", field=kind
            )
        rules[kind] = {
            action: _parse_rule(kind, action, raw) for action, raw in actions.items()
        }
    return PermissionPolicy.from_rules(rules)


def policy_to_document(policy: PermissionPolicy) -> dict[str, Any]:
    """Serialize a policy back to its canonical JSON document."""
    document: dict[str, Any] = {}
    for kind, actions in policy.rules.items():
        document[kind] = {}
        for action, rule in actions.items():
            raw: dict[str, Any] = {"allowed": rule.allowed}
            if rule.scope != PermissionScope.NONE:
                raw["scope"] = rule.scope.value
            if rule.allowed_resource_statuses is not None:
                raw["allowed_resource_statuses"] = sorted(rule.allowed_resource_statuses)
            if rule.allowed_transitions is not None:
                raw["allowed_transitions"] = {
                    current: sorted(targets)
                    for current, targets in rule.allowed_transitions.items()
                }
            document[kind][action] = raw
    return document
