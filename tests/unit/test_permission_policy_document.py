"""Permission document parsing: validation at load time, canonical round trip."""

import pytest

from app.domain.enums import PermissionScope
from app.domain.exceptions import ValidationException
from app.infrastructure.services.role_initialization_service import DEFAULT_ROLES
from app.schemas.permission_policy import parse_policy_document, policy_to_document


def test_parses_rules_into_frozen_policy() -> None:
    policy = parse_policy_document(
        {
            "rfp": {
                "edit": {"allowed": True, "scope": "own", "allowed_resource_statuses": ["Draft"]},
                "delete": {"allowed": False},
            }
        }
    )
    rule = policy.rule_for("rfp", "edit")
    assert rule is not None
    assert rule.allowed
    assert rule.scope == PermissionScope.OWN
    assert rule.allowed_resource_statuses == frozenset({"Draft"})
    assert policy.is_allowed("rfp", "edit")
    assert not policy.is_allowed("rfp", "delete")
    assert policy.rule_for("rfp", "publish") is None
    assert policy.rule_for("admin", "manage_roles") is None
    with pytest.raises(TypeError):
        policy.rules["rfp"]["edit"] = rule  # type: ignore[index]


def test_legacy_status_key_spellings_are_accepted() -> None:
    policy = parse_policy_document(
        {
            "rfp": {"view": {"allowed": True, "allowed_rfp_statuses": ["Published"]}},
            "supplier_response": {
                "approve": {"allowed": True, "allowed_response_statuses": ["Under Review"]}
            },
        }
    )
    assert policy.rule_for("rfp", "view").allowed_resource_statuses == frozenset({"Published"})
    assert policy.rule_for("supplier_response", "approve").allowed_resource_statuses == frozenset(
        {"Under Review"}
    )


def test_allowed_transitions_are_parsed() -> None:
    policy = parse_policy_document(
        {
            "supplier_response": {
                "review": {
                    "allowed": True,
                    "allowed_transitions": {"Under Review": ["Approved", "Rejected"]},
                }
            }
        }
    )
    rule = policy.rule_for("supplier_response", "review")
    assert rule.allowed_transitions == {"Under Review": frozenset({"Approved", "Rejected"})}
    with pytest.raises(TypeError):
        rule.allowed_transitions["Draft"] = frozenset({"Submitted"})  # type: ignore[index]


def test_unknown_status_code_is_a_load_error() -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_policy_document(
            {"rfp": {"edit": {"allowed": True, "allowed_resource_statuses": ["Drafted"]}}}
        )
    assert "Drafted" in exc_info.value.message
    assert exc_info.value.details == {"field": "rfp.edit"}


def test_response_status_on_rfp_rule_is_rejected() -> None:
    with pytest.raises(ValidationException):
        parse_policy_document(
            {"rfp": {"view": {"allowed": True, "allowed_resource_statuses": ["Under Review"]}}}
        )


def test_unknown_transition_target_is_rejected() -> None:
    with pytest.raises(ValidationException):
        parse_policy_document(
            {
                "supplier_response": {
                    "review": {"allowed": True, "allowed_transitions": {"Draft": ["Done"]}}
                }
            }
        )


def test_unknown_scope_and_extra_keys_are_rejected() -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_policy_document({"rfp": {"view": {"allowed": True, "scope": "team"}}})
    assert exc_info.value.details["field"].startswith("rfp.view")
    with pytest.raises(ValidationException):
        parse_policy_document({"rfp": {"view": {"allowed": True, "colour": "red"}}})
    with pytest.raises(ValidationException):
        parse_policy_document({"rfp": {"view": {"scope": "own"}}})


def test_unknown_resource_kind_is_rejected() -> None:
    with pytest.raises(ValidationException):
        parse_policy_document({"invoices": {"view": {"allowed": True}}})
    with pytest.raises(ValidationException):
        parse_policy_document({"rfp_version": {"view": {"allowed": True}}})


def test_non_object_entries_are_ignored() -> None:
    policy = parse_policy_document({"navbar": "buyer", "audit": {"view": {"allowed": True}}})
    assert set(policy.rules) == {"audit"}


def test_document_must_be_an_object() -> None:
    with pytest.raises(ValidationException):
        parse_policy_document(["rfp"])  # type: ignore[arg-type]


@pytest.mark.parametrize("role_name", sorted(DEFAULT_ROLES))
def test_default_roles_round_trip(role_name: str) -> None:
    """Canonical serialization parses back to the same policy."""
    policy = parse_policy_document(DEFAULT_ROLES[role_name]["permissions"])
    document = policy_to_document(policy)
    assert parse_policy_document(document) == policy
