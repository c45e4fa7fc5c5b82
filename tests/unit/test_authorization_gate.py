"""AuthorizationGate decisions with a mocked resource context resolver."""

from unittest.mock import AsyncMock

import pytest

from app.application.services.authorization_gate import AuthorizationGate
from app.domain.enums import DenyReason
from app.domain.exceptions import AuthorizationDeniedException, ResourceNotFoundException
from app.domain.value_objects.policy import Actor, ResourceRef
from app.schemas.permission_policy import parse_policy_document


def _actor(document: dict, actor_id: str = "u-1") -> Actor:
    return Actor(id=actor_id, role="Custom", policy=parse_policy_document(document))


@pytest.fixture
def resolver() -> AsyncMock:
    resolver = AsyncMock()
    resolver.get_owner = AsyncMock(return_value="u-1")
    resolver.get_status = AsyncMock(return_value="Draft")
    resolver.get_parent_rfp_owner = AsyncMock(return_value="u-1")
    return resolver


@pytest.fixture
def gate(resolver: AsyncMock) -> AuthorizationGate:
    return AuthorizationGate(resolver)


class TestGrant:
    async def test_undeclared_pair_is_not_granted(self, gate, resolver) -> None:
        actor = _actor({"rfp": {"view": {"allowed": True}}})
        decision = await gate.decide(actor, "rfp", "publish", ResourceRef("rfp-1"))
        assert not decision.permitted
        assert decision.reason == DenyReason.NOT_GRANTED
        resolver.get_owner.assert_not_awaited()
        resolver.get_status.assert_not_awaited()

    async def test_undeclared_kind_is_not_granted(self, gate) -> None:
        actor = _actor({"rfp": {"view": {"allowed": True}}})
        decision = await gate.decide(actor, "admin", "manage_roles")
        assert decision.reason == DenyReason.NOT_GRANTED

    async def test_allowed_false_is_not_granted(self, gate, resolver) -> None:
        actor = _actor({"rfp": {"delete": {"allowed": False, "scope": "own"}}})
        decision = await gate.decide(actor, "rfp", "delete", ResourceRef("rfp-1"))
        assert decision.reason == DenyReason.NOT_GRANTED
        resolver.get_owner.assert_not_awaited()

    async def test_unscoped_grant_permits(self, gate, resolver) -> None:
        actor = _actor({"rfp": {"view": {"allowed": True}}})
        decision = await gate.decide(actor, "rfp", "view", ResourceRef("rfp-1"))
        assert decision.permitted
        assert decision.reason is None
        resolver.get_owner.assert_not_awaited()

    async def test_without_reference_only_the_grant_is_checked(self, gate, resolver) -> None:
        actor = _actor({"rfp": {"create": {"allowed": True, "scope": "own"}}})
        decision = await gate.decide(actor, "rfp", "create")
        assert decision.permitted
        resolver.get_owner.assert_not_awaited()


class TestScope:
    async def test_own_scope_matches_owner(self, gate, resolver) -> None:
        actor = _actor({"rfp": {"edit": {"allowed": True, "scope": "own"}}})
        assert (await gate.decide(actor, "rfp", "edit", ResourceRef("rfp-1"))).permitted
        resolver.get_owner.assert_awaited_once_with("rfp", "rfp-1")

    async def test_own_scope_denies_non_owner(self, gate, resolver) -> None:
        resolver.get_owner.return_value = "someone-else"
        actor = _actor({"rfp": {"edit": {"allowed": True, "scope": "own"}}})
        decision = await gate.decide(actor, "rfp", "edit", ResourceRef("rfp-1"))
        assert decision.reason == DenyReason.NOT_OWNER

    async def test_published_scope_on_rfp(self, gate, resolver) -> None:
        actor = _actor({"rfp": {"view": {"allowed": True, "scope": "published"}}})
        resolver.get_status.return_value = "Published"
        assert (await gate.decide(actor, "rfp", "view", ResourceRef("rfp-1"))).permitted
        resolver.get_status.return_value = "Closed"
        decision = await gate.decide(actor, "rfp", "view", ResourceRef("rfp-1"))
        assert decision.reason == DenyReason.NOT_PUBLISHED

    async def test_published_scope_on_response_uses_parent_rfp(self, gate, resolver) -> None:
        actor = _actor({"supplier_response": {"create": {"allowed": True, "scope": "published"}}})
        resolver.get_status.return_value = "Published"
        ref = ResourceRef("resp-1", parent_id="rfp-9")
        assert (await gate.decide(actor, "supplier_response", "create", ref)).permitted
        resolver.get_status.assert_awaited_once_with("rfp", "rfp-9")

    async def test_published_scope_without_parent_denies(self, gate) -> None:
        actor = _actor({"supplier_response": {"view": {"allowed": True, "scope": "published"}}})
        decision = await gate.decide(actor, "supplier_response", "view", ResourceRef("resp-1"))
        assert decision.reason == DenyReason.NOT_PUBLISHED

    async def test_rfp_owner_scope(self, gate, resolver) -> None:
        actor = _actor({"supplier_response": {"approve": {"allowed": True, "scope": "rfp_owner"}}})
        assert (
            await gate.decide(actor, "supplier_response", "approve", ResourceRef("resp-1"))
        ).permitted
        resolver.get_parent_rfp_owner.assert_awaited_once_with("resp-1")
        resolver.get_parent_rfp_owner.return_value = "other-buyer"
        decision = await gate.decide(actor, "supplier_response", "approve", ResourceRef("resp-1"))
        assert decision.reason == DenyReason.NOT_RFP_OWNER

    async def test_scope_checked_before_status(self, gate, resolver) -> None:
        resolver.get_owner.return_value = "someone-else"
        resolver.get_status.return_value = "Closed"
        actor = _actor(
            {"rfp": {"edit": {"allowed": True, "scope": "own", "allowed_resource_statuses": ["Draft"]}}}
        )
        decision = await gate.decide(actor, "rfp", "edit", ResourceRef("rfp-1"))
        assert decision.reason == DenyReason.NOT_OWNER
        resolver.get_status.assert_not_awaited()


class TestStatus:
    async def test_status_in_allowed_set_permits(self, gate, resolver) -> None:
        actor = _actor({"rfp": {"publish": {"allowed": True, "allowed_resource_statuses": ["Draft"]}}})
        assert (await gate.decide(actor, "rfp", "publish", ResourceRef("rfp-1"))).permitted

    async def test_status_outside_allowed_set_denies(self, gate, resolver) -> None:
        resolver.get_status.return_value = "Published"
        actor = _actor({"rfp": {"publish": {"allowed": True, "allowed_resource_statuses": ["Draft"]}}})
        decision = await gate.decide(actor, "rfp", "publish", ResourceRef("rfp-1"))
        assert decision.reason == DenyReason.STATUS_NOT_ALLOWED

    async def test_empty_allowed_set_denies_everything(self, gate) -> None:
        actor = _actor({"rfp": {"edit": {"allowed": True, "allowed_resource_statuses": []}}})
        decision = await gate.decide(actor, "rfp", "edit", ResourceRef("rfp-1"))
        assert decision.reason == DenyReason.STATUS_NOT_ALLOWED


class TestTransitions:
    _DOC = {
        "supplier_response": {
            "review": {
                "allowed": True,
                "allowed_transitions": {"Under Review": ["Approved", "Rejected"]},
            }
        }
    }

    async def test_missing_target_status(self, gate) -> None:
        actor = _actor(self._DOC)
        decision = await gate.decide(actor, "supplier_response", "review", ResourceRef("r-1"), {})
        assert decision.reason == DenyReason.MISSING_TARGET_STATUS

    async def test_transition_allowed(self, gate, resolver) -> None:
        resolver.get_status.return_value = "Under Review"
        actor = _actor(self._DOC)
        decision = await gate.decide(
            actor, "supplier_response", "review", ResourceRef("r-1"), {"status": "Approved"}
        )
        assert decision.permitted

    async def test_transition_not_listed(self, gate, resolver) -> None:
        resolver.get_status.return_value = "Under Review"
        actor = _actor(self._DOC)
        decision = await gate.decide(
            actor, "supplier_response", "review", ResourceRef("r-1"), {"status": "Awarded"}
        )
        assert decision.reason == DenyReason.TRANSITION_NOT_ALLOWED

    async def test_current_status_without_entry(self, gate, resolver) -> None:
        resolver.get_status.return_value = "Submitted"
        actor = _actor(self._DOC)
        decision = await gate.decide(
            actor, "supplier_response", "review", ResourceRef("r-1"), {"status": "Approved"}
        )
        assert decision.reason == DenyReason.TRANSITION_NOT_ALLOWED


class TestDocuments:
    async def test_upload_for_rfp_resolves_the_version(self, gate, resolver) -> None:
        actor = _actor({"documents": {"upload_for_rfp": {"allowed": True, "scope": "own"}}})
        assert (
            await gate.decide(actor, "documents", "upload_for_rfp", ResourceRef("ver-1", "rfp-1"))
        ).permitted
        resolver.get_owner.assert_awaited_once_with("rfp_version", "ver-1")

    async def test_upload_for_response_resolves_the_response(self, gate, resolver) -> None:
        resolver.get_owner.return_value = "someone-else"
        actor = _actor({"documents": {"upload_for_response": {"allowed": True, "scope": "own"}}})
        decision = await gate.decide(
            actor, "documents", "upload_for_response", ResourceRef("resp-1")
        )
        assert decision.reason == DenyReason.NOT_OWNER
        resolver.get_owner.assert_awaited_once_with("supplier_response", "resp-1")

    async def test_other_document_actions_resolve_the_rfp(self, gate, resolver) -> None:
        actor = _actor({"documents": {"delete": {"allowed": True, "scope": "own"}}})
        await gate.decide(actor, "documents", "delete", ResourceRef("doc-1", parent_id="rfp-1"))
        resolver.get_owner.assert_awaited_once_with("rfp", "rfp-1")


class TestRequire:
    async def test_require_raises_with_reason(self, gate, resolver) -> None:
        resolver.get_owner.return_value = "someone-else"
        actor = _actor({"rfp": {"edit": {"allowed": True, "scope": "own"}}})
        with pytest.raises(AuthorizationDeniedException) as exc_info:
            await gate.require(actor, "rfp", "edit", ResourceRef("rfp-1"))
        assert exc_info.value.reason == "not_owner"
        assert exc_info.value.details["action"] == "edit"

    async def test_require_returns_none_when_permitted(self, gate) -> None:
        actor = _actor({"rfp": {"view": {"allowed": True}}})
        assert await gate.require(actor, "rfp", "view", ResourceRef("rfp-1")) is None

    async def test_not_found_propagates(self, gate, resolver) -> None:
        resolver.get_owner.side_effect = ResourceNotFoundException("rfp", "missing")
        actor = _actor({"rfp": {"edit": {"allowed": True, "scope": "own"}}})
        with pytest.raises(ResourceNotFoundException):
            await gate.decide(actor, "rfp", "edit", ResourceRef("missing"))

    async def test_decision_is_deterministic(self, gate) -> None:
        actor = _actor({"rfp": {"edit": {"allowed": True, "scope": "own"}}})
        ref = ResourceRef("rfp-1")
        first = await gate.decide(actor, "rfp", "edit", ref)
        second = await gate.decide(actor, "rfp", "edit", ref)
        assert first == second
