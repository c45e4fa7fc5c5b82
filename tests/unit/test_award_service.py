"""Award: RFP and response move to Awarded together, at most once per RFP."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.supplier_response import SupplierResponseData
from app.domain.exceptions import (
    AlreadyAwardedException,
    AuthorizationDeniedException,
    InvalidStateException,
    ValidationException,
)
from app.shared.enums import AuditAction
from tests.fakes import FakeSupplierResponseRepository


async def _two_approved(workflow, buyer, supplier, other_supplier):
    rfp = await workflow.published_rfp(buyer)
    first = await workflow.approved_response(buyer, supplier, rfp.id)
    second = await workflow.approved_response(buyer, other_supplier, rfp.id)
    return rfp, first, second


class TestAward:
    async def test_award_moves_both_to_awarded(self, workflow, buyer, supplier) -> None:
        rfp = await workflow.published_rfp(buyer)
        response = await workflow.approved_response(buyer, supplier, rfp.id)
        result = await workflow.rfps.award(buyer, rfp.id, response.id)
        assert result.rfp.status == "Awarded"
        assert result.rfp.awarded_response_id == response.id
        assert result.rfp.awarded_at is not None
        assert result.response.status == "Awarded"

    async def test_award_is_audited_for_both_entities(self, workflow, buyer, supplier) -> None:
        rfp = await workflow.published_rfp(buyer)
        response = await workflow.approved_response(buyer, supplier, rfp.id)
        await workflow.rfps.award(buyer, rfp.id, response.id)
        rfp_entry, response_entry = workflow.recorder.entries[-2:]
        assert rfp_entry["action"] == AuditAction.RFP_STATUS_CHANGED.value
        assert rfp_entry["details"]["awarded_response_id"] == response.id
        assert rfp_entry["details"]["new_status"] == "Awarded"
        assert response_entry["action"] == AuditAction.RESPONSE_AWARDED.value
        assert workflow.hook.calls[-2:] == [
            ("rfp", rfp.id, "Published", "Awarded"),
            ("supplier_response", response.id, "Approved", "Awarded"),
        ]

    async def test_award_from_closed(self, workflow, buyer, supplier) -> None:
        rfp = await workflow.published_rfp(buyer)
        response = await workflow.approved_response(buyer, supplier, rfp.id)
        await workflow.rfps.close(buyer, rfp.id)
        result = await workflow.responses.award(buyer, response.id)
        assert result.rfp.status == "Awarded"

    async def test_second_award_is_rejected(
        self, workflow, buyer, supplier, other_supplier
    ) -> None:
        rfp, first, second = await _two_approved(workflow, buyer, supplier, other_supplier)
        await workflow.rfps.award(buyer, rfp.id, first.id)
        with pytest.raises(AlreadyAwardedException):
            await workflow.rfps.award(buyer, rfp.id, second.id)
        assert workflow.store.rfps[rfp.id].awarded_response_id == first.id
        assert workflow.store.responses[second.id].status == "Approved"

    async def test_second_award_without_status_rules(
        self, workflow, buyer, supplier, other_supplier, admin
    ) -> None:
        rfp, first, second = await _two_approved(workflow, buyer, supplier, other_supplier)
        await workflow.rfps.award(admin, rfp.id, first.id)
        with pytest.raises(AlreadyAwardedException):
            await workflow.rfps.award(admin, rfp.id, second.id)

    async def test_non_owner_on_awarded_rfp_is_denied_not_conflict(
        self, workflow, buyer, other_buyer, supplier, other_supplier
    ) -> None:
        rfp, first, second = await _two_approved(workflow, buyer, supplier, other_supplier)
        await workflow.rfps.award(buyer, rfp.id, first.id)
        with pytest.raises(AuthorizationDeniedException) as exc_info:
            await workflow.rfps.award(other_buyer, rfp.id, second.id)
        assert exc_info.value.reason == "not_owner"

    async def test_concurrent_awards_pick_one_winner(
        self, workflow, buyer, supplier, other_supplier
    ) -> None:
        rfp, first, second = await _two_approved(workflow, buyer, supplier, other_supplier)
        results = await asyncio.gather(
            workflow.rfps.award(buyer, rfp.id, first.id),
            workflow.rfps.award(buyer, rfp.id, second.id),
            return_exceptions=True,
        )
        winners = [r for r in results if not isinstance(r, Exception)]
        losers = [r for r in results if isinstance(r, Exception)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert isinstance(losers[0], AlreadyAwardedException)
        awarded = [
            r for r in workflow.store.responses.values() if r.status == "Awarded"
        ]
        assert [r.id for r in awarded] == [winners[0].response.id]


class TestAwardFailures:
    async def test_response_must_be_approved(self, workflow, buyer, supplier, admin) -> None:
        rfp = await workflow.published_rfp(buyer)
        response = await workflow.responses.create(supplier, rfp.id, SupplierResponseData())
        await workflow.responses.submit(supplier, response.id)
        with pytest.raises(AuthorizationDeniedException) as exc_info:
            await workflow.rfps.award(buyer, rfp.id, response.id)
        assert exc_info.value.reason == "status_not_allowed"
        with pytest.raises(InvalidStateException):
            await workflow.rfps.award(admin, rfp.id, response.id)
        assert workflow.store.rfps[rfp.id].status == "Published"
        assert workflow.store.rfps[rfp.id].awarded_response_id is None

    async def test_response_of_another_rfp(self, workflow, buyer, supplier) -> None:
        rfp = await workflow.published_rfp(buyer)
        other = await workflow.published_rfp(buyer, title="Desks")
        response = await workflow.approved_response(buyer, supplier, other.id)
        with pytest.raises(ValidationException):
            await workflow.rfps.award(buyer, rfp.id, response.id)
        assert workflow.store.rfps[rfp.id].status == "Published"

    async def test_supplier_cannot_award(self, workflow, buyer, supplier) -> None:
        rfp = await workflow.published_rfp(buyer)
        response = await workflow.approved_response(buyer, supplier, rfp.id)
        with pytest.raises(AuthorizationDeniedException) as exc_info:
            await workflow.rfps.award(supplier, rfp.id, response.id)
        assert exc_info.value.reason == "not_granted"

    async def test_cancelled_rfp_cannot_be_awarded(self, workflow, buyer, supplier, admin) -> None:
        rfp = await workflow.published_rfp(buyer)
        response = await workflow.approved_response(buyer, supplier, rfp.id)
        await workflow.rfps.cancel(buyer, rfp.id)
        with pytest.raises(InvalidStateException):
            await workflow.rfps.award(admin, rfp.id, response.id)
        assert workflow.store.responses[response.id].status == "Approved"

    async def test_failed_response_update_rolls_back_rfp(
        self, workflow, buyer, supplier, monkeypatch
    ) -> None:
        rfp = await workflow.published_rfp(buyer)
        response = await workflow.approved_response(buyer, supplier, rfp.id)
        monkeypatch.setattr(
            FakeSupplierResponseRepository, "mark_awarded", AsyncMock(return_value=False)
        )
        audit_before = len(workflow.recorder.entries)
        with pytest.raises(InvalidStateException):
            await workflow.rfps.award(buyer, rfp.id, response.id)
        stored = workflow.store.rfps[rfp.id]
        assert stored.status == "Published"
        assert stored.awarded_response_id is None
        assert workflow.transactions.rollbacks >= 1
        assert len(workflow.recorder.entries) == audit_before
