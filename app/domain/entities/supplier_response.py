"""Supplier response domain entity.

A supplier holds at most one response per RFP. rejection_reason is only set
while the response is Rejected; reopening clears it.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class SupplierResponseEntity:
    """Domain entity for a supplier's proposal against one RFP."""

    id: str
    rfp_id: str
    supplier_id: str
    status: str
    proposed_budget: Decimal | None = None
    timeline: str | None = None
    cover_letter: str | None = None
    rejection_reason: str | None = None
    reviewed_at: datetime | None = None
    decided_at: datetime | None = None
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
