"""RFP and RFP version domain entities.

An RFP points at exactly one current version. Versions are numbered from 1
and never reused; they can only be added or switched while the RFP is Draft.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from app.domain.enums import RfpStatus


@dataclass
class RfpVersionEntity:
    """Domain entity for one immutable revision of an RFP's content."""

    id: str
    rfp_id: str
    version_number: int
    description: str | None = None
    requirements: str | None = None
    budget_min: Decimal | None = None
    budget_max: Decimal | None = None
    deadline: datetime | None = None
    notes: str | None = None
    created_at: datetime | None = None


@dataclass
class RfpEntity:
    """Domain entity for a request for proposal owned by a buyer."""

    id: str
    title: str
    buyer_id: str
    status: str
    current_version_id: str | None
    awarded_response_id: str | None = None
    awarded_at: datetime | None = None
    closed_at: datetime | None = None
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def versions_frozen(self) -> bool:
        """Versions may only be added or switched while Draft."""
        return self.status != RfpStatus.DRAFT.value

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def is_owned_by(self, actor_id: str) -> bool:
        """Return whether the buyer owning this RFP is `actor_id`."""
        return self.buyer_id == actor_id
