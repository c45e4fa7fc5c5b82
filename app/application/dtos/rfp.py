"""DTOs for RFP lifecycle use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class RfpVersionData:
    """Content of one RFP version (what a buyer writes per revision)."""

    description: str | None = None
    requirements: str | None = None
    budget_min: Decimal | None = None
    budget_max: Decimal | None = None
    deadline: datetime | None = None
    notes: str | None = None


@dataclass(frozen=True)
class RfpCreate:
    """Input for creating an RFP with its first version."""

    title: str
    content: RfpVersionData


@dataclass(frozen=True)
class RfpUpdate:
    """Input for editing an RFP: new version while Draft, in place otherwise.

    title None keeps the current title.
    """

    content: RfpVersionData
    title: str | None = None
