"""DTOs for supplier response use cases (no dependency on ORM)."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SupplierResponseData:
    """Editable content of a supplier response (Draft only)."""

    proposed_budget: Decimal | None = None
    timeline: str | None = None
    cover_letter: str | None = None
