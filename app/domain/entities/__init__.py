"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.rfp import RfpEntity, RfpVersionEntity
from app.domain.entities.role import RoleEntity
from app.domain.entities.supplier_response import SupplierResponseEntity

__all__ = [
    "RfpEntity",
    "RfpVersionEntity",
    "RoleEntity",
    "SupplierResponseEntity",
]
