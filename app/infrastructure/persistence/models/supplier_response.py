"""Supplier response ORM model. One response per (rfp, supplier)."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import AuditedModel


class SupplierResponse(AuditedModel, Base):
    """Supplier proposal against an RFP. Table: supplier_response."""

    __tablename__ = "supplier_response"

    rfp_id: Mapped[str] = mapped_column(
        String, ForeignKey("rfp.id", ondelete="CASCADE"), nullable=False, index=True
    )
    supplier_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
    proposed_budget: Mapped[Decimal | None] = mapped_column(
        Numeric(14, 2), nullable=True
    )
    timeline: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_letter: Mapped[str | None] = mapped_column(Text, nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    decided_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("rfp_id", "supplier_id", name="uq_supplier_response_rfp_supplier"),
    )
