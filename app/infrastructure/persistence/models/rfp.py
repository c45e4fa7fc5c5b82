"""RFP and RFP version ORM models.

rfp.current_version_id and rfp.awarded_response_id are plain indexed columns:
the rfp <-> rfp_version and rfp <-> supplier_response references are circular,
and the lifecycle services keep them consistent.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import AuditedModel, CuidMixin


class Rfp(AuditedModel, Base):
    """Request for proposal. Table: rfp."""

    __tablename__ = "rfp"

    title: Mapped[str] = mapped_column(String, nullable=False)
    buyer_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
    current_version_id: Mapped[str | None] = mapped_column(String, nullable=True)
    awarded_response_id: Mapped[str | None] = mapped_column(
        String, nullable=True, unique=True
    )
    awarded_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    closed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class RfpVersion(CuidMixin, Base):
    """Immutable-once-published revision of RFP content. Table: rfp_version."""

    __tablename__ = "rfp_version"

    rfp_id: Mapped[str] = mapped_column(
        String, ForeignKey("rfp.id", ondelete="CASCADE"), nullable=False, index=True
    )
    version_number: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    requirements: Mapped[str | None] = mapped_column(Text, nullable=True)
    budget_min: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    budget_max: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    deadline: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("rfp_id", "version_number", name="uq_rfp_version_number"),
    )
