"""Role ORM model. Named roles (Buyer, Supplier, Admin) with a JSON permission document."""

from typing import Any

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Role(CuidMixin, TimestampMixin, Base):
    """Role. Table: role. Unique name."""

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    permissions: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
