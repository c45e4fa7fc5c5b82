"""initial_rfp_workflow_schema

Revision ID: 3f1c9a7be214
Revises:
Create Date: 2026-10-19 12:40:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7be214"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema - role, rfp, rfp_version, supplier_response, audit_entry."""

    op.create_table(
        "role",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("permissions", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_role_name"),
    )

    # current_version_id / awarded_response_id carry no FK (circular references)
    op.create_table(
        "rfp",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("buyer_id", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("current_version_id", sa.String(), nullable=True),
        sa.Column("awarded_response_id", sa.String(), nullable=True),
        sa.Column("awarded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("closed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("awarded_response_id", name="uq_rfp_awarded_response_id"),
    )
    op.create_index("ix_rfp_buyer_id", "rfp", ["buyer_id"])
    op.create_index("ix_rfp_status", "rfp", ["status"])
    op.create_index("ix_rfp_deleted_at", "rfp", ["deleted_at"])

    op.create_table(
        "rfp_version",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("rfp_id", sa.String(), nullable=False),
        sa.Column("version_number", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("requirements", sa.Text(), nullable=True),
        sa.Column("budget_min", sa.Numeric(14, 2), nullable=True),
        sa.Column("budget_max", sa.Numeric(14, 2), nullable=True),
        sa.Column("deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["rfp_id"], ["rfp.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("rfp_id", "version_number", name="uq_rfp_version_number"),
    )
    op.create_index("ix_rfp_version_rfp_id", "rfp_version", ["rfp_id"])

    op.create_table(
        "supplier_response",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("rfp_id", sa.String(), nullable=False),
        sa.Column("supplier_id", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("proposed_budget", sa.Numeric(14, 2), nullable=True),
        sa.Column("timeline", sa.Text(), nullable=True),
        sa.Column("cover_letter", sa.Text(), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["rfp_id"], ["rfp.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "rfp_id", "supplier_id", name="uq_supplier_response_rfp_supplier"
        ),
    )
    op.create_index("ix_supplier_response_rfp_id", "supplier_response", ["rfp_id"])
    op.create_index(
        "ix_supplier_response_supplier_id", "supplier_response", ["supplier_id"]
    )
    op.create_index("ix_supplier_response_status", "supplier_response", ["status"])
    op.create_index(
        "ix_supplier_response_deleted_at", "supplier_response", ["deleted_at"]
    )

    op.create_table(
        "audit_entry",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("actor_id", sa.String(), nullable=False),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("target_kind", sa.String(), nullable=False),
        sa.Column("target_id", sa.String(), nullable=False),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_entry_actor_id", "audit_entry", ["actor_id"])
    op.create_index("ix_audit_entry_target_id", "audit_entry", ["target_id"])
    op.create_index("ix_audit_entry_created_at", "audit_entry", ["created_at"])


def downgrade() -> None:
    """Downgrade schema - drop workflow tables."""
    op.drop_table("audit_entry")
    op.drop_table("supplier_response")
    op.drop_table("rfp_version")
    op.drop_table("rfp")
    op.drop_table("role")
