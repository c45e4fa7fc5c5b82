"""Shared utilities: enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.enums import AuditAction
from app.shared.utils import ensure_utc, generate_cuid, utc_now

__all__ = [
    "AuditAction",
    "ensure_utc",
    "generate_cuid",
    "utc_now",
]
