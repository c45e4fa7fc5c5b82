"""Pydantic schemas: health responses and permission policy documents."""

from app.schemas.health import HealthResponse
from app.schemas.permission_policy import (
    PermissionRuleDocument,
    parse_policy_document,
    policy_to_document,
)

__all__ = [
    "HealthResponse",
    "PermissionRuleDocument",
    "parse_policy_document",
    "policy_to_document",
]
