"""Default role initialization: Buyer, Supplier and Admin permission documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypedDict

from app.application.interfaces.services import ITransactionManager
from app.domain.entities.role import RoleEntity
from app.domain.exceptions import ValidationException
from app.schemas.permission_policy import parse_policy_document
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class RoleData(TypedDict):
    """Role configuration for default roles."""

    description: str
    permissions: dict[str, Any]


def _rule(
    allowed: bool = True,
    scope: str | None = None,
    statuses: list[str] | None = None,
) -> dict[str, Any]:
    rule: dict[str, Any] = {"allowed": allowed}
    if scope:
        rule["scope"] = scope
    if statuses is not None:
        rule["allowed_resource_statuses"] = statuses
    return rule


_DENY = {"allowed": False}

BUYER_PERMISSIONS: dict[str, Any] = {
    "rfp": {
        "create": _rule(),
        "view": _rule(scope="own"),
        "edit": _rule(scope="own", statuses=["Draft"]),
        "publish": _rule(scope="own", statuses=["Draft"]),
        "close": _rule(scope="own", statuses=["Published"]),
        "cancel": _rule(scope="own", statuses=["Draft", "Published"]),
        "award": _rule(scope="own", statuses=["Published", "Closed"]),
        "delete": _rule(scope="own"),
        "review_responses": _rule(scope="own"),
        "read_responses": _rule(scope="own"),
        "manage_documents": _rule(scope="own"),
    },
    "supplier_response": {
        "create": _DENY,
        "submit": _DENY,
        "edit": _DENY,
        "delete": _DENY,
        "manage_documents": _DENY,
        "view": _rule(scope="rfp_owner"),
        "review": _rule(scope="rfp_owner"),
        "approve": _rule(scope="rfp_owner", statuses=["Under Review"]),
        "reject": _rule(scope="rfp_owner", statuses=["Under Review"]),
        "award": _rule(scope="rfp_owner", statuses=["Approved"]),
        "reopen": _rule(scope="rfp_owner", statuses=["Rejected"]),
    },
    "documents": {
        "upload_for_rfp": _rule(scope="own"),
        "upload_for_response": _DENY,
    },
    "audit": {"view": _rule(scope="own")},
}

SUPPLIER_PERMISSIONS: dict[str, Any] = {
    "rfp": {
        "create": _DENY,
        "view": _rule(statuses=["Published", "Closed", "Awarded"]),
        "edit": _DENY,
        "publish": _DENY,
        "close": _DENY,
        "cancel": _DENY,
        "award": _DENY,
        "delete": _DENY,
        "review_responses": _DENY,
        "read_responses": _rule(),
        "manage_documents": _DENY,
    },
    "supplier_response": {
        "create": _rule(),
        "submit": _rule(scope="own", statuses=["Draft"]),
        "view": _rule(scope="own"),
        "edit": _rule(scope="own", statuses=["Draft"]),
        "delete": _rule(scope="own"),
        "manage_documents": _rule(scope="own"),
        "review": _DENY,
        "approve": _DENY,
        "reject": _DENY,
        "award": _DENY,
        "reopen": _DENY,
    },
    "documents": {
        "upload_for_rfp": _DENY,
        "upload_for_response": _rule(scope="own"),
    },
    "audit": {"view": _rule(scope="own")},
}

ADMIN_PERMISSIONS: dict[str, Any] = {
    "rfp": {
        action: _rule()
        for action in (
            "create",
            "view",
            "edit",
            "publish",
            "close",
            "cancel",
            "award",
            "delete",
            "review_responses",
            "read_responses",
            "manage_documents",
        )
    },
    "supplier_response": {
        action: _rule()
        for action in (
            "create",
            "submit",
            "view",
            "edit",
            "delete",
            "manage_documents",
            "review",
            "approve",
            "reject",
            "award",
            "reopen",
        )
    },
    "documents": {"upload_for_rfp": _rule(), "upload_for_response": _rule()},
    "admin": {
        "manage_users": _rule(),
        "manage_roles": _rule(),
        "view_analytics": _rule(),
    },
    "audit": {"view": _rule()},
}

DEFAULT_ROLES: dict[str, RoleData] = {
    "Buyer": {
        "description": "Buyers create RFPs and review supplier responses.",
        "permissions": BUYER_PERMISSIONS,
    },
    "Supplier": {
        "description": "Suppliers browse published RFPs and respond to them.",
        "permissions": SUPPLIER_PERMISSIONS,
    },
    "Admin": {
        "description": "System administrators with full access.",
        "permissions": ADMIN_PERMISSIONS,
    },
}


def load_role_definitions(path: str | None = None) -> dict[str, RoleData]:
    """Return role definitions from a JSON file, or DEFAULT_ROLES when path is None.

    Every document is validated before anything is written.

    Raises:
        ValidationException: If the file is not an object of role definitions
            or any permission document is invalid.
    """
    if path is None:
        roles = DEFAULT_ROLES
    else:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValidationException("Role file must be a JSON object", field="roles")
        roles = {
            name: RoleData(
                description=str(spec.get("description") or ""),
                permissions=spec.get("permissions") or {},
            )
            for name, spec in raw.items()
        }
    for data in roles.values():
        parse_policy_document(data["permissions"])
    return roles


class RoleInitializationService:
    """Create or refresh the configured roles."""

    def __init__(self, transactions: ITransactionManager) -> None:
        self._transactions = transactions

    async def initialize_roles(
        self, roles: dict[str, RoleData] | None = None
    ) -> list[RoleEntity]:
        """Upsert every role in one transaction and return them."""
        roles = roles if roles is not None else load_role_definitions()
        created: list[RoleEntity] = []
        async with self._transactions.transaction() as uow:
            for name, data in roles.items():
                created.append(
                    await uow.roles.upsert(name, data["description"], data["permissions"])
                )
        logger.info("Initialized roles: %s", ", ".join(r.name for r in created))
        return created
