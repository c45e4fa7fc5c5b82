"""Seed the Buyer, Supplier and Admin roles with their permission documents.

Usage:
    uv run python -m scripts.seed_roles [path/to/roles.json]

Without a path, ROLE_POLICIES_PATH is used when set, otherwise the built-in
defaults. Every document is validated before anything is written. Requires
DATABASE_URL and a migrated database (alembic upgrade head).
"""

import asyncio
import sys

from app.core.config import get_settings
from app.domain.exceptions import RfpFlowException
from app.infrastructure.persistence.database import dispose_engine
from app.infrastructure.persistence.unit_of_work import SqlAlchemyTransactionManager
from app.infrastructure.services.role_initialization_service import (
    RoleInitializationService,
    load_role_definitions,
)
from app.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Validate and upsert the configured roles."""
    setup_logging()
    path = sys.argv[1] if len(sys.argv) > 1 else get_settings().role_policies_path
    try:
        roles = load_role_definitions(path)
        service = RoleInitializationService(SqlAlchemyTransactionManager())
        seeded = await service.initialize_roles(roles)
    except RfpFlowException as e:
        print(f"Seeding failed: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await dispose_engine()
    print(f"Seeded roles: {', '.join(role.name for role in seeded)}")


if __name__ == "__main__":
    asyncio.run(main())
