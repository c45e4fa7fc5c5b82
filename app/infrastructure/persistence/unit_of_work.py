"""SQLAlchemy unit of work: one session, one transaction, all repositories bound to it."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.domain.exceptions import TransientStorageException
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.persistence.repositories.audit_entry_repo import (
    AuditEntryRepository,
)
from app.infrastructure.persistence.repositories.rfp_repo import RfpRepository
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.infrastructure.persistence.repositories.supplier_response_repo import (
    SupplierResponseRepository,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# serialization_failure, deadlock_detected
_RETRYABLE_SQLSTATES = frozenset({"40001", "40P01"})


def _is_transient(exc: DBAPIError) -> bool:
    if isinstance(exc, (OperationalError, InterfaceError)) or exc.connection_invalidated:
        return True
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return code in _RETRYABLE_SQLSTATES


class SqlAlchemyUnitOfWork:
    """Repositories sharing one AsyncSession inside session.begin()."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.rfps = RfpRepository(session)
        self.responses = SupplierResponseRepository(session)
        self.roles = RoleRepository(session)
        self.audit_entries = AuditEntryRepository(session)


class SqlAlchemyTransactionManager:
    """ITransactionManager over an async session factory.

    Commits on clean exit, rolls back on any exception. Connection loss,
    serialization failures and deadlocks are re-raised as
    TransientStorageException (retryable; nothing was committed).
    """

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] | None = None
    ) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SqlAlchemyUnitOfWork]:
        factory = self._session_factory or get_session_factory()
        try:
            async with factory() as session:
                async with session.begin():
                    yield SqlAlchemyUnitOfWork(session)
        except DBAPIError as e:
            if not _is_transient(e):
                raise
            logger.warning("Transient storage failure, transaction rolled back: %s", e)
            raise TransientStorageException() from e
