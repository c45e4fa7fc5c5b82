"""Pytest configuration and fixtures for rfpflow.

Unit tests run the application services over the in-memory fakes in
tests/fakes.py; HTTP tests use app.main:app through httpx's ASGI transport.
"""

from dataclasses import dataclass

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.application.dtos.rfp import RfpCreate, RfpVersionData
from app.application.dtos.supplier_response import SupplierResponseData
from app.application.services.audit_query_service import AuditQueryService
from app.application.services.authorization_gate import AuthorizationGate
from app.application.services.award_service import AwardService
from app.application.services.response_lifecycle import ResponseLifecycleService
from app.application.services.rfp_lifecycle import RfpLifecycleService
from app.application.services.role_service import RoleService
from app.application.services.transition_publisher import TransitionPublisher
from app.domain.entities.rfp import RfpEntity
from app.domain.entities.supplier_response import SupplierResponseEntity
from app.domain.value_objects.policy import Actor
from app.infrastructure.persistence import models  # noqa: F401  registers tables
from app.infrastructure.persistence.database import Base
from app.infrastructure.services.role_initialization_service import DEFAULT_ROLES
from app.main import app
from app.schemas.permission_policy import parse_policy_document
from tests.fakes import (
    FakeResolver,
    FakeTransactionManager,
    InMemoryStore,
    RecordingAuditRecorder,
    RecordingHook,
)


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory over a fresh in-memory SQLite schema (aiosqlite).

    StaticPool keeps the single connection alive for the whole test, so every
    session sees the same database. Use sessions sequentially.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    await engine.dispose()


def make_actor(user_id: str, role_name: str) -> Actor:
    """Actor holding the default policy of role_name."""
    return Actor(
        id=user_id,
        role=role_name,
        policy=parse_policy_document(DEFAULT_ROLES[role_name]["permissions"]),
    )


@pytest.fixture
def buyer() -> Actor:
    return make_actor("buyer-1", "Buyer")


@pytest.fixture
def other_buyer() -> Actor:
    return make_actor("buyer-2", "Buyer")


@pytest.fixture
def supplier() -> Actor:
    return make_actor("supplier-1", "Supplier")


@pytest.fixture
def other_supplier() -> Actor:
    return make_actor("supplier-2", "Supplier")


@pytest.fixture
def admin() -> Actor:
    return make_actor("admin-1", "Admin")


@dataclass
class Workflow:
    """Services wired over one in-memory store."""

    store: InMemoryStore
    transactions: FakeTransactionManager
    resolver: FakeResolver
    recorder: RecordingAuditRecorder
    hook: RecordingHook
    gate: AuthorizationGate
    publisher: TransitionPublisher
    awards: AwardService
    rfps: RfpLifecycleService
    responses: ResponseLifecycleService
    roles: RoleService
    audit: AuditQueryService

    async def published_rfp(self, buyer: Actor, title: str = "Office chairs") -> RfpEntity:
        rfp = await self.rfps.create(
            buyer, RfpCreate(title=title, content=RfpVersionData(description="v1"))
        )
        return await self.rfps.publish(buyer, rfp.id)

    async def approved_response(
        self, buyer: Actor, supplier: Actor, rfp_id: str
    ) -> SupplierResponseEntity:
        response = await self.responses.create(
            supplier, rfp_id, SupplierResponseData(timeline="4 weeks")
        )
        await self.responses.submit(supplier, response.id)
        await self.responses.move_to_review(buyer, response.id)
        return await self.responses.approve(buyer, response.id)


@pytest.fixture
def workflow() -> Workflow:
    """Fresh in-memory workflow services per test."""
    store = InMemoryStore()
    transactions = FakeTransactionManager(store)
    resolver = FakeResolver(store)
    recorder = RecordingAuditRecorder()
    hook = RecordingHook()
    gate = AuthorizationGate(resolver)
    publisher = TransitionPublisher(recorder, [hook])
    awards = AwardService(gate, transactions, publisher)
    return Workflow(
        store=store,
        transactions=transactions,
        resolver=resolver,
        recorder=recorder,
        hook=hook,
        gate=gate,
        publisher=publisher,
        awards=awards,
        rfps=RfpLifecycleService(gate, transactions, publisher, awards),
        responses=ResponseLifecycleService(gate, transactions, publisher, awards),
        roles=RoleService(transactions, gate, publisher),
        audit=AuditQueryService(gate, transactions),
    )
