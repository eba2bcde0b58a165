"""API test fixtures — async DB, fake backing store and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so the readiness probe runs against the test engine
    - get_gateway_service overridden: real resolver, table and executor over a
      FakeBackingStore (records calls, returns scalars or raises driver errors)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - The executor is the real ProcedureExecutor so error classification is
      exercised end to end; only the engine is faked
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import intranet_api.infrastructure.database as db_module
from intranet_api.core.command_table import CommandTable
from intranet_api.db.base import Base
from intranet_api.infrastructure.database import DatabaseSessionManager, get_db
from intranet_api.infrastructure.procedure_executor import ProcedureExecutor
from intranet_api.main import app
from intranet_api.services.gateway_service import (
    GatewayService, get_gateway_service,
)
from tests.fake_backing_store import FakeBackingStore

DECLARED_COMMANDS = ("ping", "GetOrders", "FooBar")


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def backing_store():
    return FakeBackingStore()


@pytest.fixture
def command_table():
    table = CommandTable(strict=True)
    for value in DECLARED_COMMANDS:
        table.declare(value)
    return table


@pytest.fixture
def gateway(backing_store, command_table):
    return GatewayService(command_table, ProcedureExecutor(backing_store))


@pytest.fixture
async def client(test_engine, test_session_factory, gateway):
    """FastAPI test client with DB and gateway dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gateway_service] = lambda: gateway

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
