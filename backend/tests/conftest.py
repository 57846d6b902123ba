"""Shared test fixtures: in-memory SQLite DB, async session, test clients."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import edumaster.models  # noqa: F401
from edumaster.dashboard.api import EduMasterClient
from edumaster.dependencies import get_db
from edumaster.main import app
from edumaster.models.base import Base
from edumaster.services.demo_seed import DEMO_PASSWORD, seed_demo_data

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)


# Enable foreign key enforcement in SQLite (off by default).
@event.listens_for(test_engine.sync_engine, "connect")
def _set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
test_session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """Yield a test DB session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db_session: AsyncSession) -> AsyncSession:
    """The test session with the demo catalogue loaded and committed."""
    await seed_demo_data(db_session)
    await db_session.commit()
    return db_session


@pytest.fixture
def override_db(db_session: AsyncSession):
    """Route the app's get_db dependency to the test session."""

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(override_db) -> AsyncClient:
    """Yield an httpx AsyncClient wired to the test DB."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def make_api(override_db):
    """Factory for EduMasterClient instances talking to the in-process app.

    make_api(email) logs in with the demo password first.
    """
    clients: list[EduMasterClient] = []

    async def _make(email: str | None = None, password: str = DEMO_PASSWORD) -> EduMasterClient:
        api = EduMasterClient("http://test/api", transport=ASGITransport(app=app))
        clients.append(api)
        if email is not None:
            await api.login(email, password)
        return api

    yield _make
    for api in clients:
        await api.aclose()

