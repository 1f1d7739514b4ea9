import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool
from typing import AsyncGenerator
from clientcontacts.main import app
from clientcontacts.database import get_db, Base, make_engine, make_session_factory

# Each test gets its own in-memory SQLite database. StaticPool keeps the one
# connection alive so the schema created below is the one the app sees.
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database and session for each test."""
    test_engine = make_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    TestingSessionLocal = make_session_factory(test_engine)

    async with TestingSessionLocal() as session:
        yield session

    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Client for testing API endpoints."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def create_client(async_client: AsyncClient):
    async def _create(name: str) -> dict:
        response = await async_client.post("/api/clients", json={"name": name})
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def create_contact(async_client: AsyncClient):
    async def _create(name: str, surname: str, email: str) -> dict:
        response = await async_client.post(
            "/api/contacts",
            json={"name": name, "surname": surname, "email": email},
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def link(async_client: AsyncClient):
    async def _link(client_id: str, contact_id: str):
        return await async_client.post(
            "/api/client-contacts",
            json={"clientId": client_id, "contactId": contact_id},
        )
    return _link
