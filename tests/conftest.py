"""Shared fixtures: an in-memory database behind the FastAPI app."""
import os

# Must be set before the app modules read their settings
os.environ.setdefault("TASKDESK_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TASKDESK_PASSWORD_ITERATIONS", "1000")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from api.main import app
from core.database import get_session, init_db


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def client(engine):
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_session
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def sign_up(
    client: httpx.AsyncClient,
    name: str = "Ada Lovelace",
    email: str = "ada@example.com",
    password: str = "secret1",
) -> str:
    resp = await client.post(
        "/api/auth/signup", json={"name": name, "email": email, "password": password}
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["token"]


@pytest_asyncio.fixture
async def token(client):
    return await sign_up(client)


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Sign up another user; returns their bearer token."""

    async def _register(name: str, email: str, password: str = "secret1") -> str:
        return await sign_up(client, name=name, email=email, password=password)

    return _register
