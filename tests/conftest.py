import os
import sys
from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

ADMIN_API_KEY = "test-admin-key"

sys.path.append(str(Path(__file__).resolve().parents[1]))

# Modules read these at import time, and test modules import before fixtures run
os.environ["APP_DEBUG"] = "true"
os.environ["ADMIN_API_KEY"] = ADMIN_API_KEY
os.environ["SUPABASE_URL"] = "https://auth.test"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "service-role-key"


@pytest.fixture(scope="session")
def test_db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture(scope="session")
def app(test_db_url: str):
    # Ensure env is set before importing the app
    os.environ["DATABASE_URL"] = test_db_url
    from buddybe.main import app as litestar_app
    return litestar_app


@pytest_asyncio.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac


@pytest_asyncio.fixture()
async def db_session(client, test_db_url: str) -> AsyncIterator[AsyncSession]:
    """Direct database access to the app's test database (tables exist once the app started)."""
    engine = create_async_engine(test_db_url)
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with async_session() as session:
            yield session
    finally:
        await engine.dispose()


@pytest.fixture()
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {ADMIN_API_KEY}"}
