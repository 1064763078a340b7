import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.in_memory_session_store import InMemorySessionStore
from src.api.app import create_app
from src.api.utils.jwt import JwtTokenService
from src.app.services.password_hasher import PasswordHasher
from src.depends import Container
from tests.fixtures.json_loader import TestDataLoader


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def container(engine, session_store):
    return Container(
        config=ApplicationConfig,
        session_store=session_store,
        token_service=JwtTokenService("integration-test-secret"),
        password_hasher=PasswordHasher(rounds=4),
        engine=engine,
        session_factory=sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        ),
    )


@pytest_asyncio.fixture
async def client(container):
    app = create_app(ApplicationConfig, container=container)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def registered(client, test_data):
    """Register the default user; returns (payload, response body)"""
    payload = test_data.get_copy("register_user")
    response = await client.post("/register", json=payload)
    assert response.status_code == 201
    return payload, response.json()
