import os
from collections.abc import AsyncIterator

# In-memory SQLite unless a real test database is configured. Set before the
# application modules build their engine from settings.
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool, StaticPool  # noqa: E402

import gestao_escolar.models  # noqa: E402, F401 — registers tables on Base.metadata
from gestao_escolar.db.session import Base, get_db  # noqa: E402
from gestao_escolar.dependencies import PROFILE_HEADER  # noqa: E402
from gestao_escolar.main import app  # noqa: E402
from gestao_escolar.models import Profile  # noqa: E402

# Fixtures in tests/seeds.py are only visible to pytest through pytest_plugins.
pytest_plugins = ["tests.seeds"]


def _make_engine():  # type: ignore[no-untyped-def]
    if TEST_DATABASE_URL.startswith("sqlite"):
        return create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)


@pytest_asyncio.fixture
async def db() -> AsyncIterator[AsyncSession]:
    """Create tables and yield a session, then drop tables after the test."""
    engine = _make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def admin(db: AsyncSession) -> Profile:
    """Municipal administrator used as the default session profile."""
    profile = Profile(full_name="Ana Administradora", role="admin_municipal")
    db.add(profile)
    await db.flush()
    return profile


@pytest_asyncio.fixture
async def anonymous_client(db: AsyncSession) -> AsyncIterator[AsyncClient]:
    """HTTP client on the test session, without a session profile header."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(anonymous_client: AsyncClient, admin: Profile) -> AsyncClient:
    """HTTP client acting as the municipal administrator."""
    anonymous_client.headers[PROFILE_HEADER] = str(admin.id)
    return anonymous_client
