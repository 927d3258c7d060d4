from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from gestao_escolar.config import Settings, settings
from gestao_escolar.exceptions import backend_errors

# Naming conventions for database constraints, so Alembic autogenerates
# stable constraint names across migrations.
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    Base.metadata tracks every registered table; the naming convention keeps
    constraint names predictable for Alembic.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def build_engine(config: Settings) -> AsyncEngine:
    """Create the async engine for the configured database.

    Server databases get a tuned connection pool. SQLite shares one static
    connection, which is what keeps an in-memory database alive between
    sessions.
    """
    if config.is_sqlite:
        return create_async_engine(
            config.database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=config.db_echo,
        )

    kwargs: dict[str, Any] = {
        "pool_size": config.db_pool_size,
        "max_overflow": config.db_max_overflow,
        "pool_timeout": config.db_pool_timeout,
        "pool_recycle": config.db_pool_recycle,
        "pool_pre_ping": config.db_pool_pre_ping,
        "echo": config.db_echo,
    }
    if config.database_url.startswith("postgresql+asyncpg"):
        kwargs["connect_args"] = {"command_timeout": config.db_statement_timeout}
    return create_async_engine(config.database_url, **kwargs)


engine = build_engine(settings)

# expire_on_commit=False keeps objects usable after commit; expired
# attributes would otherwise trigger implicit I/O outside the event loop.
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides a database session per request.

    Commits on success, rolls back on exception. This is the single place where
    transaction boundaries are managed; services and repositories only flush.
    A failing commit is mapped through backend_errors like any other store failure.
    """
    async with async_session() as session:
        try:
            yield session
            with backend_errors():
                await session.commit()
        except Exception:
            await session.rollback()
            raise


async def shutdown() -> None:
    """Close all pooled database connections."""
    await engine.dispose()
