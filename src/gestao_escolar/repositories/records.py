"""Write helpers shared by the entity repositories.

Flush only; the request-scoped session in ``get_db`` owns commit/rollback.
Writes are not deduplicated: retrying a failed create can insert twice
unless a unique constraint rejects it.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from gestao_escolar.exceptions import backend_errors

T = TypeVar("T")


async def save(db: AsyncSession, record: T) -> T:
    """Insert or flush pending changes of ``record`` and reload server-set columns."""
    with backend_errors():
        db.add(record)
        await db.flush()
        await db.refresh(record)
    return record


async def assign_and_save(db: AsyncSession, record: T, values: Mapping[str, Any]) -> T:
    for key, value in values.items():
        setattr(record, key, value)
    return await save(db, record)


async def exists(db: AsyncSession, model: type, identifier: Any) -> bool:
    with backend_errors():
        return await db.get(model, identifier) is not None


async def remove(db: AsyncSession, record: object) -> None:
    with backend_errors():
        await db.delete(record)
        await db.flush()
