"""Helpers shared by the entity services."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from gestao_escolar.exceptions import InvalidParameterError, backend_errors
from gestao_escolar.repositories.records import exists


async def check_references(db: AsyncSession, values: Mapping[str, Any], references: Mapping[str, type]) -> None:
    """Reject payload ids that point at missing rows.

    ``references`` maps a payload field (``school_id``) to the model it
    points at. Absent or null fields are skipped.
    """
    for field, model in references.items():
        identifier = values.get(field)
        if identifier is not None and not await exists(db, model, identifier):
            raise InvalidParameterError(field, f"no {model.__name__} with id {identifier}")


async def check_same_school(
    db: AsyncSession, model: type, identifier: Any, school_id: int, field: str
) -> None:
    """Reject a class or teacher id that belongs to a school other than ``school_id``."""
    if identifier is None:
        return
    with backend_errors():
        record = await db.get(model, identifier)
    if record is not None and record.school_id != school_id:
        raise InvalidParameterError(field, f"{model.__name__} {identifier} belongs to another school")
