"""Generic pagination envelope shared by all list endpoints.

PaginatedResponse[T]: Pydantic model for HTTP responses (serializable).
Paginated[T]:         plain dataclass for repository and service returns.

Both carry ``data`` plus ``pagination`` metadata where
``page_count == ceil(total / page_size)``.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


@dataclass(frozen=True)
class PageInfo:
    total: int
    page: int
    page_size: int
    page_count: int


@dataclass
class Paginated(Generic[T]):
    """Plain dataclass for a page of records inside the service layer.

    Services return it untouched; the router converts it::

        result = await list_students(db, params)
        return StudentListResponse.model_validate(result)
    """

    data: list[T]
    pagination: PageInfo


class PageInfoResponse(BaseModel):
    """Pagination metadata. Serialized in camelCase (``pageSize``, ``pageCount``)."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    total: int
    page: int
    page_size: int
    page_count: int


class PaginatedResponse(BaseModel, Generic[T]):
    """Pydantic model for paginated HTTP responses.

    ``from_attributes`` lets ``model_validate`` read a ``Paginated`` dataclass
    directly. Reuse it per entity::

        StudentListResponse = PaginatedResponse[StudentResponse]
    """

    model_config = ConfigDict(from_attributes=True)

    data: list[T]
    pagination: PageInfoResponse
