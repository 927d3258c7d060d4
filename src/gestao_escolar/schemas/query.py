"""Query envelope request types.

QueryParams and friends: plain dataclasses passed into repositories.
QueryRequest and friends: Pydantic models parsed from HTTP bodies; call
``to_params()`` at the router to hand the plain version to services.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class Operator(StrEnum):
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    LIKE = "like"
    ILIKE = "ilike"
    IN = "in"
    IS = "is"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int


@dataclass(frozen=True)
class Sort:
    field: str
    direction: SortDirection | str = SortDirection.ASC


@dataclass(frozen=True)
class Filter:
    """One AND-combined predicate. ``operator`` may be a raw string; it is
    validated when the query is built."""

    field: str
    operator: Operator | str
    value: Any = None


@dataclass(frozen=True)
class QueryParams:
    pagination: Pagination | None = None
    sort: tuple[Sort, ...] = field(default_factory=tuple)
    filters: tuple[Filter, ...] = field(default_factory=tuple)


class PaginationIn(BaseModel):
    # Bounds are enforced when the query is built, so a bad page surfaces as
    # invalid_parameter rather than a schema error.
    page: int = 1
    page_size: int = Field(10, alias="pageSize")

    model_config = {"populate_by_name": True}


class SortIn(BaseModel):
    field: str
    direction: SortDirection = SortDirection.ASC


class FilterIn(BaseModel):
    field: str
    operator: str
    value: Any = None


class QueryRequest(BaseModel):
    """Body of the ``POST /<collection>/query`` endpoints."""

    pagination: PaginationIn | None = None
    sort: list[SortIn] = []
    filters: list[FilterIn] = []

    def to_params(self) -> QueryParams:
        pagination = None
        if self.pagination is not None:
            pagination = Pagination(page=self.pagination.page, page_size=self.pagination.page_size)
        return QueryParams(
            pagination=pagination,
            sort=tuple(Sort(field=s.field, direction=s.direction) for s in self.sort),
            filters=tuple(Filter(field=f.field, operator=f.operator, value=f.value) for f in self.filters),
        )
