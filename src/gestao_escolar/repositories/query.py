"""Query envelope: filter, sort and paginate a select, then wrap the page.

Stateless helpers shared by every entity repository. A call site passes a
base ``select()``, the model whose columns filters and sorts may reference,
and a ``QueryParams``. Nothing here retries, caches or inspects store
errors; any SQLAlchemy failure surfaces as ``BackendError``. Reads use
``populate_existing`` so rows already in the session are refreshed from
the store rather than served from the identity map.
"""

import math
import operator as op
import uuid
from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, TypeVar

from sqlalchemy import Column, ColumnElement, Select, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from gestao_escolar.exceptions import InvalidParameterError, backend_errors
from gestao_escolar.schemas.pagination import PageInfo, Paginated
from gestao_escolar.schemas.query import Filter, Operator, Pagination, QueryParams, Sort, SortDirection

T = TypeVar("T")
S = TypeVar("S", bound=Select[Any])

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

_COMPARISONS: dict[Operator, Callable[[Any, Any], ColumnElement[bool]]] = {
    Operator.EQ: op.eq,
    Operator.NEQ: op.ne,
    Operator.GT: op.gt,
    Operator.GTE: op.ge,
    Operator.LT: op.lt,
    Operator.LTE: op.le,
}

_IS_LITERALS = {"null": None, "true": True, "false": False}


def _column(model: type, field: str, parameter: str) -> Column[Any]:
    column = inspect(model).columns.get(field)
    if column is None:
        raise InvalidParameterError(parameter, f"unknown field '{field}' for {model.__name__}")
    return column


def _operator(raw: Operator | str) -> Operator:
    try:
        return Operator(raw)
    except ValueError:
        raise InvalidParameterError("filters", f"unknown operator '{raw}'") from None


def _python_type(column: Column[Any]) -> type | None:
    try:
        return column.type.python_type
    except NotImplementedError:
        return None


def _coerce(column: Column[Any], value: Any) -> Any:
    """Convert a JSON-ish filter value to the column's Python type."""
    python_type = _python_type(column)
    if value is None or python_type is None:
        return value
    # bool is an int subclass; True must not pass as an integer id
    if isinstance(value, python_type) and (python_type is bool or not isinstance(value, bool)):
        return value
    try:
        if python_type is bool:
            text = str(value).strip().lower()
            if text in {"1", "true", "yes", "sim"}:
                return True
            if text in {"0", "false", "no", "nao", "não"}:
                return False
            raise ValueError(value)
        if python_type is int:
            if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
                raise ValueError(value)
            return int(value)
        if python_type is Decimal:
            return Decimal(str(value).replace(",", "."))
        if python_type is float:
            return float(value)
        if python_type is uuid.UUID:
            return uuid.UUID(str(value))
        if python_type is datetime:
            return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        if python_type is date:
            text = str(value)
            # a full timestamp filters by its calendar day
            return date.fromisoformat(text[:10] if text[10:11] == "T" else text)
        if python_type is str:
            return str(value)
    except (ValueError, TypeError, InvalidOperation):
        raise InvalidParameterError(
            "filters", f"value {value!r} is not valid for field '{column.key}'"
        ) from None
    return value


def _predicate(model: type, flt: Filter) -> ColumnElement[bool]:
    column = _column(model, flt.field, "filters")
    operator = _operator(flt.operator)

    if operator in _COMPARISONS:
        return _COMPARISONS[operator](column, _coerce(column, flt.value))
    if operator in (Operator.LIKE, Operator.ILIKE):
        if _python_type(column) is not str:
            raise InvalidParameterError(
                "filters", f"'{operator}' needs a text field, '{flt.field}' is not one"
            )
        if flt.value is None:
            raise InvalidParameterError("filters", f"'{operator}' on '{flt.field}' needs a value")
        if operator is Operator.LIKE:
            return column.contains(str(flt.value), autoescape=True)
        return column.icontains(str(flt.value), autoescape=True)
    if operator is Operator.IN:
        if isinstance(flt.value, (str, bytes)) or not isinstance(flt.value, Iterable):
            raise InvalidParameterError("filters", f"'in' on '{flt.field}' needs a list of values")
        return column.in_([_coerce(column, item) for item in flt.value])
    # Operator.IS
    value = flt.value
    if isinstance(value, str):
        if value.lower() not in _IS_LITERALS:
            raise InvalidParameterError("filters", "'is' accepts only null, true or false")
        value = _IS_LITERALS[value.lower()]
    if value is not None and not isinstance(value, bool):
        raise InvalidParameterError("filters", "'is' accepts only null, true or false")
    if value is not None and _python_type(column) is not bool:
        raise InvalidParameterError(
            "filters", f"'is {str(value).lower()}' needs a boolean field, '{flt.field}' is not one"
        )
    return column.is_(value)


def _order_by(model: type, sort: Sequence[Sort]) -> list[ColumnElement[Any]]:
    clauses = []
    for entry in sort:
        column = _column(model, entry.field, "sort")
        try:
            direction = SortDirection(entry.direction)
        except ValueError:
            raise InvalidParameterError("sort", f"direction must be asc or desc, got '{entry.direction}'") from None
        clauses.append(column.asc() if direction is SortDirection.ASC else column.desc())
    return clauses


def _checked(pagination: Pagination) -> Pagination:
    if pagination.page_size <= 0:
        raise InvalidParameterError("pagination.pageSize", "must be at least 1")
    if pagination.page < 1:
        raise InvalidParameterError("pagination.page", "must be at least 1")
    return pagination


def apply_filters(stmt: S, model: type, filters: Iterable[Filter]) -> S:
    """AND every filter onto ``stmt``, in the order given."""
    for flt in filters:
        stmt = stmt.where(_predicate(model, flt))
    return stmt


def build_query(
    base: S, model: type, params: QueryParams, *, default_sort: Sequence[Sort]
) -> S:
    """Translate ``params`` into filters, ORDER BY clauses and a row window.

    ``default_sort`` applies only when ``params.sort`` is empty; every caller
    must name one so list ordering never depends on the store.
    """
    pagination = _checked(params.pagination) if params.pagination is not None else None
    stmt = apply_filters(base, model, params.filters)
    stmt = stmt.order_by(*_order_by(model, params.sort or default_sort))
    if pagination is not None:
        stmt = stmt.offset((pagination.page - 1) * pagination.page_size).limit(pagination.page_size)
    return stmt


def count_query(base: Select[Any], model: type, params: QueryParams) -> Select[tuple[int]]:
    """Count the rows matching ``base`` plus the filters, ignoring sort and window."""
    filtered = apply_filters(base, model, params.filters).order_by(None)
    return select(func.count()).select_from(filtered.subquery())


def wrap_result(rows: Sequence[T], total: int, params: QueryParams) -> Paginated[T]:
    """Build the envelope, echoing the requested page or the 1/10 defaults."""
    if params.pagination is not None:
        pagination = _checked(params.pagination)
        page, page_size = pagination.page, pagination.page_size
    else:
        page, page_size = DEFAULT_PAGE, DEFAULT_PAGE_SIZE
    return Paginated(
        data=list(rows),
        pagination=PageInfo(
            total=total,
            page=page,
            page_size=page_size,
            page_count=math.ceil(total / page_size),
        ),
    )


async def fetch_page(
    db: AsyncSession,
    base: Select[tuple[T]],
    model: type[T],
    params: QueryParams,
    *,
    default_sort: Sequence[Sort],
    options: Sequence[ORMOption] = (),
) -> Paginated[T]:
    """Run the windowed select and its count; two queries per call."""
    stmt = (
        build_query(base, model, params, default_sort=default_sort)
        .options(*options)
        .execution_options(populate_existing=True)
    )
    total_stmt = count_query(base, model, params)
    with backend_errors():
        rows = (await db.scalars(stmt)).all()
        total = (await db.execute(total_stmt)).scalar_one()
    return wrap_result(rows, total, params)


async def fetch_one(db: AsyncSession, stmt: Select[tuple[T]]) -> T | None:
    """Return the single matching record, or None when there is none."""
    stmt = stmt.execution_options(populate_existing=True)
    with backend_errors():
        return (await db.execute(stmt)).scalar_one_or_none()


async def count_rows(db: AsyncSession, model: type, filters: Iterable[Filter] = ()) -> int:
    """Count rows of ``model`` matching every filter."""
    stmt = apply_filters(select(func.count()).select_from(model), model, filters)
    with backend_errors():
        return (await db.execute(stmt)).scalar_one()
