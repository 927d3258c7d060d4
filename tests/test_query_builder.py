"""Unit tests for the query envelope builder (no database)."""

import uuid
from datetime import date

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import sqlite

from gestao_escolar.exceptions import InvalidParameterError
from gestao_escolar.models import Profile, School, SchoolClass, Student
from gestao_escolar.repositories.query import build_query, count_query, wrap_result
from gestao_escolar.schemas.query import (
    Filter,
    Operator,
    Pagination,
    QueryParams,
    QueryRequest,
    Sort,
    SortDirection,
)

DEFAULT_SORT = (Sort("created_at", SortDirection.DESC),)


def _sql(stmt: object) -> str:
    return str(stmt.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}))  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# wrap_result
# ---------------------------------------------------------------------------
def test_wrap_result_last_partial_page() -> None:
    params = QueryParams(pagination=Pagination(page=3, page_size=10))
    result = wrap_result(list(range(5)), 25, params)

    assert len(result.data) == 5
    assert result.pagination.total == 25
    assert result.pagination.page == 3
    assert result.pagination.page_size == 10
    assert result.pagination.page_count == 3


def test_wrap_result_defaults_without_pagination() -> None:
    result = wrap_result(["a", "b"], 2, QueryParams())

    assert result.pagination.page == 1
    assert result.pagination.page_size == 10
    assert result.pagination.page_count == 1


def test_wrap_result_empty_collection_has_zero_pages() -> None:
    result = wrap_result([], 0, QueryParams(pagination=Pagination(page=1, page_size=10)))

    assert result.data == []
    assert result.pagination.page_count == 0


@pytest.mark.parametrize(
    "total, page_size, expected",
    [(1, 1, 1), (10, 10, 1), (11, 10, 2), (99, 25, 4), (100, 25, 4)],
)
def test_wrap_result_page_count_is_ceiling(total: int, page_size: int, expected: int) -> None:
    params = QueryParams(pagination=Pagination(page=1, page_size=page_size))
    assert wrap_result([], total, params).pagination.page_count == expected


def test_wrap_result_rejects_zero_page_size() -> None:
    with pytest.raises(InvalidParameterError):
        wrap_result([], 3, QueryParams(pagination=Pagination(page=1, page_size=0)))


# ---------------------------------------------------------------------------
# build_query: validation
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    "pagination",
    [Pagination(page=1, page_size=0), Pagination(page=1, page_size=-5), Pagination(page=0, page_size=10)],
    ids=["page_size_zero", "page_size_negative", "page_zero"],
)
def test_build_query_rejects_bad_pagination(pagination: Pagination) -> None:
    with pytest.raises(InvalidParameterError):
        build_query(select(Student), Student, QueryParams(pagination=pagination), default_sort=DEFAULT_SORT)


def test_build_query_rejects_unknown_operator() -> None:
    params = QueryParams(filters=(Filter("status", "contains", "ativo"),))
    with pytest.raises(InvalidParameterError) as exc_info:
        build_query(select(Student), Student, params, default_sort=DEFAULT_SORT)
    assert "contains" in exc_info.value.message


def test_build_query_rejects_unknown_filter_field() -> None:
    params = QueryParams(filters=(Filter("nickname", Operator.EQ, "x"),))
    with pytest.raises(InvalidParameterError):
        build_query(select(Student), Student, params, default_sort=DEFAULT_SORT)


def test_build_query_rejects_relationship_as_field() -> None:
    params = QueryParams(sort=(Sort("school"),))
    with pytest.raises(InvalidParameterError):
        build_query(select(Student), Student, params, default_sort=DEFAULT_SORT)


def test_build_query_rejects_bad_sort_direction() -> None:
    params = QueryParams(sort=(Sort("name", "sideways"),))
    with pytest.raises(InvalidParameterError):
        build_query(select(School), School, params, default_sort=DEFAULT_SORT)


def test_build_query_in_requires_a_list() -> None:
    params = QueryParams(filters=(Filter("status", Operator.IN, "ativo"),))
    with pytest.raises(InvalidParameterError):
        build_query(select(Student), Student, params, default_sort=DEFAULT_SORT)


def test_build_query_is_only_accepts_null_or_booleans() -> None:
    params = QueryParams(filters=(Filter("class_id", Operator.IS, 3),))
    with pytest.raises(InvalidParameterError):
        build_query(select(Student), Student, params, default_sort=DEFAULT_SORT)


@pytest.mark.parametrize(
    "model, flt",
    [
        (SchoolClass, Filter("year", Operator.LIKE, "20")),
        (Student, Filter("profile_id", Operator.ILIKE, "abc")),
        (Student, Filter("birth_date", Operator.LIKE, "2016")),
        (SchoolClass, Filter("name", Operator.IS, True)),
        (Student, Filter("class_id", Operator.IS, "false")),
        (School, Filter("name", Operator.LIKE, None)),
    ],
    ids=[
        "like_on_integer",
        "ilike_on_uuid",
        "like_on_date",
        "is_true_on_text",
        "is_false_on_integer",
        "like_without_value",
    ],
)
def test_build_query_rejects_operator_on_wrong_column_type(model: type, flt: Filter) -> None:
    with pytest.raises(InvalidParameterError):
        build_query(select(model), model, QueryParams(filters=(flt,)), default_sort=DEFAULT_SORT)


def test_build_query_is_true_on_boolean_column() -> None:
    params = QueryParams(filters=(Filter("is_active", Operator.IS, "true"),))
    sql = _sql(build_query(select(SchoolClass), SchoolClass, params, default_sort=DEFAULT_SORT))

    assert "classes.is_active IS" in sql


@pytest.mark.parametrize(
    "field, value",
    [
        ("school_id", "abc"),
        ("school_id", True),
        ("birth_date", "14/03/2016"),
        ("birth_date", "2016-03-14garbage"),
        ("profile_id", "not-a-uuid"),
    ],
)
def test_build_query_rejects_uncoercible_values(field: str, value: object) -> None:
    params = QueryParams(filters=(Filter(field, Operator.EQ, value),))
    with pytest.raises(InvalidParameterError):
        build_query(select(Student), Student, params, default_sort=DEFAULT_SORT)


# ---------------------------------------------------------------------------
# build_query: generated SQL
# ---------------------------------------------------------------------------
def test_build_query_applies_window() -> None:
    params = QueryParams(pagination=Pagination(page=3, page_size=10))
    sql = _sql(build_query(select(Student), Student, params, default_sort=DEFAULT_SORT))

    assert "LIMIT 10 OFFSET 20" in sql


def test_build_query_without_pagination_has_no_window() -> None:
    sql = _sql(build_query(select(Student), Student, QueryParams(), default_sort=DEFAULT_SORT))

    assert "LIMIT" not in sql
    assert "OFFSET" not in sql


def test_build_query_uses_default_sort_only_when_none_given() -> None:
    default_sql = _sql(build_query(select(Student), Student, QueryParams(), default_sort=DEFAULT_SORT))
    assert "ORDER BY students.created_at DESC" in default_sql

    params = QueryParams(
        sort=(Sort("status", SortDirection.ASC), Sort("registration_number", SortDirection.DESC))
    )
    sql = _sql(build_query(select(Student), Student, params, default_sort=DEFAULT_SORT))
    assert "ORDER BY students.status ASC, students.registration_number DESC" in sql
    assert "created_at DESC" not in sql


def test_build_query_ands_filters() -> None:
    params = QueryParams(
        filters=(
            Filter("status", Operator.EQ, "ativo"),
            Filter("school_id", Operator.GTE, "2"),
            Filter("class_id", Operator.IS, None),
        )
    )
    sql = _sql(build_query(select(Student), Student, params, default_sort=DEFAULT_SORT))

    assert "students.status = 'ativo'" in sql
    assert "students.school_id >= 2" in sql
    assert "students.class_id IS NULL" in sql
    assert sql.count(" AND ") == 2


def test_build_query_ilike_is_case_insensitive_substring() -> None:
    params = QueryParams(filters=(Filter("name", Operator.ILIKE, "lobato"),))
    sql = _sql(build_query(select(School), School, params, default_sort=DEFAULT_SORT)).lower()

    assert "lower(schools.name) like" in sql
    assert "'%'" in sql


def test_build_query_like_is_escaped_substring() -> None:
    params = QueryParams(filters=(Filter("name", Operator.LIKE, "50%_off"),))
    sql = _sql(build_query(select(School), School, params, default_sort=DEFAULT_SORT))

    assert "schools.name LIKE" in sql
    assert "'50/%/_off'" in sql
    assert "ESCAPE '/'" in sql
    assert "lower(" not in sql


def test_build_query_in_coerces_members() -> None:
    params = QueryParams(filters=(Filter("school_id", Operator.IN, ["1", 2]),))
    sql = _sql(build_query(select(Student), Student, params, default_sort=DEFAULT_SORT))

    assert "students.school_id IN (1, 2)" in sql


def test_build_query_accepts_typed_values() -> None:
    profile_id = uuid.uuid4()
    params = QueryParams(
        filters=(
            Filter("id", Operator.EQ, str(profile_id)),
            Filter("role", Operator.NEQ, "aluno"),
        )
    )
    # Coercion must not raise for a well-formed UUID string
    build_query(select(Profile), Profile, params, default_sort=DEFAULT_SORT)

    params = QueryParams(filters=(Filter("birth_date", Operator.LT, "2017-01-01"),))
    stmt = build_query(select(Student), Student, params, default_sort=DEFAULT_SORT)
    assert date(2017, 1, 1) in stmt.compile().params.values()


def test_build_query_timestamp_filters_date_by_day() -> None:
    params = QueryParams(filters=(Filter("birth_date", Operator.EQ, "2016-03-14T08:30:00Z"),))
    stmt = build_query(select(Student), Student, params, default_sort=DEFAULT_SORT)

    assert date(2016, 3, 14) in stmt.compile().params.values()


def test_count_query_ignores_sort_and_window() -> None:
    params = QueryParams(
        pagination=Pagination(page=2, page_size=5),
        sort=(Sort("status"),),
        filters=(Filter("status", Operator.EQ, "ativo"),),
    )
    sql = _sql(count_query(select(Student), Student, params))

    assert sql.lower().startswith("select count(*)")
    assert "ORDER BY" not in sql
    assert "LIMIT" not in sql
    assert "students.status = 'ativo'" in sql


# ---------------------------------------------------------------------------
# QueryRequest (HTTP body) -> QueryParams
# ---------------------------------------------------------------------------
def test_query_request_accepts_camel_case_page_size() -> None:
    body = QueryRequest.model_validate(
        {
            "pagination": {"page": 2, "pageSize": 5},
            "sort": [{"field": "name", "direction": "desc"}],
            "filters": [{"field": "status", "operator": "eq", "value": "ativo"}],
        }
    )
    params = body.to_params()

    assert params.pagination == Pagination(page=2, page_size=5)
    assert params.sort == (Sort("name", SortDirection.DESC),)
    assert params.filters == (Filter("status", "eq", "ativo"),)


def test_query_request_without_pagination() -> None:
    params = QueryRequest.model_validate({}).to_params()

    assert params.pagination is None
    assert params.sort == ()
    assert params.filters == ()
