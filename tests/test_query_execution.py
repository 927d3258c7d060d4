"""Query envelope against a real session: windows, counts, filters, sorts."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from gestao_escolar.exceptions import BackendError
from gestao_escolar.models import School, Student
from gestao_escolar.repositories.query import count_rows, fetch_one, fetch_page
from gestao_escolar.repositories.school import get_school, list_schools
from gestao_escolar.repositories.school_class import list_classes
from gestao_escolar.repositories.student import list_students
from gestao_escolar.schemas.query import Filter, Operator, Pagination, QueryParams, Sort, SortDirection
from tests.seeds import Seeded

BY_ID = (Sort("id", SortDirection.ASC),)


def _page(page: int, page_size: int, **kwargs: object) -> QueryParams:
    return QueryParams(pagination=Pagination(page=page, page_size=page_size), **kwargs)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_third_page_of_25_holds_5(seeded_db: Seeded) -> None:
    result = await fetch_page(seeded_db.db, select(Student), Student, _page(3, 10), default_sort=BY_ID)

    assert len(result.data) == 5
    assert result.pagination.total == 25
    assert result.pagination.page_count == 3


@pytest.mark.asyncio
async def test_pages_never_exceed_page_size(seeded_db: Seeded) -> None:
    seen: list[int] = []
    for page in (1, 2, 3):
        result = await fetch_page(seeded_db.db, select(Student), Student, _page(page, 10), default_sort=BY_ID)
        assert len(result.data) <= 10
        seen.extend(student.id for student in result.data)

    assert len(seen) == len(set(seen)) == 25


@pytest.mark.asyncio
async def test_page_beyond_last_is_empty_but_keeps_total(seeded_db: Seeded) -> None:
    filters = (Filter("status", Operator.EQ, "ativo"),)
    unpaged = await fetch_page(seeded_db.db, select(Student), Student, QueryParams(filters=filters), default_sort=BY_ID)
    beyond = await fetch_page(
        seeded_db.db, select(Student), Student, _page(9, 10, filters=filters), default_sort=BY_ID
    )

    assert beyond.data == []
    assert beyond.pagination.total == unpaged.pagination.total == 20
    assert beyond.pagination.page == 9


@pytest.mark.asyncio
async def test_without_pagination_returns_full_set(seeded_db: Seeded) -> None:
    result = await fetch_page(seeded_db.db, select(Student), Student, QueryParams(), default_sort=BY_ID)

    assert len(result.data) == 25
    assert result.pagination.page == 1
    assert result.pagination.page_size == 10


@pytest.mark.asyncio
async def test_eq_filter_returns_only_matching_status(seeded_db: Seeded) -> None:
    params = QueryParams(filters=(Filter("status", Operator.EQ, "ativo"),))
    result = await list_students(seeded_db.db, params)

    assert result.pagination.total == 20
    assert {student.status for student in result.data} == {"ativo"}


@pytest.mark.asyncio
async def test_filters_are_and_combined(seeded_db: Seeded) -> None:
    params = QueryParams(
        filters=(
            Filter("status", Operator.NEQ, "ativo"),
            Filter("school_id", Operator.EQ, seeded_db.school_a.id),
        )
    )
    result = await list_students(seeded_db.db, params)

    assert result.pagination.total == 5
    assert all(s.status != "ativo" and s.school_id == seeded_db.school_a.id for s in result.data)


@pytest.mark.asyncio
async def test_in_filter(seeded_db: Seeded) -> None:
    params = QueryParams(filters=(Filter("status", Operator.IN, ["inativo", "transferido"]),))
    result = await list_students(seeded_db.db, params)

    assert result.pagination.total == 5


@pytest.mark.asyncio
async def test_ilike_filter_ignores_case(seeded_db: Seeded) -> None:
    params = QueryParams(filters=(Filter("name", Operator.ILIKE, "MONTEIRO"),))
    result = await list_schools(seeded_db.db, params)

    assert [school.name for school in result.data] == ["EMEF Monteiro Lobato"]


@pytest.mark.asyncio
async def test_like_filter_matches_substring(seeded_db: Seeded) -> None:
    params = QueryParams(filters=(Filter("name", Operator.LIKE, "Monteiro"),))
    result = await list_schools(seeded_db.db, params)

    assert [school.name for school in result.data] == ["EMEF Monteiro Lobato"]


@pytest.mark.asyncio
async def test_like_filter_treats_wildcards_literally(seeded_db: Seeded) -> None:
    params = QueryParams(filters=(Filter("name", Operator.LIKE, "%"),))
    result = await list_schools(seeded_db.db, params)

    assert result.data == []
    assert result.pagination.total == 0


@pytest.mark.asyncio
async def test_is_null_filter(seeded_db: Seeded) -> None:
    params = QueryParams(filters=(Filter("address", Operator.IS, None),))
    result = await list_schools(seeded_db.db, params)

    assert [school.id for school in result.data] == [seeded_db.school_b.id]


@pytest.mark.asyncio
async def test_comparison_filters(seeded_db: Seeded) -> None:
    registration = seeded_db.students[19].registration_number
    params = QueryParams(filters=(Filter("registration_number", Operator.GT, registration),))
    result = await list_students(seeded_db.db, params)

    assert result.pagination.total == 5


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "operator, bound, expected",
    [
        (Operator.LT, "20240005", 5),
        (Operator.LTE, "20240005", 6),
        (Operator.GTE, "20240020", 5),
        (Operator.GT, "20240024", 0),
    ],
)
async def test_registration_number_bounds(
    seeded_db: Seeded, operator: Operator, bound: str, expected: int
) -> None:
    params = QueryParams(filters=(Filter("registration_number", operator, bound),))
    result = await list_students(seeded_db.db, params)

    assert result.pagination.total == expected


@pytest.mark.asyncio
async def test_year_bounds_on_classes(seeded_db: Seeded) -> None:
    db = seeded_db.db
    same_year = QueryParams(filters=(Filter("year", Operator.GTE, 2024), Filter("year", Operator.LTE, "2024")))
    earlier = QueryParams(filters=(Filter("year", Operator.LT, 2024),))

    assert (await list_classes(db, same_year)).pagination.total == 3
    assert (await list_classes(db, earlier)).pagination.total == 0


@pytest.mark.asyncio
async def test_sort_by_name_ascending(seeded_db: Seeded) -> None:
    params = QueryParams(sort=(Sort("name", SortDirection.ASC),))
    result = await list_schools(seeded_db.db, params)
    names = [school.name for school in result.data]

    assert names == sorted(names)


@pytest.mark.asyncio
async def test_sort_entries_apply_in_order(seeded_db: Seeded) -> None:
    params = QueryParams(
        sort=(Sort("status", SortDirection.DESC), Sort("registration_number", SortDirection.ASC))
    )
    result = await list_students(seeded_db.db, params)
    keys = [(s.status, s.registration_number) for s in result.data]

    statuses = [status for status, _ in keys]
    assert statuses == sorted(statuses, reverse=True)
    for status in set(statuses):
        group = [number for st, number in keys if st == status]
        assert group == sorted(group)


@pytest.mark.asyncio
async def test_school_scope_applies_before_filters(seeded_db: Seeded) -> None:
    result = await list_students(seeded_db.db, _page(1, 10), school_id=seeded_db.school_b.id)

    assert result.pagination.total == 5
    assert {s.school_id for s in result.data} == {seeded_db.school_b.id}


@pytest.mark.asyncio
async def test_list_rows_carry_related_records(seeded_db: Seeded) -> None:
    result = await list_students(seeded_db.db, _page(1, 3))

    for student in result.data:
        assert student.profile.full_name.startswith("Aluno")
        assert student.school.name.startswith("EMEF")


@pytest.mark.asyncio
async def test_fetch_one_missing_returns_none(seeded_db: Seeded) -> None:
    assert await get_school(seeded_db.db, 999_999) is None
    assert await fetch_one(seeded_db.db, select(Student).where(Student.id == -1)) is None


@pytest.mark.asyncio
async def test_count_rows(seeded_db: Seeded) -> None:
    assert await count_rows(seeded_db.db, Student) == 25
    assert await count_rows(seeded_db.db, School) == 2
    in_b = (Filter("school_id", Operator.EQ, seeded_db.school_b.id),)
    assert await count_rows(seeded_db.db, Student, in_b) == 5


@pytest.mark.asyncio
async def test_store_failure_is_wrapped_as_backend_error(db: AsyncSession) -> None:
    failure = OperationalError("SELECT 1", {}, Exception("connection reset"))
    db.scalars = AsyncMock(side_effect=failure)  # type: ignore[method-assign]

    with pytest.raises(BackendError) as exc_info:
        await fetch_page(db, select(School), School, QueryParams(), default_sort=BY_ID)

    assert exc_info.value.original is failure
