"""School endpoints."""

from fastapi import APIRouter

from gestao_escolar.dependencies import DB, PageParams
from gestao_escolar.exceptions import NotFoundError
from gestao_escolar.schemas.query import QueryRequest
from gestao_escolar.schemas.school import SchoolCreate, SchoolListResponse, SchoolResponse, SchoolUpdate
from gestao_escolar.schemas.school_class import ClassListResponse
from gestao_escolar.schemas.student import StudentListResponse
from gestao_escolar.schemas.teacher import TeacherListResponse
from gestao_escolar.services import school as service

router = APIRouter(prefix="/schools", tags=["schools"])


@router.get("", response_model=SchoolListResponse)
async def list_schools(db: DB, params: PageParams) -> SchoolListResponse:
    """List schools alphabetically, with their director."""
    return SchoolListResponse.model_validate(await service.get_schools(db, params))


@router.post("/query", response_model=SchoolListResponse)
async def query_schools(db: DB, body: QueryRequest) -> SchoolListResponse:
    """Filter, sort and paginate schools."""
    return SchoolListResponse.model_validate(await service.get_schools(db, body.to_params()))


@router.post("", response_model=SchoolResponse, status_code=201)
async def create_school(db: DB, payload: SchoolCreate) -> SchoolResponse:
    return SchoolResponse.model_validate(await service.create_school(db, payload))


@router.get("/{school_id}", response_model=SchoolResponse)
async def read_school(db: DB, school_id: int) -> SchoolResponse:
    school = await service.find_school(db, school_id)
    if school is None:
        raise NotFoundError("School", school_id)
    return SchoolResponse.model_validate(school)


@router.patch("/{school_id}", response_model=SchoolResponse)
async def update_school(db: DB, school_id: int, payload: SchoolUpdate) -> SchoolResponse:
    return SchoolResponse.model_validate(await service.update_school(db, school_id, payload))


@router.delete("/{school_id}", status_code=204)
async def delete_school(db: DB, school_id: int) -> None:
    await service.delete_school(db, school_id)


@router.get("/{school_id}/students", response_model=StudentListResponse)
async def list_school_students(db: DB, school_id: int, params: PageParams) -> StudentListResponse:
    return StudentListResponse.model_validate(await service.get_school_students(db, school_id, params))


@router.get("/{school_id}/teachers", response_model=TeacherListResponse)
async def list_school_teachers(db: DB, school_id: int, params: PageParams) -> TeacherListResponse:
    return TeacherListResponse.model_validate(await service.get_school_teachers(db, school_id, params))


@router.get("/{school_id}/classes", response_model=ClassListResponse)
async def list_school_classes(db: DB, school_id: int, params: PageParams) -> ClassListResponse:
    return ClassListResponse.model_validate(await service.get_school_classes(db, school_id, params))
