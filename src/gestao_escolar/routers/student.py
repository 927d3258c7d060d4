"""Student endpoints."""

from fastapi import APIRouter

from gestao_escolar.dependencies import DB, PageParams
from gestao_escolar.exceptions import NotFoundError
from gestao_escolar.schemas.query import QueryRequest
from gestao_escolar.schemas.student import StudentCreate, StudentListResponse, StudentResponse, StudentUpdate
from gestao_escolar.services import student as service

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=StudentListResponse)
async def list_students(db: DB, params: PageParams) -> StudentListResponse:
    """List students, newest first, with profile, school and class."""
    return StudentListResponse.model_validate(await service.get_students(db, params))


@router.post("/query", response_model=StudentListResponse)
async def query_students(db: DB, body: QueryRequest) -> StudentListResponse:
    return StudentListResponse.model_validate(await service.get_students(db, body.to_params()))


@router.post("", response_model=StudentResponse, status_code=201)
async def create_student(db: DB, payload: StudentCreate) -> StudentResponse:
    """Create the student and its ``aluno`` profile."""
    return StudentResponse.model_validate(await service.create_student(db, payload))


@router.get("/{student_id}", response_model=StudentResponse)
async def read_student(db: DB, student_id: int) -> StudentResponse:
    student = await service.find_student(db, student_id)
    if student is None:
        raise NotFoundError("Student", student_id)
    return StudentResponse.model_validate(student)


@router.patch("/{student_id}", response_model=StudentResponse)
async def update_student(db: DB, student_id: int, payload: StudentUpdate) -> StudentResponse:
    return StudentResponse.model_validate(await service.update_student(db, student_id, payload))


@router.delete("/{student_id}", status_code=204)
async def delete_student(db: DB, student_id: int) -> None:
    await service.delete_student(db, student_id)
