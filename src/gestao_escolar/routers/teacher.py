"""Teacher endpoints."""

from fastapi import APIRouter

from gestao_escolar.dependencies import DB, PageParams
from gestao_escolar.exceptions import NotFoundError
from gestao_escolar.schemas.query import QueryRequest
from gestao_escolar.schemas.teacher import TeacherCreate, TeacherListResponse, TeacherResponse, TeacherUpdate
from gestao_escolar.services import teacher as service

router = APIRouter(prefix="/teachers", tags=["teachers"])


@router.get("", response_model=TeacherListResponse)
async def list_teachers(db: DB, params: PageParams) -> TeacherListResponse:
    return TeacherListResponse.model_validate(await service.get_teachers(db, params))


@router.post("/query", response_model=TeacherListResponse)
async def query_teachers(db: DB, body: QueryRequest) -> TeacherListResponse:
    return TeacherListResponse.model_validate(await service.get_teachers(db, body.to_params()))


@router.post("", response_model=TeacherResponse, status_code=201)
async def create_teacher(db: DB, payload: TeacherCreate) -> TeacherResponse:
    return TeacherResponse.model_validate(await service.create_teacher(db, payload))


@router.get("/{teacher_id}", response_model=TeacherResponse)
async def read_teacher(db: DB, teacher_id: int) -> TeacherResponse:
    teacher = await service.find_teacher(db, teacher_id)
    if teacher is None:
        raise NotFoundError("Teacher", teacher_id)
    return TeacherResponse.model_validate(teacher)


@router.patch("/{teacher_id}", response_model=TeacherResponse)
async def update_teacher(db: DB, teacher_id: int, payload: TeacherUpdate) -> TeacherResponse:
    return TeacherResponse.model_validate(await service.update_teacher(db, teacher_id, payload))


@router.delete("/{teacher_id}", status_code=204)
async def delete_teacher(db: DB, teacher_id: int) -> None:
    await service.delete_teacher(db, teacher_id)
