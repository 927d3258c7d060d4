"""Class (turma) endpoints."""

from fastapi import APIRouter

from gestao_escolar.dependencies import DB, PageParams
from gestao_escolar.exceptions import NotFoundError
from gestao_escolar.schemas.query import QueryRequest
from gestao_escolar.schemas.school_class import ClassCreate, ClassListResponse, ClassResponse, ClassUpdate
from gestao_escolar.services import school_class as service

router = APIRouter(prefix="/classes", tags=["classes"])


@router.get("", response_model=ClassListResponse)
async def list_classes(db: DB, params: PageParams) -> ClassListResponse:
    return ClassListResponse.model_validate(await service.get_classes(db, params))


@router.post("/query", response_model=ClassListResponse)
async def query_classes(db: DB, body: QueryRequest) -> ClassListResponse:
    return ClassListResponse.model_validate(await service.get_classes(db, body.to_params()))


@router.post("", response_model=ClassResponse, status_code=201)
async def create_class(db: DB, payload: ClassCreate) -> ClassResponse:
    return ClassResponse.model_validate(await service.create_class(db, payload))


@router.get("/{class_id}", response_model=ClassResponse)
async def read_class(db: DB, class_id: int) -> ClassResponse:
    school_class = await service.find_class(db, class_id)
    if school_class is None:
        raise NotFoundError("Class", class_id)
    return ClassResponse.model_validate(school_class)


@router.patch("/{class_id}", response_model=ClassResponse)
async def update_class(db: DB, class_id: int, payload: ClassUpdate) -> ClassResponse:
    return ClassResponse.model_validate(await service.update_class(db, class_id, payload))


@router.delete("/{class_id}", status_code=204)
async def delete_class(db: DB, class_id: int) -> None:
    await service.delete_class(db, class_id)
