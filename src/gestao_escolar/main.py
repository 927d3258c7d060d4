from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from gestao_escolar.db.session import shutdown
from gestao_escolar.dependencies import DB, get_current_profile
from gestao_escolar.exceptions import (
    BackendError,
    ConflictError,
    DomainError,
    InvalidParameterError,
    NotFoundError,
    UnauthorizedError,
)
from gestao_escolar.logging import get_logger
from gestao_escolar.middleware import RequestIDMiddleware
from gestao_escolar.routers import dashboard, profile, school, school_class, student, teacher
from gestao_escolar.schemas.error import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Code before yield runs on startup, after yield on shutdown."""
    logger.info("app_startup")
    yield
    await shutdown()


app = FastAPI(title="Gestão Escolar", lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)

# Every screen behind the login sits behind the session profile.
_authenticated = [Depends(get_current_profile)]
app.include_router(profile.router, dependencies=_authenticated)
app.include_router(dashboard.router, dependencies=_authenticated)
app.include_router(school.router, dependencies=_authenticated)
app.include_router(student.router, dependencies=_authenticated)
app.include_router(teacher.router, dependencies=_authenticated)
app.include_router(school_class.router, dependencies=_authenticated)


def _error_json(code: str, message: str) -> dict[str, object]:
    """Build the standard error envelope as a dict for JSONResponse."""
    return ErrorResponse(error=ErrorDetail(code=code, message=message)).model_dump()


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=_error_json(exc.code, exc.message))


@app.exception_handler(InvalidParameterError)
async def invalid_parameter_handler(request: Request, exc: InvalidParameterError) -> JSONResponse:
    logger.info("invalid_parameter", parameter=exc.parameter, reason=exc.reason, path=request.url.path)
    return JSONResponse(status_code=400, content=_error_json(exc.code, exc.message))


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=409, content=_error_json(exc.code, exc.message))


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return JSONResponse(status_code=401, content=_error_json(exc.code, exc.message))


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError) -> JSONResponse:
    """Log the store failure with its cause; the client gets a generic notice."""
    logger.error(
        "backend_error",
        error=str(exc.original),
        error_type=type(exc.original).__name__,
        path=request.url.path,
        method=request.method,
    )
    return JSONResponse(status_code=502, content=_error_json(exc.code, "Record store unavailable"))


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Return 400 for generic domain-level violations."""
    logger.warning("domain_error", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=400, content=_error_json(exc.code, exc.message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and return a safe error response (no stack traces leaked)."""
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content=_error_json("internal_error", "Internal server error"),
    )


@app.get("/health")
async def health(db: DB) -> dict[str, str]:
    """Health check, verifies database connectivity."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}
