"""Domain exceptions raised by repositories and services, caught by routers.

Exception handlers in main.py translate them into the standard
error envelope: {"error": {"code": "...", "message": "..."}}.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError


class DomainError(Exception):
    """Base class for all domain exceptions."""

    code = "domain_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidParameterError(DomainError):
    """Raised when a query request is malformed (bad page, operator, field or value)."""

    code = "invalid_parameter"

    def __init__(self, parameter: str, reason: str) -> None:
        self.parameter = parameter
        self.reason = reason
        super().__init__(f"Invalid parameter '{parameter}': {reason}")


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    code = "not_found"

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier} not found")


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state (duplicate key, dependent rows)."""

    code = "conflict"


class UnauthorizedError(DomainError):
    """Raised when a request carries no usable session profile."""

    code = "unauthorized"


class BackendError(DomainError):
    """The record store reported a failure. Wraps the original exception."""

    code = "backend_error"

    def __init__(self, original: Exception) -> None:
        self.original = original
        super().__init__(f"Record store failure: {type(original).__name__}")


@contextmanager
def backend_errors() -> Iterator[None]:
    """Re-raise any SQLAlchemy failure inside the block as BackendError.

    Constraint violations become ConflictError instead.
    """
    try:
        yield
    except IntegrityError as exc:
        raise ConflictError("Record conflicts with an existing record") from exc
    except SQLAlchemyError as exc:
        raise BackendError(exc) from exc
