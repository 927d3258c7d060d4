"""Error response schemas.

All error responses use the same envelope: {"error": {"code": "...", "message": "..."}}.
Exception handlers in main.py construct these from domain exceptions.
"""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Machine-readable code (not_found, invalid_parameter, ...) and a message."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
