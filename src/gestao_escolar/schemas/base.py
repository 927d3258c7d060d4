"""Base classes for request and response models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from gestao_escolar.exceptions import InvalidParameterError


class InputModel(BaseModel):
    """Create/update payload. Blank strings from form fields become None."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def changes(self, *required: str) -> dict[str, Any]:
        """Fields the client actually sent. Fields named in ``required`` may not be cleared."""
        values = self.model_dump(exclude_unset=True)
        for name in required:
            if name in values and values[name] is None:
                raise InvalidParameterError(name, "cannot be empty")
        return values


class OutputModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)
