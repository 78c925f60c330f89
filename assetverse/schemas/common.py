"""Shared schema base: snake_case attributes, camelCase JSON."""

from dataclasses import asdict, is_dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request and response bodies (JSON field names are camelCase)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_entity(cls, entity: Any):
        """Build the response model from a domain entity (dataclass)."""
        data = asdict(entity) if is_dataclass(entity) else dict(entity)
        return cls.model_validate(data)


class SuccessResponse(CamelModel):
    success: bool = True
    message: str
