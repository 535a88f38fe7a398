# backend/sitefactory/schemas/project.py
from pydantic import BaseModel, StrictStr, field_validator

from .base import BaseSchema, TimestampMixin


def clean_name(value: str) -> str:
    """Trim a project name, rejecting names that are blank once trimmed"""
    trimmed = value.strip()
    if not trimmed:
        raise ValueError("name must not be empty")
    return trimmed


class ProjectCreate(BaseModel):
    name: StrictStr

    @field_validator("name")
    @classmethod
    def trim_name(cls, value: str) -> str:
        return clean_name(value)


class Project(BaseSchema, TimestampMixin):
    id: int
    name: str
