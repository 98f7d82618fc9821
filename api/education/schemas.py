"""
Education API schemas.
"""

from __future__ import annotations

from pydantic import Field

from core.schemas import CamelModel


class EducationCreate(CamelModel):
    name: str | None = Field(default=None, max_length=200)
    year: int | None = Field(default=None, ge=1900, le=2200)
    course: str = Field(default="", max_length=300)
    organization: str = Field(default="", max_length=300)


class EducationUpdate(EducationCreate):
    id: int


class Education(CamelModel):
    id: int
    name: str | None = None
    year: int | None = None
    course: str
    organization: str
