"""
Technology API schemas.
"""

from __future__ import annotations

from pydantic import Field

from core.schemas import CamelModel


class TechnologyCreate(CamelModel):
    title: str = Field(default="", max_length=200)
    description: str | None = None
    logo_url: str | None = Field(default=None, max_length=2048)


class TechnologyUpdate(TechnologyCreate):
    id: int


class Technology(CamelModel):
    id: int
    title: str
    description: str | None = None
    logo_url: str | None = None
