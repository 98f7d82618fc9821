"""
Tag API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import Field

from core.schemas import CamelModel


class TagCreate(CamelModel):
    name: str = Field(default="", max_length=200)
    hex_color: str = Field(default="", max_length=32)


class TagUpdate(TagCreate):
    id: int


class Tag(CamelModel):
    id: int
    name: str
    hex_color: str
