"""
Schemas shared by the resource packages.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    JSON uses camelCase keys (`hexColor`, `logoUrl`); Python uses snake_case.
    Both spellings are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeleteRequest(BaseModel):
    ids: list[int] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    deleted_ids: list[int]
    count: int
