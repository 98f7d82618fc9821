"""
Work history API schemas.

`whatIDid` and `projects` are free-form bullet lists stored as text[].
"""

from __future__ import annotations

from datetime import date

from pydantic import Field

from core.schemas import CamelModel


class WorkHistoryCreate(CamelModel):
    name: str = Field(default="", max_length=300)
    about: str = ""
    logo_url: str | None = Field(default=None, max_length=2048)
    period_start: date | None = None
    period_end: date | None = None
    what_i_did: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)


class WorkHistoryUpdate(WorkHistoryCreate):
    id: int


class WorkHistory(CamelModel):
    id: int
    name: str
    about: str
    logo_url: str | None = None
    period_start: date | None = None
    period_end: date | None = None
    what_i_did: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)
