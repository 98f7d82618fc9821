"""
Pageable request/response containers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

from .predicates import Predicate

DEFAULT_PAGE = 1
DEFAULT_SIZE = 10

# LIMIT and OFFSET are bound as Postgres bigint.
MAX_INT64 = 2**63 - 1

T = TypeVar("T")


class SortBy(BaseModel):
    field: str
    order: Literal["ASC", "DESC"]


@dataclass
class PageableRequest:
    page: int = DEFAULT_PAGE
    size: int = DEFAULT_SIZE
    sort: list[SortBy] = field(default_factory=list)
    # One predicate per column; keys are independent of each other.
    filter: dict[str, Predicate] = field(default_factory=dict)


class PageableResponse(BaseModel, Generic[T]):
    total: int
    content: list[T]
    page: int
    size: int
    sort: list[SortBy] = []
