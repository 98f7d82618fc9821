"""
PageableRequest -> parameterized SQL.

SQL parameter style matches asyncpg: positional placeholders $1, $2, $3, ...

Column names never come from user text directly: every filter and sort
field must pass the caller's allow-list (`is_field_allowed`), otherwise the
entry is dropped. Values are always bound, never inlined.

Example for base "SELECT id, name FROM tag" and
`?name=like(go)&id=anf(gt(1),lt(9))&sort=id,DESC&page=2&size=5`:

    SELECT id, name FROM tag WHERE name LIKE $1 AND (id > $2 AND id < $3)
        ORDER BY id DESC LIMIT $4 OFFSET $5
    params: ["%go%", "1", "9", 5, 5]

    SELECT COUNT(*) FROM (SELECT id, name FROM tag WHERE name LIKE $1
        AND (id > $2 AND id < $3)) as subquery
    params: ["%go%", "1", "9"]
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from . import predicates
from .schemas import PageableRequest, SortBy

FieldValidator = Callable[[str], bool]
ValueConverter = Callable[[str, str], Any]


@dataclass(frozen=True)
class QueryPlan:
    select_sql: str
    count_sql: str
    select_params: list[Any]
    count_params: list[Any]


class QueryBuilder:
    def __init__(self, convert: ValueConverter | None = None) -> None:
        self.where_conditions: list[str] = []
        self.order_by_clause = ""
        self.limit_clause = ""
        self.offset_clause = ""
        self._params: list[Any] = []
        self._param_counter = 1
        self._convert = convert

    def _bind(self, value: Any) -> str:
        placeholder = f"${self._param_counter}"
        self._params.append(value)
        self._param_counter += 1
        return placeholder

    def _condition(self, column: str, predicate: predicates.Predicate) -> str:
        if isinstance(predicate, predicates.Like):
            bound: Any = f"%{predicate.value}%"
        elif self._convert is not None:
            bound = self._convert(column, predicate.value)
        else:
            bound = predicate.value
        return f"{column} {predicate.operator} {self._bind(bound)}"

    def add_filter(
        self,
        column: str,
        predicate: predicates.Predicate,
        is_field_allowed: FieldValidator,
    ) -> None:
        if not is_field_allowed(column):
            return
        if not predicate.render():
            return

        if isinstance(predicate, predicates.AndGroup):
            conditions = [
                self._condition(column, child)
                for child in predicate.children
                if not isinstance(child, predicates.AndGroup) and child.render()
            ]
            if conditions:
                self.where_conditions.append("(" + " AND ".join(conditions) + ")")
            return

        self.where_conditions.append(self._condition(column, predicate))

    def add_sort(self, sorts: Iterable[SortBy], is_field_allowed: FieldValidator) -> None:
        order_by = [f"{s.field} {s.order}" for s in sorts if is_field_allowed(s.field)]
        if order_by:
            self.order_by_clause = " ORDER BY " + ", ".join(order_by)

    def add_pagination(self, page: int, size: int) -> None:
        if size <= 0:
            return
        self.limit_clause = f" LIMIT {self._bind(size)}"
        if page > 1:
            self.offset_clause = f" OFFSET {self._bind((page - 1) * size)}"

    def build_where_clause(self) -> str:
        if not self.where_conditions:
            return ""
        return " WHERE " + " AND ".join(self.where_conditions)

    def build_select_query(self, base_query: str) -> str:
        return (
            base_query
            + self.build_where_clause()
            + self.order_by_clause
            + self.limit_clause
            + self.offset_clause
        )

    def build_count_query(self, base_query: str) -> str:
        # Sorting and pagination do not change the total.
        return "SELECT COUNT(*) FROM (" + base_query + self.build_where_clause() + ") as subquery"

    @property
    def params(self) -> list[Any]:
        return list(self._params)

    @property
    def count_params(self) -> list[Any]:
        count = len(self._params)
        if self.limit_clause:
            count -= 1
        if self.offset_clause:
            count -= 1
        return self._params[:count]


def build_list_query(
    request: PageableRequest,
    base_query: str,
    is_field_allowed: FieldValidator,
    convert: ValueConverter | None = None,
) -> QueryPlan:
    qb = QueryBuilder(convert=convert)

    for column, predicate in request.filter.items():
        qb.add_filter(column, predicate, is_field_allowed)

    qb.add_sort(request.sort, is_field_allowed)
    qb.add_pagination(request.page, request.size)

    return QueryPlan(
        select_sql=qb.build_select_query(base_query),
        count_sql=qb.build_count_query(base_query),
        select_params=qb.params,
        count_params=qb.count_params,
    )
