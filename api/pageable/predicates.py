"""
Filter predicates.

A predicate is one condition over one column. `render()` produces the
readable SQL form with the raw value inlined; it is used to decide whether a
predicate is active (empty value -> empty render -> no filter) and for
logging. Binding with placeholders happens in `builder.QueryBuilder`.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field


@dataclass(frozen=True)
class Predicate:
    field: str = ""
    value: str = ""

    operator = ""

    def render(self) -> str:
        if not self.value:
            return ""
        return f"{self.field} {self.operator} {self.value}"


@dataclass(frozen=True)
class Equals(Predicate):
    operator = "="


@dataclass(frozen=True)
class Like(Predicate):
    """
    Substring match. The `%...%` wildcards are added when the value is bound.
    """

    operator = "LIKE"


@dataclass(frozen=True)
class GreaterThan(Predicate):
    operator = ">"


@dataclass(frozen=True)
class LessThan(Predicate):
    operator = "<"


@dataclass(frozen=True)
class GreaterOrEqual(Predicate):
    operator = ">="


@dataclass(frozen=True)
class LessOrEqual(Predicate):
    operator = "<="


@dataclass(frozen=True)
class NotEqual(Predicate):
    operator = "!="


@dataclass(frozen=True)
class AndGroup(Predicate):
    """
    Conjunction of child predicates over the same field: `anf(gt(1),lt(9))`.
    """

    operator = "AND"
    children: tuple[Predicate, ...] = dc_field(default_factory=tuple)

    def render(self) -> str:
        conditions = [sql for sql in (child.render() for child in self.children) if sql]
        if not conditions:
            return ""
        return "(" + " AND ".join(conditions) + ")"
