"""
Query string -> PageableRequest.

Wire format:

    ?page=2&size=20&sort=name,ASC&sort=id,DESC&<field>=<op>(<value>)

A bare value is an equality filter: `?name=vasya` is `?name=eq(vasya)`.
`anf(...)` combines comparisons on one field with AND:
`?date=anf(gt(2025-10-10),lt(2025-10-20))`.

Malformed input never raises: bad page/size fall back to defaults, bad sort
entries are dropped, unknown operators degrade to equality over the raw text.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from . import predicates
from .schemas import DEFAULT_PAGE, DEFAULT_SIZE, MAX_INT64, PageableRequest, SortBy

RESERVED_KEYS = frozenset({"page", "size", "sort"})

COMPARISON_OPERATORS: dict[str, type[predicates.Predicate]] = {
    "eq": predicates.Equals,
    "like": predicates.Like,
    "gt": predicates.GreaterThan,
    "lt": predicates.LessThan,
    "gte": predicates.GreaterOrEqual,
    "lte": predicates.LessOrEqual,
    "ne": predicates.NotEqual,
}

AND_OPERATOR = "anf"

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _values(raw_params: Any, key: str) -> list[str]:
    # Starlette QueryParams / MultiDict expose getlist(); plain dicts hold lists.
    getlist = getattr(raw_params, "getlist", None)
    if callable(getlist):
        return [str(v) for v in getlist(key)]
    value = raw_params.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(v) for v in value]
    return [str(value)]


def _positive_int(values: list[str], default: int) -> int:
    if not values:
        return default
    raw = values[0].strip()
    # Plain decimal only: int() would also take "1_0" and non-ASCII digits.
    if not _INTEGER.fullmatch(raw):
        return default
    parsed = int(raw)
    return parsed if 0 < parsed <= MAX_INT64 else default


def _parse_sort(values: list[str]) -> list[SortBy]:
    sorts: list[SortBy] = []
    for raw in values:
        parts = raw.split(",")
        if len(parts) != 2:
            continue
        column = parts[0].strip()
        order = parts[1].strip().upper()
        if order in ("ASC", "DESC"):
            sorts.append(SortBy(field=column, order=order))
    return sorts


def _extract_operator(raw: str) -> tuple[str, str]:
    """
    Split `op(inner)` into ("op", "inner"). The last character is assumed to
    be the closing parenthesis.
    """
    open_paren = raw.find("(")
    if open_paren == -1:
        return "", raw
    return raw[:open_paren].strip(), raw[open_paren + 1 : -1]


def _split_top_level(raw: str) -> list[str]:
    """
    Split on commas that are not nested inside parentheses.
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in raw:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    if current:
        parts.append("".join(current))
    return parts


def _parse_and_group(field: str, inner: str) -> predicates.AndGroup:
    children: list[predicates.Predicate] = []
    for part in _split_top_level(inner):
        part = part.strip()
        if not part:
            continue
        operator, value = _extract_operator(part)
        predicate_cls = COMPARISON_OPERATORS.get(operator)
        if predicate_cls is None:
            continue
        children.append(predicate_cls(field=field, value=value))
    return predicates.AndGroup(field=field, children=tuple(children))


def parse_predicate(field: str, raw: str) -> predicates.Predicate:
    if not raw:
        return predicates.Equals(field=field, value="")

    if "(" not in raw or not raw.endswith(")"):
        return predicates.Equals(field=field, value=raw)

    operator, inner = _extract_operator(raw)
    if operator == AND_OPERATOR:
        return _parse_and_group(field, inner)

    predicate_cls = COMPARISON_OPERATORS.get(operator)
    if predicate_cls is None:
        # Unknown operator: keep the untouched text as an equality value.
        return predicates.Equals(field=field, value=raw)
    return predicate_cls(field=field, value=inner)


def parse_query_params(raw_params: Mapping[str, Any]) -> PageableRequest:
    page = _positive_int(_values(raw_params, "page"), DEFAULT_PAGE)
    size = _positive_int(_values(raw_params, "size"), DEFAULT_SIZE)
    if (page - 1) * size > MAX_INT64:
        # OFFSET would not fit in a bigint.
        page = DEFAULT_PAGE
    request = PageableRequest(
        page=page,
        size=size,
        sort=_parse_sort(_values(raw_params, "sort")),
    )

    for key in raw_params.keys():
        if key in RESERVED_KEYS or key in request.filter:
            continue
        values = _values(raw_params, key)
        if values:
            # Only the first value of a repeated key is used.
            request.filter[key] = parse_predicate(key, values[0])

    return request
