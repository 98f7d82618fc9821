"""
Pageable list requests: filter/sort/pagination parsed from the query string
and lowered into parameterized SQL.

- `predicates`: the filter predicate variants
- `parser`: query string -> `PageableRequest`
- `builder`: `PageableRequest` + base SELECT -> `QueryPlan`
- `schemas`: request/response containers
"""
