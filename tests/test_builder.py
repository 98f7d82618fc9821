from pageable import predicates
from pageable.builder import QueryBuilder, build_list_query
from pageable.parser import parse_query_params
from pageable.schemas import PageableRequest, SortBy

ALLOWED = {"name", "age", "email", "id", "status", "created", "date"}


def allowed(field: str) -> bool:
    return field in ALLOWED


def test_equals_filter():
    qb = QueryBuilder()
    qb.add_filter("name", predicates.Equals(field="name", value="John"), allowed)
    assert qb.build_where_clause() == " WHERE name = $1"
    assert qb.params == ["John"]


def test_like_filter_wraps_value_at_bind_time():
    qb = QueryBuilder()
    qb.add_filter("email", predicates.Like(field="email", value="test"), allowed)
    assert qb.build_where_clause() == " WHERE email LIKE $1"
    assert qb.params == ["%test%"]


def test_each_comparison_operator():
    qb = QueryBuilder()
    qb.add_filter("age", predicates.GreaterThan(field="age", value="1"), allowed)
    qb.add_filter("age", predicates.LessThan(field="age", value="2"), allowed)
    qb.add_filter("age", predicates.GreaterOrEqual(field="age", value="3"), allowed)
    qb.add_filter("age", predicates.LessOrEqual(field="age", value="4"), allowed)
    qb.add_filter("status", predicates.NotEqual(field="status", value="5"), allowed)
    assert qb.where_conditions == ["age > $1", "age < $2", "age >= $3", "age <= $4", "status != $5"]
    assert qb.params == ["1", "2", "3", "4", "5"]


def test_and_group_is_one_fragment_with_one_placeholder_per_child():
    group = predicates.AndGroup(
        field="age",
        children=(
            predicates.GreaterThan(value="18"),
            predicates.LessThan(value="65"),
        ),
    )
    qb = QueryBuilder()
    qb.add_filter("name", predicates.Equals(field="name", value="x"), allowed)
    qb.add_filter("age", group, allowed)
    assert qb.where_conditions == ["name = $1", "(age > $2 AND age < $3)"]
    assert qb.params == ["x", "18", "65"]


def test_and_group_skips_empty_and_nested_children():
    group = predicates.AndGroup(
        field="age",
        children=(
            predicates.GreaterThan(field="age", value=""),
            predicates.AndGroup(field="age", children=(predicates.Equals(field="age", value="1"),)),
            predicates.Like(field="age", value="4"),
        ),
    )
    qb = QueryBuilder()
    qb.add_filter("age", group, allowed)
    assert qb.where_conditions == ["(age LIKE $1)"]
    assert qb.params == ["%4%"]


def test_disallowed_field_is_dropped():
    qb = QueryBuilder()
    qb.add_filter("secret", predicates.Equals(field="secret", value="x"), allowed)
    assert qb.where_conditions == []
    assert qb.params == []
    assert qb.build_where_clause() == ""


def test_empty_predicate_is_dropped():
    qb = QueryBuilder()
    qb.add_filter("name", predicates.Equals(field="name", value=""), allowed)
    qb.add_filter("age", predicates.AndGroup(field="age"), allowed)
    assert qb.where_conditions == []
    assert qb.params == []


def test_sort_keeps_allowed_fields_in_order():
    qb = QueryBuilder()
    qb.add_sort(
        [
            SortBy(field="name", order="ASC"),
            SortBy(field="password; DROP TABLE tag", order="DESC"),
            SortBy(field="id", order="DESC"),
        ],
        allowed,
    )
    assert qb.order_by_clause == " ORDER BY name ASC, id DESC"


def test_sort_without_allowed_fields_emits_nothing():
    qb = QueryBuilder()
    qb.add_sort([SortBy(field="secret", order="ASC")], allowed)
    assert qb.order_by_clause == ""


def test_pagination_with_offset():
    qb = QueryBuilder()
    qb.add_pagination(page=2, size=20)
    assert qb.limit_clause == " LIMIT $1"
    assert qb.offset_clause == " OFFSET $2"
    assert qb.params == [20, 20]
    assert qb.count_params == []


def test_first_page_has_no_offset():
    qb = QueryBuilder()
    qb.add_pagination(page=1, size=10)
    assert qb.limit_clause == " LIMIT $1"
    assert qb.offset_clause == ""
    assert qb.params == [10]


def test_non_positive_size_adds_no_pagination():
    qb = QueryBuilder()
    qb.add_pagination(page=3, size=0)
    assert qb.limit_clause == ""
    assert qb.offset_clause == ""
    assert qb.params == []


def test_select_and_count_queries():
    qb = QueryBuilder()
    qb.add_filter("name", predicates.Like(field="name", value="go"), allowed)
    qb.add_sort([SortBy(field="id", order="DESC")], allowed)
    qb.add_pagination(page=3, size=5)

    base = "SELECT id, name FROM tag"
    assert qb.build_select_query(base) == (
        "SELECT id, name FROM tag WHERE name LIKE $1 ORDER BY id DESC LIMIT $2 OFFSET $3"
    )
    assert qb.build_count_query(base) == "SELECT COUNT(*) FROM (SELECT id, name FROM tag WHERE name LIKE $1) as subquery"
    assert qb.params == ["%go%", 5, 10]
    assert qb.count_params == ["%go%"]


def test_select_query_without_clauses_is_base():
    qb = QueryBuilder()
    assert qb.build_select_query("SELECT 1") == "SELECT 1"
    assert qb.build_count_query("SELECT 1") == "SELECT COUNT(*) FROM (SELECT 1) as subquery"


def test_build_list_query_end_to_end():
    req = parse_query_params(
        {
            "date": ["anf(gt(2025-10-10),lt(2025-10-20))"],
            "name": ["vasya"],
            "secret": ["x"],
            "status": [""],
            "sort": ["date,desc", "secret,asc"],
            "page": ["2"],
            "size": ["20"],
        }
    )
    plan = build_list_query(req, "SELECT * FROM t", allowed)

    assert plan.select_sql == (
        "SELECT * FROM t WHERE (date > $1 AND date < $2) AND name = $3 ORDER BY date DESC LIMIT $4 OFFSET $5"
    )
    assert plan.count_sql == "SELECT COUNT(*) FROM (SELECT * FROM t WHERE (date > $1 AND date < $2) AND name = $3) as subquery"
    assert plan.select_params == ["2025-10-10", "2025-10-20", "vasya", 20, 20]
    assert plan.count_params == ["2025-10-10", "2025-10-20", "vasya"]


def test_count_params_are_prefix_of_select_params():
    for page, size in ((1, 10), (2, 10), (5, 0)):
        req = PageableRequest(
            page=page,
            size=size,
            filter={"name": predicates.Equals(field="name", value="x")},
        )
        plan = build_list_query(req, "SELECT * FROM t", allowed)
        expected_len = len(plan.select_params) - (1 if size > 0 else 0) - (1 if size > 0 and page > 1 else 0)
        assert plan.count_params == plan.select_params[:expected_len]
        assert "LIMIT" not in plan.count_sql
        assert "OFFSET" not in plan.count_sql


def test_converter_applies_to_non_like_values():
    seen = []

    def convert(field, raw):
        seen.append((field, raw))
        return int(raw)

    req = PageableRequest(
        filter={
            "id": predicates.AndGroup(
                field="id",
                children=(predicates.GreaterOrEqual(field="id", value="3"), predicates.Like(field="id", value="7")),
            ),
            "age": predicates.Equals(field="age", value="42"),
        },
    )
    plan = build_list_query(req, "SELECT * FROM t", allowed, convert=convert)
    assert plan.select_params == [3, "%7%", 42, 10]
    assert seen == [("id", "3"), ("age", "42")]
