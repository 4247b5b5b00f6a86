from __future__ import annotations

from decimal import Decimal

import pytest

from backend.app.errors import ValidationError
from backend.app.models import UserRole
from backend.app.querying import (
    FilterField,
    FixedCondition,
    MAX_PAGE,
    PageRequest,
    PageResult,
    build_filtered_query,
    build_update_statement,
    fetch_page,
    render_order_by,
    substring_pattern,
)

FILTERS = (
    FilterField.equals("category_id"),
    FilterField.equals("status"),
    FilterField.equals("is_popular"),
    FilterField.substring("search", "title", "short_description"),
)


def test_no_filters_share_empty_predicate_between_fetch_and_count():
    query = build_filtered_query("blogs", FILTERS, {}, PageRequest(page=2, limit=5), "id DESC")

    assert query.count_sql == "SELECT COUNT(*) AS total FROM blogs"
    assert query.count_params == {}
    assert query.fetch_sql == "SELECT * FROM blogs ORDER BY id DESC LIMIT :p0 OFFSET :p1"
    assert query.fetch_params == {"p0": 5, "p1": 5}


def test_filters_are_applied_in_declaration_order_with_sequential_placeholders():
    query = build_filtered_query(
        "blogs",
        FILTERS,
        {"search": "Heart", "status": "published", "category_id": 3, "unknown": "x"},
        PageRequest(page=1, limit=10),
        "created_at DESC, id DESC",
    )

    where = (
        " WHERE category_id = :p0 AND status = :p1 AND "
        "(LOWER(title) LIKE :p2 ESCAPE '!' OR LOWER(short_description) LIKE :p3 ESCAPE '!')"
    )
    assert query.count_sql == f"SELECT COUNT(*) AS total FROM blogs{where}"
    assert query.fetch_sql == (
        f"SELECT * FROM blogs{where} ORDER BY created_at DESC, id DESC LIMIT :p4 OFFSET :p5"
    )
    assert query.count_params == {"p0": 3, "p1": "published", "p2": "%heart%", "p3": "%heart%"}
    assert query.fetch_params == {**query.count_params, "p4": 10, "p5": 0}


def test_false_and_zero_values_still_filter():
    query = build_filtered_query(
        "blogs",
        FILTERS,
        {"is_popular": False, "category_id": 0},
        PageRequest(),
        "id DESC",
    )

    assert "category_id = :p0 AND is_popular = :p1" in query.count_sql
    assert query.count_params == {"p0": 0, "p1": False}


def test_blank_search_is_ignored():
    query = build_filtered_query("blogs", FILTERS, {"search": "   "}, PageRequest(), "id DESC")

    assert "WHERE" not in query.count_sql


def test_fixed_conditions_are_bound_before_filters():
    query = build_filtered_query(
        "users",
        (FilterField.equals("status"),),
        {"status": "ACTIVE"},
        PageRequest(),
        "id DESC",
        columns=("id", "email"),
        conditions=(FixedCondition("(role = {} OR is_instructor = {})", (UserRole.INSTRUCTOR, True)),),
    )

    assert query.count_sql == (
        "SELECT COUNT(*) AS total FROM users WHERE (role = :p0 OR is_instructor = :p1) "
        "AND status = :p2"
    )
    assert query.fetch_sql.startswith("SELECT id, email FROM users WHERE")
    assert query.count_params == {"p0": UserRole.INSTRUCTOR, "p1": True, "p2": "ACTIVE"}


def test_enum_filter_values_are_bound_by_value():
    query = build_filtered_query(
        "users", (FilterField.equals("role"),), {"role": UserRole.ADMIN}, PageRequest(), "id"
    )

    assert query.count_params == {"p0": "ADMIN"}


def test_substring_pattern_escapes_like_wildcards():
    assert substring_pattern("50%_off!") == "%50!%!_off!!%"
    assert substring_pattern("  ") is None


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (None, None, (1, 10)),
        ("3", "25", (3, 25)),
        ("0", "-4", (1, 10)),
        ("abc", "1.5", (1, 10)),
        ("2", "500", (2, 100)),
    ],
)
def test_page_request_from_query_coerces_bad_values(page, limit, expected):
    request = PageRequest.from_query(page, limit, default_limit=10)

    assert (request.page, request.limit) == expected


def test_page_request_from_query_caps_huge_pages():
    request = PageRequest.from_query("99999999999999999999", "100")

    assert request.page == MAX_PAGE
    assert request.offset <= 2**63 - 1


def test_page_result_reports_ceiling_of_pages():
    assert PageResult(records=[], page=1, limit=10, total=0).pagination() == {
        "page": 1,
        "limit": 10,
        "total": 0,
        "pages": 0,
    }
    assert PageResult(records=[], page=9, limit=10, total=21).pages == 3


def test_update_statement_only_sets_allow_listed_fields():
    statement = build_update_statement(
        "courses",
        ("title", "price"),
        {"price": Decimal("19.90"), "id": 99, "title": "Anatomy"},
        key_value=7,
        touch_column="last_modified",
    )

    assert statement.sql == (
        "UPDATE courses SET title = :p0, price = :p1, last_modified = CURRENT_TIMESTAMP "
        "WHERE id = :p2"
    )
    assert statement.params == {"p0": "Anatomy", "p1": "19.90", "p2": 7}
    assert statement.fields == ("title", "price")


def test_update_statement_keeps_explicit_nulls_and_can_skip_timestamp():
    statement = build_update_statement(
        "contact_messages", ("phone_number",), {"phone_number": None}, key_value=1, touch_column=None
    )

    assert statement.sql == "UPDATE contact_messages SET phone_number = :p0 WHERE id = :p1"
    assert statement.params == {"p0": None, "p1": 1}


def test_update_statement_without_allowed_fields_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        build_update_statement("blogs", ("title",), {"id": 3, "created_at": "now"}, key_value=3)

    assert excinfo.value.message == "No valid fields to update"


def test_identifiers_are_validated():
    with pytest.raises(ValueError):
        FilterField.equals("status; DROP TABLE users")
    with pytest.raises(ValueError):
        render_order_by("id DESC; --")
    with pytest.raises(ValueError):
        build_filtered_query("blogs", (), {}, PageRequest(), "id", columns=("id, (SELECT 1)",))


def test_fetch_page_counts_the_full_filtered_set(database):
    for index, title in enumerate(("foo", "foobar", "baz"), start=1):
        database.execute(
            "INSERT INTO blogs (title, slug, category_id, author_id, content) "
            "VALUES (:p0, :p1, 1, 1, 'x')",
            {"p0": title, "p1": f"slug-{index}"},
        )

    query = build_filtered_query(
        "blogs", FILTERS, {"search": "foo"}, PageRequest(page=1, limit=1), "id ASC", columns=("title",)
    )
    result = fetch_page(database, query, lambda row: row["title"])

    assert result.records == ["foo"]
    assert result.pagination() == {"page": 1, "limit": 1, "total": 2, "pages": 2}


def test_fetch_page_past_the_end_keeps_the_total(database):
    database.execute(
        "INSERT INTO blogs (title, slug, category_id, author_id, content) "
        "VALUES ('only', 'only', 1, 1, 'x')"
    )

    query = build_filtered_query("blogs", FILTERS, {}, PageRequest(page=MAX_PAGE, limit=100), "id ASC")
    result = fetch_page(database, query, dict)

    assert result.records == []
    assert result.pagination() == {"page": MAX_PAGE, "limit": 100, "total": 1, "pages": 1}
