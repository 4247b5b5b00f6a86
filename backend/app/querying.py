"""Allow-list driven SQL construction for listing and partial-update endpoints.

Every listing endpoint describes its optional filters as a fixed tuple of
:class:`FilterField` entries. :func:`build_filtered_query` walks that tuple in
order and produces two statements, one returning a page of rows and one
counting the full result set, that share the exact same predicate text and
filter parameters. Client supplied values are only ever bound as parameters;
identifiers come exclusively from the allow-lists declared in code.

:func:`build_update_statement` is the write-side counterpart used by the
``PUT`` endpoints: only allow-listed fields present in the payload make it
into the ``SET`` clause.
"""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from .database import Database, run_statement
from .errors import ValidationError

T = TypeVar("T")

DEFAULT_PAGE = 1
MAX_LIMIT = 100
# keeps (page - 1) * MAX_LIMIT within a signed 64-bit OFFSET
MAX_PAGE = (2**63 - 1) // MAX_LIMIT + 1
LIKE_ESCAPE = "!"

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_PROJECTION_TERM = re.compile(
    r"^[A-Za-z_][A-Za-z0-9_]*(\s+AS\s+[A-Za-z_][A-Za-z0-9_]*)?$", re.IGNORECASE
)
_ORDER_TERM = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\s+(ASC|DESC))?$", re.IGNORECASE)


def require_identifier(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def render_projection(columns: Sequence[str]) -> str:
    """Join a fixed projection (``column`` or ``column AS alias`` terms) into a select list."""

    if not columns:
        raise ValueError("A projection needs at least one column")
    for term in columns:
        if not _PROJECTION_TERM.match(term.strip()):
            raise ValueError(f"Invalid projection term: {term!r}")
    return ", ".join(term.strip() for term in columns)


def render_order_by(order_by: str) -> str:
    terms = [term.strip() for term in order_by.split(",")]
    for term in terms:
        if not _ORDER_TERM.match(term):
            raise ValueError(f"Invalid ORDER BY term: {term!r}")
    return ", ".join(terms)


class PredicateKind(str, enum.Enum):
    """Comparison applied by a filter."""

    EQUALS = "equals"
    SUBSTRING_MATCH = "substring_match"


@dataclass(frozen=True)
class FilterField:
    """One allow-listed filter: the query parameter name and the column(s) it targets."""

    name: str
    kind: PredicateKind
    columns: Tuple[str, ...]

    def __post_init__(self) -> None:
        require_identifier(self.name)
        for column in self.columns:
            require_identifier(column)
        if self.kind is PredicateKind.EQUALS and len(self.columns) != 1:
            raise ValueError(f"Equality filter {self.name!r} must target exactly one column")
        if self.kind is PredicateKind.SUBSTRING_MATCH and not self.columns:
            raise ValueError(f"Substring filter {self.name!r} needs at least one column")

    @classmethod
    def equals(cls, name: str, column: Optional[str] = None) -> "FilterField":
        return cls(name, PredicateKind.EQUALS, (column or name,))

    @classmethod
    def substring(cls, name: str, *columns: str) -> "FilterField":
        return cls(name, PredicateKind.SUBSTRING_MATCH, tuple(columns))


@dataclass(frozen=True)
class FixedCondition:
    """A predicate that always applies, e.g. the instructor view of the users table.

    ``template`` uses ``{}`` placeholders, one per entry of ``values``.
    """

    template: str
    values: Tuple[Any, ...] = ()


class _Parameters:
    """Ordered bound parameters named by position (``p0``, ``p1``, ...)."""

    def __init__(self) -> None:
        self.values: List[Any] = []

    def bind(self, value: Any) -> str:
        name = f"p{len(self.values)}"
        self.values.append(value)
        return f":{name}"

    def as_dict(self) -> Dict[str, Any]:
        return {f"p{index}": value for index, value in enumerate(self.values)}


def sql_value(value: Any) -> Any:
    """Unwrap enum members and stringify decimals before binding."""

    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    return value


def substring_pattern(value: Any) -> Optional[str]:
    """Return a lower-cased ``%value%`` pattern with LIKE wildcards escaped, or ``None`` if blank."""

    normalized = str(value).strip().lower()
    if not normalized:
        return None
    escaped = (
        normalized.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


def _coerce_positive(raw: Any, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = 10

    def __post_init__(self) -> None:
        if self.page < 1 or self.limit < 1:
            raise ValueError("page and limit must be positive")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls,
        page: Any = None,
        limit: Any = None,
        *,
        default_limit: int = 10,
        max_limit: int = MAX_LIMIT,
    ) -> "PageRequest":
        """Coerce raw query-string values.

        Anything non-numeric or below 1 falls back to the default; ``limit`` is
        capped at ``max_limit`` and ``page`` at :data:`MAX_PAGE`.
        """

        return cls(
            page=min(_coerce_positive(page, DEFAULT_PAGE), MAX_PAGE),
            limit=min(_coerce_positive(limit, default_limit), max_limit),
        )


@dataclass
class PageResult(Generic[T]):
    records: List[T]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit)

    def pagination(self) -> Dict[str, int]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "pages": self.pages,
        }


@dataclass(frozen=True)
class FilteredQuery:
    """The paired fetch and count statements for one listing request."""

    fetch_sql: str
    fetch_params: Dict[str, Any]
    count_sql: str
    count_params: Dict[str, Any]
    page_request: PageRequest


def build_filtered_query(
    table: str,
    filters: Iterable[FilterField],
    inputs: Mapping[str, Any],
    page_request: PageRequest,
    order_by: str,
    columns: Sequence[str] = ("*",),
    conditions: Sequence[FixedCondition] = (),
) -> FilteredQuery:
    """Build the fetch and count statements for ``inputs`` filtered through the ``filters`` allow-list.

    An input counts as supplied when its value is not ``None``; ``False`` and
    ``0`` still produce a predicate. Keys of ``inputs`` that are not in the
    allow-list are ignored.
    """

    table = require_identifier(table)
    projection = "*" if tuple(columns) == ("*",) else render_projection(columns)
    ordering = render_order_by(order_by)

    params = _Parameters()
    predicates: List[str] = []

    for condition in conditions:
        placeholders = [params.bind(value) for value in condition.values]
        predicates.append(condition.template.format(*placeholders))

    for filter_field in filters:
        value = inputs.get(filter_field.name)
        if value is None:
            continue
        if filter_field.kind is PredicateKind.EQUALS:
            predicates.append(f"{filter_field.columns[0]} = {params.bind(sql_value(value))}")
        else:
            pattern = substring_pattern(value)
            if pattern is None:
                continue
            alternatives = [
                f"LOWER({column}) LIKE {params.bind(pattern)} ESCAPE '{LIKE_ESCAPE}'"
                for column in filter_field.columns
            ]
            predicates.append("(" + " OR ".join(alternatives) + ")")

    where = f" WHERE {' AND '.join(predicates)}" if predicates else ""
    count_params = params.as_dict()

    count_sql = f"SELECT COUNT(*) AS total FROM {table}{where}"
    limit_placeholder = params.bind(page_request.limit)
    offset_placeholder = params.bind(page_request.offset)
    fetch_sql = (
        f"SELECT {projection} FROM {table}{where} ORDER BY {ordering} "
        f"LIMIT {limit_placeholder} OFFSET {offset_placeholder}"
    )

    return FilteredQuery(
        fetch_sql=fetch_sql,
        fetch_params=params.as_dict(),
        count_sql=count_sql,
        count_params=count_params,
        page_request=page_request,
    )


def fetch_page(
    database: Database,
    query: FilteredQuery,
    mapper: Callable[[Mapping[str, Any]], T],
) -> PageResult[T]:
    """Count, then fetch and map the page on one pooled connection.

    A page that starts at or past ``total`` skips the fetch statement.
    """

    with database.connect() as connection:
        total = int(run_statement(connection, query.count_sql, query.count_params).scalar() or 0)
        rows = []
        if query.page_request.offset < total:
            rows = run_statement(connection, query.fetch_sql, query.fetch_params).mappings().all()

    return PageResult(
        records=[mapper(row) for row in rows],
        page=query.page_request.page,
        limit=query.page_request.limit,
        total=total,
    )


@dataclass(frozen=True)
class UpdateStatement:
    sql: str
    params: Dict[str, Any]
    fields: Tuple[str, ...]


def build_update_statement(
    table: str,
    allowed_fields: Sequence[str],
    updates: Mapping[str, Any],
    *,
    key_value: Any,
    key_column: str = "id",
    touch_column: Optional[str] = "updated_at",
) -> UpdateStatement:
    """Build ``UPDATE table SET ... WHERE key = ?`` from the allow-listed keys present in ``updates``.

    Raises :class:`ValidationError` when no allow-listed field is present so
    that no empty statement is ever issued.
    """

    table = require_identifier(table)
    key_column = require_identifier(key_column)

    params = _Parameters()
    assignments: List[str] = []
    fields: List[str] = []
    for name in allowed_fields:
        if name not in updates:
            continue
        assignments.append(f"{require_identifier(name)} = {params.bind(sql_value(updates[name]))}")
        fields.append(name)

    if not assignments:
        raise ValidationError("No valid fields to update")

    if touch_column:
        assignments.append(f"{require_identifier(touch_column)} = CURRENT_TIMESTAMP")

    sql = f"UPDATE {table} SET {', '.join(assignments)} WHERE {key_column} = {params.bind(key_value)}"
    return UpdateStatement(sql=sql, params=params.as_dict(), fields=tuple(fields))
