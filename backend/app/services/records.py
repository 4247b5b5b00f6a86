"""Single-row helpers shared by the resource services."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import Table
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import IntegrityError

from ..database import Database, insert_row, run_statement
from ..errors import ConflictError, NotFoundError
from ..querying import UpdateStatement, render_order_by, render_projection, require_identifier

LOGGER = logging.getLogger(__name__)


def _select_sql(table: str, columns: Sequence[str], key_column: str) -> str:
    projection = "*" if tuple(columns) == ("*",) else render_projection(columns)
    return (
        f"SELECT {projection} FROM {require_identifier(table)} "
        f"WHERE {require_identifier(key_column)} = :p0"
    )


def select_by_key(
    database: Database,
    table: str,
    key_value: Any,
    *,
    columns: Sequence[str] = ("*",),
    key_column: str = "id",
) -> Optional[RowMapping]:
    return database.fetch_one(_select_sql(table, columns, key_column), {"p0": key_value})


def require_by_key(
    database: Database,
    table: str,
    key_value: Any,
    *,
    not_found: str,
    columns: Sequence[str] = ("*",),
    key_column: str = "id",
) -> RowMapping:
    row = select_by_key(database, table, key_value, columns=columns, key_column=key_column)
    if row is None:
        raise NotFoundError(not_found)
    return row


def select_all(database: Database, table: str, order_by: str, columns: Sequence[str] = ("*",)):
    projection = "*" if tuple(columns) == ("*",) else render_projection(columns)
    return database.fetch_all(
        f"SELECT {projection} FROM {require_identifier(table)} ORDER BY {render_order_by(order_by)}"
    )


def insert_record(database: Database, table: Table, values: Mapping[str, Any], *, conflict: str) -> Any:
    """Insert ``values`` and return the new primary key; unique violations become a 409."""

    try:
        with database.transaction() as connection:
            return insert_row(connection, table, values)
    except IntegrityError as exc:
        LOGGER.info("Insert into %s rejected by a constraint: %s", table.name, exc.orig)
        raise ConflictError(conflict) from exc


def apply_update(
    database: Database,
    statement: UpdateStatement,
    *,
    not_found: str,
    conflict: str = "Update conflicts with an existing record",
) -> None:
    try:
        with database.transaction() as connection:
            result = run_statement(connection, statement.sql, statement.params)
            if result.rowcount == 0:
                raise NotFoundError(not_found)
    except IntegrityError as exc:
        LOGGER.info("Update rejected by a constraint: %s", exc.orig)
        raise ConflictError(conflict) from exc


def delete_by_key(
    database: Database,
    table: str,
    key_value: Any,
    *,
    not_found: str,
    key_column: str = "id",
) -> None:
    sql = f"DELETE FROM {require_identifier(table)} WHERE {require_identifier(key_column)} = :p0"
    if database.execute(sql, {"p0": key_value}) == 0:
        raise NotFoundError(not_found)


def count_by_status(database: Database, table: str, statuses: Sequence[str]) -> dict[str, int]:
    """Return ``{"total": n, <status>: n, ...}`` from one grouped query."""

    rows = database.fetch_all(
        f"SELECT status, COUNT(*) AS total FROM {require_identifier(table)} GROUP BY status"
    )
    counts = {status: 0 for status in statuses}
    total = 0
    for row in rows:
        total += int(row["total"])
        if row["status"] in counts:
            counts[row["status"]] = int(row["total"])
    return {"total": total, **counts}
