"""Database configuration for the FastAPI backend."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence

from fastapi import Request
from sqlalchemy import Table, create_engine, insert, text
from sqlalchemy.engine import Connection, CursorResult, Engine, RowMapping, make_url
from sqlalchemy.orm import declarative_base

LOGGER = logging.getLogger(__name__)

_DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "biomed.db"
_DEFAULT_DATABASE_URL = f"sqlite:///{_DEFAULT_DB_PATH.as_posix()}"
REQUIRE_POSTGRES_ENV = "REQUIRE_POSTGRES"
POOL_SIZE_ENV = "DATABASE_POOL_SIZE"
POOL_MAX_OVERFLOW_ENV = "DATABASE_MAX_OVERFLOW"
POOL_TIMEOUT_ENV = "DATABASE_POOL_TIMEOUT"
POOL_RECYCLE_ENV = "DATABASE_POOL_RECYCLE"
CONNECT_TIMEOUT_ENV = "DATABASE_CONNECT_TIMEOUT"

DEFAULT_POOL_SIZE = 10
DEFAULT_MAX_OVERFLOW = 10
DEFAULT_POOL_TIMEOUT = 30
DEFAULT_POOL_RECYCLE = 1800
DEFAULT_CONNECT_TIMEOUT = 10

Base = declarative_base()


def _ensure_directory(path: str | os.PathLike[str]) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def read_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return value


def read_bool_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_database_url(raw_url: str | None) -> str:
    if not raw_url:
        if read_bool_env(REQUIRE_POSTGRES_ENV, False):
            raise RuntimeError(
                "DATABASE_URL must be configured for PostgreSQL when REQUIRE_POSTGRES=1"
            )
        _ensure_directory(_DEFAULT_DB_PATH)
        return _DEFAULT_DATABASE_URL

    url = make_url(raw_url)
    if url.drivername.startswith("sqlite") and url.database not in (None, "", ":memory:"):
        _ensure_directory(url.database)
    if read_bool_env(REQUIRE_POSTGRES_ENV, False) and url.drivername.startswith("sqlite"):
        raise RuntimeError(
            "SQLite is not permitted when REQUIRE_POSTGRES=1; configure DATABASE_URL"
        )
    return url.render_as_string(hide_password=False)


def build_engine_kwargs(database_url: str) -> Dict[str, Any]:
    """Return pool settings suited to the configured database."""

    engine_kwargs: Dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        return engine_kwargs

    engine_kwargs.update(
        {
            "pool_pre_ping": True,
            "pool_size": read_int_env(POOL_SIZE_ENV, DEFAULT_POOL_SIZE),
            "max_overflow": read_int_env(POOL_MAX_OVERFLOW_ENV, DEFAULT_MAX_OVERFLOW),
            "pool_timeout": read_int_env(POOL_TIMEOUT_ENV, DEFAULT_POOL_TIMEOUT),
            "pool_recycle": read_int_env(POOL_RECYCLE_ENV, DEFAULT_POOL_RECYCLE),
            "connect_args": {
                "connect_timeout": read_int_env(CONNECT_TIMEOUT_ENV, DEFAULT_CONNECT_TIMEOUT)
            },
        }
    )
    return engine_kwargs


class Database:
    """Owns the engine and its connection pool for the lifetime of the process.

    Connections are only handed out through :meth:`connect` and
    :meth:`transaction`, both of which return the connection to the pool on
    every exit path, including exceptions raised by the caller.
    """

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        self.url = url
        self.engine: Engine = create_engine(url, **engine_kwargs)

    @classmethod
    def from_env(cls) -> "Database":
        url = resolve_database_url(os.getenv("DATABASE_URL"))
        return cls(url, **build_engine_kwargs(url))

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """Yield a pooled connection for read-only work."""
        with self.engine.connect() as connection:
            yield connection

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield a pooled connection inside a transaction committed on success."""
        with self.engine.begin() as connection:
            yield connection

    def fetch_all(
        self, sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> Sequence[RowMapping]:
        with self.connect() as connection:
            return run_statement(connection, sql, params).mappings().all()

    def fetch_one(
        self, sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[RowMapping]:
        with self.connect() as connection:
            return run_statement(connection, sql, params).mappings().first()

    def fetch_scalar(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        with self.connect() as connection:
            return run_statement(connection, sql, params).scalar()

    def execute(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> int:
        """Run a write statement in its own transaction and return the affected row count."""
        with self.transaction() as connection:
            return run_statement(connection, sql, params).rowcount

    def ping(self) -> bool:
        try:
            self.fetch_scalar("SELECT 1")
        except Exception:
            LOGGER.exception("Database ping failed")
            return False
        return True

    def create_schema(self) -> None:
        """Create every table known to the declarative metadata."""

        from . import models  # noqa: F401  registers the tables on Base.metadata

        Base.metadata.create_all(bind=self.engine)

    def drop_schema(self) -> None:
        from . import models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        LOGGER.info("Closing database connection pool")
        self.engine.dispose()


def run_statement(
    connection: Connection, sql: str, params: Optional[Mapping[str, Any]] = None
) -> CursorResult:
    """Execute ``sql`` with bound ``params`` and log both at DEBUG."""

    bound = dict(params or {})
    LOGGER.debug("Query: %s | Params: %s", sql, bound)
    return connection.execute(text(sql), bound)


def get_database(request: Request) -> Database:
    """Dependency returning the database handle created during application startup."""
    return request.app.state.database


_REDACTED_COLUMNS = frozenset({"password_hash"})


def insert_row(connection: Connection, table: Table, values: Mapping[str, Any]) -> Any:
    """Insert one row through SQLAlchemy Core and return its primary key."""

    LOGGER.debug(
        "Insert into %s | Params: %s",
        table.name,
        {key: "***" if key in _REDACTED_COLUMNS else value for key, value in values.items()},
    )
    result = connection.execute(insert(table).values(**values))
    return result.inserted_primary_key[0]
