"""Database configuration and session management.

Two deployment modes are supported and fixed for the lifetime of the process:

* serverless - no connection may outlive a call, so raw SQL goes through a
  single-shot client and transactions go through an ORM session;
* pooled - a long-lived process keeps a connection pool open.

Clients are built lazily, at most once per process.
"""

import atexit
import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from sqlalchemy import Engine, create_engine, make_url, text
from sqlalchemy.engine import URL, Result
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

from src.config import Settings, get_settings

logger = logging.getLogger(__name__)

Base: Any = declarative_base()

Params = Mapping[str, Any]
Rows = list[dict[str, Any]]

# Largest value a Postgres INTEGER column holds
MAX_INTEGER = 2_147_483_647


class DatabaseMode(StrEnum):
    """How the process is allowed to hold database connections."""

    SERVERLESS = "serverless"
    POOLED = "pooled"


@dataclass(frozen=True)
class Statement:
    """One parameterized statement in a transaction."""

    query: str
    params: Params = field(default_factory=dict)


def _rows(result: Result) -> Rows:
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]


def _engine_args(url: URL) -> dict[str, Any]:
    if url.get_backend_name() == "sqlite":
        # Sessions are handed across threads by the ASGI test client
        return {"connect_args": {"check_same_thread": False}}
    return {}


class SqlClient:
    """Callable raw-SQL executor that opens a fresh connection on every call."""

    def __init__(self, url: URL) -> None:
        self.engine = create_engine(url, poolclass=NullPool, **_engine_args(url))

    def __call__(self, query: str, params: Params | None = None) -> Rows:
        with self.engine.begin() as conn:
            return _rows(conn.execute(text(query), dict(params or {})))


class Database:
    """Owns the SQL client, connection pool, and ORM session factory."""

    def __init__(self, url: str | URL, mode: DatabaseMode = DatabaseMode.POOLED) -> None:
        self.url = make_url(url)
        self.mode = mode
        self._lock = threading.RLock()
        self._sql_client: SqlClient | None = None
        self._pool: Engine | None = None
        self._orm_engine: Engine | None = None
        self._orm: sessionmaker[Session] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        mode = DatabaseMode.SERVERLESS if settings.serverless else DatabaseMode.POOLED
        return cls(settings.database_url, mode)

    @property
    def is_serverless(self) -> bool:
        return self.mode == DatabaseMode.SERVERLESS

    def sql_client(self) -> SqlClient:
        """Get the raw SQL client, building it on first use."""
        if self._sql_client is None:
            with self._lock:
                if self._sql_client is None:
                    try:
                        self._sql_client = SqlClient(self.url)
                    except Exception:
                        logger.error("Failed to initialize SQL client", exc_info=True)
                        raise
                    logger.info(f"SQL client initialized ({self.mode} mode)")
        return self._sql_client

    def connection_pool(self) -> Engine:
        """Get the pooled engine used for multi-statement transactions.

        Raises:
            RuntimeError: In serverless mode, where pooled sockets cannot be kept alive.
        """
        if self.is_serverless:
            raise RuntimeError(
                "Connection pool is not supported in serverless mode. Use the SQL client instead."
            )
        if self._pool is None:
            with self._lock:
                if self._pool is None:
                    pool_args = _engine_args(self.url)
                    if self.url.get_backend_name() != "sqlite":
                        pool_args.update(pool_size=5, max_overflow=10)
                    try:
                        self._pool = create_engine(self.url, pool_pre_ping=True, **pool_args)
                    except Exception:
                        logger.error("Failed to initialize connection pool", exc_info=True)
                        raise
                    logger.info("Database connection pool initialized")
        return self._pool

    def orm_engine(self) -> Engine:
        """Engine the ORM sessions are bound to."""
        if self._orm_engine is None:
            with self._lock:
                if self._orm_engine is None:
                    if self.is_serverless:
                        self._orm_engine = create_engine(
                            self.url, poolclass=NullPool, **_engine_args(self.url)
                        )
                    else:
                        self._orm_engine = self.connection_pool()
        return self._orm_engine

    def orm_client(self) -> sessionmaker[Session]:
        """Get the ORM session factory, building it on first use."""
        if self._orm is None:
            with self._lock:
                if self._orm is None:
                    try:
                        engine = self.orm_engine()
                    except Exception:
                        logger.error("Failed to initialize ORM client", exc_info=True)
                        raise
                    self._orm = sessionmaker(autocommit=False, autoflush=False, bind=engine)
                    logger.info("ORM client initialized")
        return self._orm

    def execute_query(self, query: str, params: Params | None = None) -> Rows:
        """Run one parameterized statement and return its rows."""
        try:
            return self.sql_client()(query, params)
        except Exception:
            logger.error(f"Database query failed: {query} params={dict(params or {})}", exc_info=True)
            raise

    def execute_transaction(self, queries: Sequence[Statement]) -> list[Rows]:
        """Run statements atomically, returning one row list per statement."""
        if self.is_serverless:
            session_factory = self.orm_client()
            try:
                with session_factory() as session, session.begin():
                    return [_rows(session.execute(text(s.query), dict(s.params))) for s in queries]
            except Exception:
                logger.error("Transaction failed", exc_info=True)
                raise

        conn = self.connection_pool().connect()
        try:
            transaction = conn.begin()
            try:
                results = [_rows(conn.execute(text(s.query), dict(s.params))) for s in queries]
                transaction.commit()
            except Exception:
                transaction.rollback()
                logger.error("Transaction failed", exc_info=True)
                raise
            return results
        finally:
            conn.close()

    def close(self) -> None:
        """Dispose every engine this instance built."""
        with self._lock:
            if self._pool is not None:
                self._pool.dispose()
            if self._orm_engine is not None and self._orm_engine is not self._pool:
                self._orm_engine.dispose()
            if self._sql_client is not None:
                self._sql_client.engine.dispose()
            self._sql_client = None
            self._pool = None
            self._orm_engine = None
            self._orm = None
        logger.info("Database connections closed")


settings = get_settings()

db = Database.from_settings(settings)


def get_sql_client() -> SqlClient:
    return db.sql_client()


def get_connection_pool() -> Engine:
    return db.connection_pool()


def get_orm_client() -> sessionmaker[Session]:
    return db.orm_client()


def execute_query(query: str, params: Params | None = None) -> Rows:
    return db.execute_query(query, params)


def execute_transaction(queries: Sequence[Statement]) -> list[Rows]:
    return db.execute_transaction(queries)


def open_session() -> Session:
    """New ORM session; use as a context manager so it is always closed."""
    return get_orm_client()()


def init_db() -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from src import models  # noqa: F401

    Base.metadata.create_all(bind=db.orm_engine())


if not db.is_serverless and not settings.is_test:
    atexit.register(db.close)
