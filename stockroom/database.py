# stockroom/database.py

import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Generator, Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from stockroom.core.config import settings
from stockroom.core.errors import InvalidInputError, StoreNotInitializedError

logger = logging.getLogger(__name__)

Base = declarative_base()

SQLITE_HEADER = b"SQLite format 3\x00"


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _register_models():
    # Tables are created from Base.metadata, so every model module must be loaded first
    from stockroom.models import (  # noqa: F401
        customers,
        inventory,
        order_items,
        orders,
        products,
        suppliers,
        warehouses,
    )


def required_tables() -> set[str]:
    _register_models()
    return set(Base.metadata.tables)


class Store:
    """
    Owns the in-memory SQLite database.

    A single static connection backs the engine, so every session sees the same
    in-memory database for as long as the store is open. Closing the store
    discards everything that was not exported.

    Sessions on that connection share one transaction: a rollback or close in
    one discards the others' uncommitted writes. Anything that can run
    concurrently (request handlers, export, import, reset) goes through
    ``locked_session`` or holds ``lock``, so only one unit of work touches the
    connection at a time.
    """

    def __init__(self, url: str | None = None):
        self.url = url or settings.DATABASE_URL
        self.engine: Engine | None = None
        self._session_factory = None
        # Plain Lock: FastAPI may enter and exit a yield dependency on different threads
        self.lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def open(self, seed: bool | None = None) -> "Store":
        if self.is_open:
            return self

        if seed is None:
            seed = settings.SEED_SAMPLE_DATA

        _register_models()

        self.engine = create_engine(
            self.url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(self.engine, "connect", _enable_foreign_keys)

        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

        Base.metadata.create_all(self.engine)
        logger.info("Database schema created")

        if seed:
            from stockroom.seed import load_sample_data

            with self.session() as db:
                load_sample_data(db)

        logger.info("Database initialized successfully")
        return self

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database closed")

        self.engine = None
        self._session_factory = None

    def reset(self, seed: bool | None = None) -> "Store":
        with self.lock:
            self.close()
            return self.open(seed=seed)

    def session(self) -> Session:
        if self._session_factory is None:
            raise StoreNotInitializedError()

        return self._session_factory()

    @contextmanager
    def locked_session(self) -> Iterator[Session]:
        """A session that holds the store lock until it is closed."""
        with self.lock:
            db = self.session()
            try:
                yield db
            finally:
                db.close()

    # =========================================================
    # EXPORT / IMPORT
    # =========================================================
    def export_bytes(self) -> bytes:
        with self.lock:
            if self.engine is None:
                raise StoreNotInitializedError()

            with self.engine.connect() as conn:
                data = conn.connection.driver_connection.serialize()

        logger.info(f"Exported database ({len(data)} bytes)")
        return data

    def import_bytes(self, data: bytes) -> None:
        """
        Replace the whole database with a previously exported file.

        The file must be a SQLite database holding every table with at least
        the columns the models map. Anything else is rejected and the current
        contents are kept.
        """
        if not data or not data.startswith(SQLITE_HEADER):
            raise InvalidInputError("File is not a valid database export")

        with self.lock:
            if self.engine is None:
                raise StoreNotInitializedError()

            with self.engine.connect() as conn:
                raw = conn.connection.driver_connection
                previous = raw.serialize()

                try:
                    raw.deserialize(data)
                    problem = _schema_problem(raw)
                except sqlite3.DatabaseError as exc:
                    raw.deserialize(previous)
                    raise InvalidInputError(
                        f"File is not a valid database export: {exc}"
                    ) from exc

                if problem:
                    raw.deserialize(previous)
                    raise InvalidInputError(problem)

        logger.info(f"Imported database ({len(data)} bytes)")


def _schema_problem(raw: sqlite3.Connection) -> str | None:
    """Describe how a deserialized database differs from the mapped schema, if it does."""
    found = {
        row[0]
        for row in raw.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table'"
        ).fetchall()
    }

    missing = required_tables() - found
    if missing:
        return f"Database export is missing tables: {', '.join(sorted(missing))}"

    for name, table in sorted(Base.metadata.tables.items()):
        columns = {row[1] for row in raw.execute(f'PRAGMA table_info("{name}")').fetchall()}
        missing_columns = [column.name for column in table.columns if column.name not in columns]

        if missing_columns:
            return (
                f"Database export table {name} is missing columns: "
                f"{', '.join(missing_columns)}"
            )

    return None


def get_db(request: Request) -> Generator[Session, None, None]:
    with request.app.state.store.locked_session() as db:
        yield db
