"""Normalized catalog store.

This module owns the SQLAlchemy engine for the relational store.
It exposes one all-or-nothing write transaction per run plus read
helpers used by the SDK and CLI summary.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from sqlalchemy import create_engine, event, func, select
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from core.errors import ReissueStoreError
from core.logging_config import get_logger
from core.types import Album, Artist, CatalogSnapshot, Genre, Track
from store.catalog_loader import CatalogLoader
from store.catalog_schema import (
    CATALOG_METADATA,
    CLEAR_ORDER,
    albums_table,
    artists_table,
    genres_table,
    tracks_table,
)

_LOGGER = get_logger(__name__)


class CatalogStore:
    """Relational store for the four normalized catalog tables.

    A run writes inside :meth:`transaction`; any database failure rolls
    the whole write phase back, leaving the previous contents intact.
    """

    def __init__(self, database_url: str) -> None:
        """Create the store engine.

        Args:
            database_url: SQLAlchemy database URL.

        Raises:
            ReissueStoreError: If the URL is invalid or its driver is missing.
        """
        self._database_url = database_url
        self._engine = _create_engine(database_url)

    @property
    def engine(self) -> Engine:
        """Underlying SQLAlchemy engine."""
        return self._engine

    @contextmanager
    def transaction(self) -> Iterator[CatalogLoader]:
        """Open one write transaction and yield a loader bound to it.

        Yields:
            Loader for the run's table writes.

        Raises:
            ReissueStoreError: If the store cannot be reached or written.
        """
        try:
            with self._engine.begin() as connection:
                CATALOG_METADATA.create_all(connection)
                yield CatalogLoader(connection)
        except SQLAlchemyError as error:
            _LOGGER.error(
                "catalog_transaction_rolled_back",
                database_url=self._safe_url(),
                error=str(error),
            )
            raise ReissueStoreError(
                f"Failed to write catalog store at {self._safe_url()}: {error}. "
                "The run was rolled back; check the database and retry."
            ) from error

    def read_catalog(self) -> CatalogSnapshot:
        """Read every stored entity ordered by id.

        Returns:
            Current store contents.

        Raises:
            ReissueStoreError: If the store cannot be read.
        """
        try:
            with self._engine.begin() as connection:
                CATALOG_METADATA.create_all(connection)
                genres = [
                    Genre(**row._mapping)
                    for row in connection.execute(select(genres_table).order_by(genres_table.c.id))
                ]
                artists = [
                    Artist(**row._mapping)
                    for row in connection.execute(select(artists_table).order_by(artists_table.c.id))
                ]
                albums = [
                    Album(**row._mapping)
                    for row in connection.execute(select(albums_table).order_by(albums_table.c.id))
                ]
                tracks = [
                    Track(**row._mapping)
                    for row in connection.execute(select(tracks_table).order_by(tracks_table.c.id))
                ]
        except SQLAlchemyError as error:
            raise ReissueStoreError(
                f"Failed to read catalog store at {self._safe_url()}: {error}."
            ) from error
        return CatalogSnapshot(
            genres=tuple(genres),
            artists=tuple(artists),
            albums=tuple(albums),
            tracks=tuple(tracks),
        )

    def table_counts(self) -> dict[str, int]:
        """Return row counts keyed by table name, parents first."""
        try:
            with self._engine.begin() as connection:
                CATALOG_METADATA.create_all(connection)
                return {
                    table.name: int(
                        connection.execute(select(func.count()).select_from(table)).scalar_one()
                    )
                    for table in reversed(CLEAR_ORDER)
                }
        except SQLAlchemyError as error:
            raise ReissueStoreError(
                f"Failed to count catalog rows at {self._safe_url()}: {error}."
            ) from error

    def dispose(self) -> None:
        """Release pooled database connections."""
        self._engine.dispose()

    def _safe_url(self) -> str:
        return make_url(self._database_url).render_as_string(hide_password=True)


def _create_engine(database_url: str) -> Engine:
    """Create an engine, enabling foreign keys for SQLite.

    Args:
        database_url: SQLAlchemy database URL.

    Returns:
        Configured engine.

    Raises:
        ReissueStoreError: If engine creation fails.
    """
    try:
        url = make_url(database_url)
        if url.get_backend_name() == "sqlite":
            _ensure_sqlite_parent_dir(url.database)
        engine = create_engine(url)
    except (SQLAlchemyError, OSError, ImportError) as error:
        raise ReissueStoreError(
            f"Failed to open catalog store '{database_url}': {error}. "
            "Set REISSUE_DATABASE_URL to a reachable SQLAlchemy URL."
        ) from error
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _ensure_sqlite_parent_dir(database: str | None) -> None:
    if not database or database == ":memory:" or database.startswith("file:"):
        return
    Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
