"""Catalog table loader.

This module assigns surrogate ids and writes entity rows into the
normalized tables over one open connection. Ids start at 1 per table
and follow input order. Rows whose required parent id was not committed
earlier in the same run are skipped and counted.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Generic, Sequence, TypeVar

from sqlalchemy import Table, delete
from sqlalchemy.engine import Connection

from core.logging_config import get_logger
from core.types import (
    Album,
    Artist,
    Genre,
    GenreRow,
    ResolvedAlbum,
    ResolvedArtist,
    ResolvedTrack,
    Track,
)
from store.catalog_schema import (
    CLEAR_ORDER,
    albums_table,
    artists_table,
    genres_table,
    tracks_table,
)

_LOGGER = get_logger(__name__)

EntityT = TypeVar("EntityT")


@dataclass(frozen=True)
class LoadResult(Generic[EntityT]):
    """Committed entities and skip count for one table.

    Attributes:
        records: Entities written, in id order.
        skipped_count: Rows skipped for a missing required parent.
    """

    records: list[EntityT]
    skipped_count: int = 0


class CatalogLoader:
    """Table-by-table writer for one catalog run.

    Load methods must be called in parent-to-child order; each one
    only accepts parent ids committed by an earlier call.
    """

    def __init__(self, connection: Connection) -> None:
        self._connection = connection
        self._genre_ids: set[int] = set()
        self._artist_ids: set[int] = set()
        self._album_ids: set[int] = set()

    def clear(self) -> None:
        """Delete every row from the four tables, children first."""
        for table in CLEAR_ORDER:
            self._connection.execute(delete(table))
        self._genre_ids.clear()
        self._artist_ids.clear()
        self._album_ids.clear()
        _LOGGER.info("catalog_cleared", tables=[table.name for table in CLEAR_ORDER])

    def load_genres(self, rows: Sequence[GenreRow]) -> LoadResult[Genre]:
        """Assign ids to genres and insert them."""
        genres = [Genre(id=index, name=row.name) for index, row in enumerate(rows, 1)]
        self._insert(genres_table, genres)
        self._genre_ids = {genre.id for genre in genres}
        return LoadResult(records=genres)

    def load_artists(self, rows: Sequence[ResolvedArtist]) -> LoadResult[Artist]:
        """Assign ids to artists and insert them.

        A genre id that was not committed is written as no reference.
        """
        artists = [
            Artist(
                id=index,
                name=row.name,
                birth_date=row.birth_date,
                genre_id=row.genre_id if row.genre_id in self._genre_ids else None,
            )
            for index, row in enumerate(rows, 1)
        ]
        self._insert(artists_table, artists)
        self._artist_ids = {artist.id for artist in artists}
        return LoadResult(records=artists)

    def load_albums(self, rows: Sequence[ResolvedAlbum]) -> LoadResult[Album]:
        """Assign ids to albums with a committed artist and insert them."""
        accepted = [row for row in rows if row.artist_id in self._artist_ids]
        albums = [
            Album(
                id=index,
                title=row.title,
                release_date=row.release_date,
                artist_id=row.artist_id,
            )
            for index, row in enumerate(accepted, 1)
        ]
        self._insert(albums_table, albums)
        self._album_ids = {album.id for album in albums}
        return LoadResult(records=albums, skipped_count=len(rows) - len(accepted))

    def load_tracks(self, rows: Sequence[ResolvedTrack]) -> LoadResult[Track]:
        """Assign ids to tracks with a committed album and insert them."""
        accepted = [row for row in rows if row.album_id in self._album_ids]
        tracks = [
            Track(
                id=index,
                title=row.title,
                duration_seconds=row.duration_seconds,
                album_id=row.album_id,
            )
            for index, row in enumerate(accepted, 1)
        ]
        self._insert(tracks_table, tracks)
        return LoadResult(records=tracks, skipped_count=len(rows) - len(accepted))

    def _insert(self, table: Table, entities: Sequence[object]) -> None:
        if entities:
            self._connection.execute(table.insert(), [asdict(entity) for entity in entities])
        _LOGGER.info("entity_loaded", entity=table.name, row_count=len(entities))
