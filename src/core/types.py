"""Shared typed models.

This module defines immutable data models used by the source reader,
transforms, loader, and SDK layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from core.constants import (
    ALBUM_ENTITY,
    ARTIST_ENTITY,
    DEFAULT_DURATION_UNIT,
    GENRE_ENTITY,
    SOURCE_FILE_NAMES,
    TRACK_ENTITY,
)

RawRow = Mapping[str, str | None]


@dataclass(frozen=True)
class RawCatalog:
    """Raw rows for all four entity types, in source order.

    Attributes:
        genres: Raw genre rows with a ``Name`` field.
        artists: Raw artist rows with ``Name``, ``BirthDate``, ``GenreName``.
        albums: Raw album rows with ``Title``, ``ReleaseDate``, ``ArtistName``.
        tracks: Raw track rows with ``Title``, ``Duration``, ``AlbumTitle``.
    """

    genres: tuple[RawRow, ...]
    artists: tuple[RawRow, ...]
    albums: tuple[RawRow, ...]
    tracks: tuple[RawRow, ...]


@dataclass(frozen=True)
class GenreRow:
    """Validated genre row."""

    name: str


@dataclass(frozen=True)
class ArtistRow:
    """Validated artist row holding its genre natural key."""

    name: str
    birth_date: str | None
    genre_name: str | None


@dataclass(frozen=True)
class AlbumRow:
    """Validated album row holding its artist natural key."""

    title: str
    release_date: str | None
    artist_name: str


@dataclass(frozen=True)
class TrackRow:
    """Validated track row holding its album natural key."""

    title: str
    duration_seconds: int | None
    album_title: str


@dataclass(frozen=True)
class ResolvedArtist:
    """Artist row whose genre reference was resolved to a surrogate id."""

    name: str
    birth_date: str | None
    genre_id: int | None


@dataclass(frozen=True)
class ResolvedAlbum:
    """Album row whose artist reference was resolved to a surrogate id."""

    title: str
    release_date: str | None
    artist_id: int


@dataclass(frozen=True)
class ResolvedTrack:
    """Track row whose album reference was resolved to a surrogate id."""

    title: str
    duration_seconds: int | None
    album_id: int


@dataclass(frozen=True)
class Genre:
    """Stored genre entity."""

    id: int
    name: str


@dataclass(frozen=True)
class Artist:
    """Stored artist entity."""

    id: int
    name: str
    birth_date: str | None
    genre_id: int | None


@dataclass(frozen=True)
class Album:
    """Stored album entity."""

    id: int
    title: str
    release_date: str | None
    artist_id: int


@dataclass(frozen=True)
class Track:
    """Stored track entity."""

    id: int
    title: str
    duration_seconds: int | None
    album_id: int


@dataclass(frozen=True)
class CatalogSnapshot:
    """Point-in-time contents of the normalized store, ordered by id."""

    genres: tuple[Genre, ...]
    artists: tuple[Artist, ...]
    albums: tuple[Album, ...]
    tracks: tuple[Track, ...]


@dataclass(frozen=True)
class SourceLocations:
    """File paths of the four raw sources.

    Attributes:
        genres: Genre CSV path.
        artists: Artist CSV path.
        albums: Album CSV path.
        tracks: Track CSV path.
    """

    genres: Path
    artists: Path
    albums: Path
    tracks: Path

    @classmethod
    def from_directory(cls, source_dir: Path) -> "SourceLocations":
        """Build locations using default file names under one directory."""
        return cls(
            genres=source_dir / SOURCE_FILE_NAMES[GENRE_ENTITY],
            artists=source_dir / SOURCE_FILE_NAMES[ARTIST_ENTITY],
            albums=source_dir / SOURCE_FILE_NAMES[ALBUM_ENTITY],
            tracks=source_dir / SOURCE_FILE_NAMES[TRACK_ENTITY],
        )

    def as_mapping(self) -> Mapping[str, Path]:
        """Return paths keyed by entity name."""
        return {
            GENRE_ENTITY: self.genres,
            ARTIST_ENTITY: self.artists,
            ALBUM_ENTITY: self.albums,
            TRACK_ENTITY: self.tracks,
        }


@dataclass(frozen=True)
class RunOptions:
    """Catalog run options.

    Attributes:
        sources: Locations of the four raw sources.
        database_url: SQLAlchemy URL of the normalized store.
        duration_unit: Unit of raw track durations.
    """

    sources: SourceLocations
    database_url: str
    duration_unit: str = DEFAULT_DURATION_UNIT


@dataclass(frozen=True)
class EntityStats:
    """Per-entity diagnostics for one run.

    Attributes:
        entity: Entity table name.
        read_count: Raw rows read from the source.
        invalid_count: Rows rejected by required-field validation.
        duplicate_count: Rows discarded by first-seen-wins dedup.
        dangling_count: Rows rejected for an unresolvable required reference.
        unlinked_count: Rows kept with an unresolvable optional reference dropped.
        loaded_count: Rows written to the store.
    """

    entity: str
    read_count: int
    invalid_count: int
    duplicate_count: int
    dangling_count: int
    unlinked_count: int
    loaded_count: int

    @property
    def accepted_count(self) -> int:
        """Rows that passed validation and deduplication."""
        return self.read_count - self.invalid_count - self.duplicate_count

    @property
    def rejected_count(self) -> int:
        """Rows excluded for validation or reference failures."""
        return self.invalid_count + self.dangling_count


@dataclass(frozen=True)
class RunReport:
    """Outcome of a successful catalog run.

    Attributes:
        status: Completion status.
        entity_stats: Diagnostics in load order.
    """

    status: str
    entity_stats: tuple[EntityStats, ...]

    def stats_for(self, entity: str) -> EntityStats:
        """Return diagnostics for one entity table."""
        for stats in self.entity_stats:
            if stats.entity == entity:
                return stats
        raise KeyError(entity)
