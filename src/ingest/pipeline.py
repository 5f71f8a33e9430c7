"""Catalog pipeline orchestration.

This module coordinates source reading, validation, deduplication,
reference resolution, and table loading for one batch run. Entity
types are processed strictly as genres, artists, albums, then tracks,
since each later type resolves references against the earlier tables.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.constants import (
    ALBUM_ENTITY,
    ARTIST_ENTITY,
    GENRE_ENTITY,
    STATUS_SUCCEEDED,
    TRACK_ENTITY,
)
from core.errors import ReissueError
from core.logging_config import get_logger
from core.types import (
    AlbumRow,
    ArtistRow,
    EntityStats,
    GenreRow,
    RawCatalog,
    RunOptions,
    RunReport,
    TrackRow,
)
from ingest.source_reader import read_raw_catalog
from store.catalog_loader import CatalogLoader, LoadResult
from store.catalog_store import CatalogStore
from transforms.deduplication import (
    DeduplicationResult,
    deduplicate_albums,
    deduplicate_artists,
    deduplicate_genres,
    deduplicate_tracks,
)
from transforms.reference_resolution import (
    ReferenceIndex,
    ResolutionResult,
    resolve_album_artists,
    resolve_artist_genres,
    resolve_track_albums,
)
from transforms.validation import (
    ValidationResult,
    validate_albums,
    validate_artists,
    validate_genres,
    validate_tracks,
)

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class StagedEntity:
    """Validated and deduplicated rows for one entity type."""

    entity: str
    read_count: int
    validation: ValidationResult
    deduplication: DeduplicationResult


@dataclass(frozen=True)
class StagedCatalog:
    """In-memory staging for all four entity types of one run."""

    genres: StagedEntity
    artists: StagedEntity
    albums: StagedEntity
    tracks: StagedEntity


class CatalogPipelineRunner:
    """Runner for one full-replace catalog rebuild."""

    def __init__(self, options: RunOptions, store: CatalogStore) -> None:
        self._options = options
        self._store = store

    def run(self) -> RunReport:
        """Execute the pipeline and return per-entity diagnostics.

        Raises:
            ReissueSourceError: If a raw source cannot be read; the store is untouched.
            ReissueStoreError: If the store fails; the write phase is rolled back.
        """
        try:
            raw_catalog = read_raw_catalog(self._options.sources)
            staged = stage_catalog(raw_catalog, self._options.duration_unit)
            with self._store.transaction() as loader:
                entity_stats = _load_staged_catalog(loader, staged)
        except ReissueError as error:
            _LOGGER.error("catalog_run_failed", stage=error.stage, error=str(error))
            raise
        report = RunReport(status=STATUS_SUCCEEDED, entity_stats=entity_stats)
        _log_run_completion(self._options, report)
        return report


def run_catalog_pipeline(options: RunOptions, store: CatalogStore | None = None) -> RunReport:
    """Rebuild the normalized catalog from raw sources.

    Args:
        options: Source locations, store URL, and duration unit.
        store: Optional open store; one is created from the URL when omitted.

    Returns:
        Successful run report.

    Raises:
        ReissueSourceError: If a raw source is missing or malformed.
        ReissueStoreError: If the store cannot be reached or written.
    """
    if store is not None:
        return CatalogPipelineRunner(options, store).run()
    owned_store = CatalogStore(options.database_url)
    try:
        return CatalogPipelineRunner(options, owned_store).run()
    finally:
        owned_store.dispose()


def stage_catalog(raw_catalog: RawCatalog, duration_unit: str) -> StagedCatalog:
    """Validate and deduplicate every entity type.

    Args:
        raw_catalog: Raw rows for all entity types.
        duration_unit: Unit of raw track durations.

    Returns:
        Staged rows ready for reference resolution.
    """
    genres = validate_genres(raw_catalog.genres)
    artists = validate_artists(raw_catalog.artists)
    albums = validate_albums(raw_catalog.albums)
    tracks = validate_tracks(raw_catalog.tracks, duration_unit)
    staged = StagedCatalog(
        genres=StagedEntity(
            GENRE_ENTITY, len(raw_catalog.genres), genres, deduplicate_genres(genres.rows)
        ),
        artists=StagedEntity(
            ARTIST_ENTITY, len(raw_catalog.artists), artists, deduplicate_artists(artists.rows)
        ),
        albums=StagedEntity(
            ALBUM_ENTITY, len(raw_catalog.albums), albums, deduplicate_albums(albums.rows)
        ),
        tracks=StagedEntity(
            TRACK_ENTITY, len(raw_catalog.tracks), tracks, deduplicate_tracks(tracks.rows)
        ),
    )
    for entity in (staged.genres, staged.artists, staged.albums, staged.tracks):
        _LOGGER.info(
            "entity_staged",
            entity=entity.entity,
            read_count=entity.read_count,
            invalid_count=entity.validation.rejected_count,
            duplicate_count=entity.deduplication.duplicate_count,
        )
    return staged


def _load_staged_catalog(
    loader: CatalogLoader,
    staged: StagedCatalog,
) -> tuple[EntityStats, ...]:
    """Clear the store and load each type after its parents are committed."""
    loader.clear()
    genre_rows: list[GenreRow] = staged.genres.deduplication.rows
    genre_load = loader.load_genres(genre_rows)

    artist_rows: list[ArtistRow] = staged.artists.deduplication.rows
    artist_resolution = resolve_artist_genres(
        artist_rows, ReferenceIndex.for_genres(genre_load.records)
    )
    artist_load = loader.load_artists(artist_resolution.rows)

    album_rows: list[AlbumRow] = staged.albums.deduplication.rows
    album_resolution = resolve_album_artists(
        album_rows, ReferenceIndex.for_artists(artist_load.records)
    )
    album_load = loader.load_albums(album_resolution.rows)

    track_rows: list[TrackRow] = staged.tracks.deduplication.rows
    track_resolution = resolve_track_albums(
        track_rows, ReferenceIndex.for_albums(album_load.records)
    )
    track_load = loader.load_tracks(track_resolution.rows)

    return (
        _build_entity_stats(staged.genres, ResolutionResult(rows=genre_rows), genre_load),
        _build_entity_stats(staged.artists, artist_resolution, artist_load),
        _build_entity_stats(staged.albums, album_resolution, album_load),
        _build_entity_stats(staged.tracks, track_resolution, track_load),
    )


def _build_entity_stats(
    staged: StagedEntity,
    resolution: ResolutionResult,
    load: LoadResult,
) -> EntityStats:
    """Combine stage counts into one diagnostics row."""
    return EntityStats(
        entity=staged.entity,
        read_count=staged.read_count,
        invalid_count=staged.validation.rejected_count,
        duplicate_count=staged.deduplication.duplicate_count,
        dangling_count=resolution.dangling_count + load.skipped_count,
        unlinked_count=resolution.unlinked_count,
        loaded_count=len(load.records),
    )


def _log_run_completion(options: RunOptions, report: RunReport) -> None:
    """Log run completion with contextual metadata."""
    _LOGGER.info(
        "catalog_run_completed",
        status=report.status,
        duration_unit=options.duration_unit,
        loaded={stats.entity: stats.loaded_count for stats in report.entity_stats},
        rejected={stats.entity: stats.rejected_count for stats in report.entity_stats},
        duplicates={stats.entity: stats.duplicate_count for stats in report.entity_stats},
    )
