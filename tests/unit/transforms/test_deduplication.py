"""Unit tests for natural-key deduplication."""

from __future__ import annotations

from core.types import AlbumRow, ArtistRow, GenreRow, TrackRow
from transforms.deduplication import (
    deduplicate_albums,
    deduplicate_artists,
    deduplicate_genres,
    deduplicate_tracks,
)


def test_deduplicate_genres_is_case_sensitive() -> None:
    """Genres differing only by case should both survive."""
    rows = [GenreRow(name="Rock"), GenreRow(name="rock"), GenreRow(name="Rock")]

    result = deduplicate_genres(rows)

    assert [row.name for row in result.rows] == ["Rock", "rock"]
    assert result.duplicate_count == 1


def test_deduplicate_artists_keeps_first_seen_row() -> None:
    """The first artist row for a name should win the tie-break."""
    rows = [
        ArtistRow(name="A", birth_date="1970", genre_name="Rock"),
        ArtistRow(name="A", birth_date="1980", genre_name="Jazz"),
    ]

    result = deduplicate_artists(rows)

    assert result.rows == [rows[0]] and result.duplicate_count == 1


def test_deduplicate_albums_ignores_artist() -> None:
    """Albums are keyed by title alone, even across artists."""
    rows = [
        AlbumRow(title="Greatest Hits", release_date=None, artist_name="A"),
        AlbumRow(title="Greatest Hits", release_date=None, artist_name="B"),
    ]

    result = deduplicate_albums(rows)

    assert [row.artist_name for row in result.rows] == ["A"]


def test_deduplicate_tracks_keeps_repeated_titles() -> None:
    """Tracks carry no dedup key, so repeated titles all survive."""
    rows = [
        TrackRow(title="Intro", duration_seconds=60, album_title="X"),
        TrackRow(title="Intro", duration_seconds=60, album_title="X"),
    ]

    result = deduplicate_tracks(rows)

    assert len(result.rows) == 2 and result.duplicate_count == 0
