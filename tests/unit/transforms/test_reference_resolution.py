"""Unit tests for natural-key reference resolution."""

from __future__ import annotations

from core.types import Album, AlbumRow, Artist, ArtistRow, Genre, TrackRow
from transforms.reference_resolution import (
    ReferenceIndex,
    resolve_album_artists,
    resolve_artist_genres,
    resolve_track_albums,
)


def test_resolve_artist_genres_drops_unknown_optional_reference() -> None:
    """Unknown genres should resolve to no reference, never a dangling id."""
    index = ReferenceIndex.for_genres([Genre(id=1, name="Rock")])
    rows = [
        ArtistRow(name="A", birth_date=None, genre_name="Rock"),
        ArtistRow(name="B", birth_date=None, genre_name="Polka"),
        ArtistRow(name="C", birth_date=None, genre_name=None),
    ]

    result = resolve_artist_genres(rows, index)

    assert [row.genre_id for row in result.rows] == [1, None, None]
    assert result.unlinked_count == 1 and result.dangling_count == 0


def test_resolve_album_artists_rejects_dangling_rows() -> None:
    """Albums naming an unknown artist should be excluded and counted."""
    index = ReferenceIndex.for_artists(
        [Artist(id=7, name="A", birth_date=None, genre_id=None)]
    )
    rows = [
        AlbumRow(title="Kept", release_date=None, artist_name="A"),
        AlbumRow(title="Dropped", release_date=None, artist_name="Nobody"),
    ]

    result = resolve_album_artists(rows, index)

    assert [(row.title, row.artist_id) for row in result.rows] == [("Kept", 7)]
    assert result.dangling_count == 1


def test_resolve_track_albums_rejects_ghost_album() -> None:
    """Tracks referencing an album that was never accepted should be excluded."""
    index = ReferenceIndex.for_albums(
        [Album(id=3, title="Real Album", release_date=None, artist_id=1)]
    )
    rows = [
        TrackRow(title="T0", duration_seconds=None, album_title="Real Album"),
        TrackRow(title="T1", duration_seconds=180, album_title="Ghost Album"),
    ]

    result = resolve_track_albums(rows, index)

    assert [row.title for row in result.rows] == ["T0"] and result.dangling_count == 1


def test_reference_index_matches_trimmed_exact_key() -> None:
    """Lookups should trim the reference but stay case-sensitive."""
    index = ReferenceIndex({"Rock": 1})

    assert index.resolve(" Rock ") == 1
    assert index.resolve("rock") is None
    assert index.resolve("  ") is None
