"""Unit tests for required-field validation."""

from __future__ import annotations

from core.types import GenreRow
from transforms.validation import (
    clean_text,
    coerce_duration,
    validate_albums,
    validate_artists,
    validate_genres,
    validate_tracks,
)


def test_validate_genres_rejects_null_and_blank_names() -> None:
    """Genres without a usable name should be dropped and counted."""
    rows = [{"Name": "Rock"}, {"Name": None}, {"Name": "   "}, {}]

    result = validate_genres(rows)

    assert result.rows == [GenreRow(name="Rock")] and result.rejected_count == 3


def test_validate_artists_trims_and_nulls_optional_fields() -> None:
    """Optional artist fields should be trimmed, blank becoming None."""
    rows = [{"Name": "  Nina  ", "BirthDate": " ", "GenreName": " Jazz "}]

    result = validate_artists(rows)

    artist = result.rows[0]
    assert (artist.name, artist.birth_date, artist.genre_name) == ("Nina", None, "Jazz")


def test_validate_albums_requires_artist_reference() -> None:
    """Albums missing an artist reference should be rejected entirely."""
    rows = [
        {"Title": "Blue", "ReleaseDate": "1971", "ArtistName": "Joni"},
        {"Title": "Orphan", "ReleaseDate": "2001", "ArtistName": ""},
        {"Title": "", "ReleaseDate": "2002", "ArtistName": "Joni"},
    ]

    result = validate_albums(rows)

    assert [row.title for row in result.rows] == ["Blue"] and result.rejected_count == 2


def test_validate_tracks_converts_minutes_and_keeps_bad_durations() -> None:
    """Minute durations become seconds; unusable durations become None."""
    rows = [
        {"Title": "T1", "Duration": "2", "AlbumTitle": "A"},
        {"Title": "T2", "Duration": "n/a", "AlbumTitle": "A"},
        {"Title": "T3", "Duration": None, "AlbumTitle": "A"},
    ]

    result = validate_tracks(rows)

    assert [row.duration_seconds for row in result.rows] == [120, None, None]
    assert result.rejected_count == 0


def test_validate_tracks_keeps_seconds_when_configured() -> None:
    """Seconds-based sources should be stored unchanged."""
    rows = [{"Title": "T1", "Duration": "200", "AlbumTitle": "A"}]

    result = validate_tracks(rows, duration_unit="seconds")

    assert result.rows[0].duration_seconds == 200


def test_coerce_duration_accepts_integer_forms_only() -> None:
    """Integer values and integer-valued strings should be the only accepted forms."""
    assert coerce_duration(3) == 180
    assert coerce_duration(" 4 ", "seconds") == 4
    assert coerce_duration("3.0", "seconds") == 3
    assert coerce_duration("3.5") is None
    assert coerce_duration("-1") is None
    assert coerce_duration(True) is None


def test_coerce_duration_drops_values_too_large_to_store() -> None:
    """Durations past a 64-bit integer column once in seconds should become None."""
    assert coerce_duration("99999999999999999999") is None
    assert coerce_duration("1e18") is None
    assert coerce_duration(str(2**63 - 1), "seconds") == 2**63 - 1


def test_validate_albums_trims_required_fields() -> None:
    """Required fields should be stored trimmed once the row is accepted."""
    rows = [{"Title": "  Blue ", "ReleaseDate": " ", "ArtistName": " Joni  "}]

    result = validate_albums(rows)

    album = result.rows[0]
    assert (album.title, album.release_date, album.artist_name) == ("Blue", None, "Joni")


def test_clean_text_maps_blank_to_none() -> None:
    """Whitespace-only values should be treated as absent."""
    assert clean_text("  ") is None and clean_text(" x ") == "x"
