"""Required-field validation transform.

This module filters raw rows into typed, trimmed rows per entity type.
Rows missing a required field are dropped and counted, never raised.
Track durations are coerced to whole seconds; when the source unit is
minutes the value is multiplied by 60, which changes the stored number.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, TypeVar

from core.constants import (
    ALBUM_ENTITY,
    ARTIST_ENTITY,
    DURATION_UNIT_MINUTES,
    GENRE_ENTITY,
    MAX_STORED_INTEGER,
    REQUIRED_FIELDS,
    SECONDS_PER_MINUTE,
    TRACK_ENTITY,
)
from core.types import AlbumRow, ArtistRow, GenreRow, RawRow, TrackRow

RowT = TypeVar("RowT")


@dataclass(frozen=True)
class ValidationResult(Generic[RowT]):
    """Accepted rows and rejection count for one entity type.

    Attributes:
        rows: Accepted rows in input order.
        rejected_count: Rows dropped for a missing required field.
    """

    rows: list[RowT]
    rejected_count: int


def validate_genres(rows: Iterable[RawRow]) -> ValidationResult[GenreRow]:
    """Validate raw genre rows."""
    return _validate(rows, GENRE_ENTITY, lambda row: GenreRow(name=_required(row, "Name")))


def validate_artists(rows: Iterable[RawRow]) -> ValidationResult[ArtistRow]:
    """Validate raw artist rows; the genre reference is optional."""
    return _validate(
        rows,
        ARTIST_ENTITY,
        lambda row: ArtistRow(
            name=_required(row, "Name"),
            birth_date=clean_text(row.get("BirthDate")),
            genre_name=clean_text(row.get("GenreName")),
        ),
    )


def validate_albums(rows: Iterable[RawRow]) -> ValidationResult[AlbumRow]:
    """Validate raw album rows; the artist reference is required."""
    return _validate(
        rows,
        ALBUM_ENTITY,
        lambda row: AlbumRow(
            title=_required(row, "Title"),
            release_date=clean_text(row.get("ReleaseDate")),
            artist_name=_required(row, "ArtistName"),
        ),
    )


def validate_tracks(
    rows: Iterable[RawRow],
    duration_unit: str = DURATION_UNIT_MINUTES,
) -> ValidationResult[TrackRow]:
    """Validate raw track rows and coerce durations to seconds.

    Args:
        rows: Raw track rows.
        duration_unit: Unit of the raw ``Duration`` field.

    Returns:
        Accepted track rows and rejection count.
    """
    return _validate(
        rows,
        TRACK_ENTITY,
        lambda row: TrackRow(
            title=_required(row, "Title"),
            duration_seconds=coerce_duration(row.get("Duration"), duration_unit),
            album_title=_required(row, "AlbumTitle"),
        ),
    )


def is_valid_row(row: RawRow, entity: str) -> bool:
    """Return whether every required field of the entity is present.

    Args:
        row: Raw row mapping.
        entity: Entity table name.

    Returns:
        True when all required fields are non-empty after trimming.
    """
    return all(clean_text(row.get(field_name)) is not None for field_name in REQUIRED_FIELDS[entity])


def clean_text(value: object) -> str | None:
    """Trim a raw field value, mapping null and blank to None.

    Args:
        value: Raw field value.

    Returns:
        Trimmed text, or None when absent or blank.
    """
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def coerce_duration(value: object, duration_unit: str = DURATION_UNIT_MINUTES) -> int | None:
    """Coerce a raw duration into whole seconds.

    Integers and integer-valued strings such as ``"3"`` or ``"3.0"`` are
    accepted. Anything else, including negative values and values too large
    for a 64-bit integer column once converted to seconds, yields None.

    Args:
        value: Raw duration value.
        duration_unit: ``minutes`` or ``seconds``.

    Returns:
        Duration in seconds, or None when not a usable integer.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        amount = value
    else:
        text = clean_text(value)
        if text is None:
            return None
        amount = _parse_whole_number(text)
        if amount is None:
            return None
    if amount < 0:
        return None
    seconds = amount * SECONDS_PER_MINUTE if duration_unit == DURATION_UNIT_MINUTES else amount
    if seconds > MAX_STORED_INTEGER:
        return None
    return seconds


def _parse_whole_number(text: str) -> int | None:
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if not number.is_integer():
        return None
    return int(number)


def _required(row: RawRow, field_name: str) -> str:
    # Only called after is_valid_row accepted the row.
    return str(row[field_name]).strip()


def _validate(
    rows: Iterable[RawRow],
    entity: str,
    build_row: Callable[[RawRow], RowT],
) -> ValidationResult[RowT]:
    accepted: list[RowT] = []
    rejected_count = 0
    for row in rows:
        if not is_valid_row(row, entity):
            rejected_count += 1
            continue
        accepted.append(build_row(row))
    return ValidationResult(rows=accepted, rejected_count=rejected_count)
