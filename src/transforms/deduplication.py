"""Natural-key deduplication transform.

This module collapses validated rows to one row per dedup key.
The first row seen for a key wins; later ones are discarded and counted.
Artists and albums are keyed by name or title alone, so two real-world
artists sharing a name collapse into one. Tracks carry no dedup key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Iterable, TypeVar

from core.types import AlbumRow, ArtistRow, GenreRow, TrackRow

RowT = TypeVar("RowT")


@dataclass(frozen=True)
class DeduplicationResult(Generic[RowT]):
    """Distinct rows and discard count for one entity type.

    Attributes:
        rows: Canonical rows in first-seen order.
        duplicate_count: Rows discarded as duplicates.
    """

    rows: list[RowT]
    duplicate_count: int


def remove_duplicates(
    rows: Iterable[RowT],
    key: Callable[[RowT], Hashable],
) -> DeduplicationResult[RowT]:
    """Keep the first row for each dedup key.

    Args:
        rows: Validated rows in input order.
        key: Dedup key function.

    Returns:
        Ordered rows with later duplicates removed.
    """
    unique_rows: list[RowT] = []
    seen_keys: set[Hashable] = set()
    duplicate_count = 0
    for row in rows:
        row_key = key(row)
        if row_key in seen_keys:
            duplicate_count += 1
            continue
        seen_keys.add(row_key)
        unique_rows.append(row)
    return DeduplicationResult(rows=unique_rows, duplicate_count=duplicate_count)


def deduplicate_genres(rows: Iterable[GenreRow]) -> DeduplicationResult[GenreRow]:
    """Deduplicate genres by exact, case-sensitive trimmed name."""
    return remove_duplicates(rows, lambda row: row.name)


def deduplicate_artists(rows: Iterable[ArtistRow]) -> DeduplicationResult[ArtistRow]:
    """Deduplicate artists by trimmed name only."""
    return remove_duplicates(rows, lambda row: row.name)


def deduplicate_albums(rows: Iterable[AlbumRow]) -> DeduplicationResult[AlbumRow]:
    """Deduplicate albums by trimmed title only, not scoped by artist."""
    return remove_duplicates(rows, lambda row: row.title)


def deduplicate_tracks(rows: Iterable[TrackRow]) -> DeduplicationResult[TrackRow]:
    """Pass tracks through; repeated titles on one album all survive."""
    return DeduplicationResult(rows=list(rows), duplicate_count=0)
